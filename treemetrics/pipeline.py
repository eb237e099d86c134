import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .analyzers.similarity import ProfileSimilarityAnalyzer
from .metrics.node_metric import NodeMetric
from .rendering.sentence import RenderFlag, render
from .treebank.document import TreebankDocument
from .treebank.loader import load_document
from .treebank.statistics import tree_profile
from .utils.logger import setup_logger
from .utils.progress import ProgressTracker

logger = setup_logger(__name__)


class Pipeline:
    """
    treemetrics end-to-end pipeline.

    Stages:
      1. Load     - treebank XML to TreebankDocument
      2. Measure  - apply every NodeMetric to every sentence
      3. Compare  - attach tree-profile similarity vectors across documents
      4. Output   - serialize one JSON file per document

    Usage:
        p = Pipeline(output_dir=Path("output"), metrics=build_metrics(config))
        results = p.run(xml_paths)
    """

    def __init__(
        self,
        metrics: Sequence[NodeMetric],
        output_dir: Union[str, Path] = "output",
        render_flags: int = RenderFlag.NONE,
        save: bool = True,
        progress: bool = True,
    ):
        self.metrics = list(metrics)
        self.output_dir = Path(output_dir)
        self.render_flags = render_flags
        self.save = save
        self.progress = progress
        self._similarity = ProfileSimilarityAnalyzer()

        if self.save:
            self.output_dir.mkdir(parents=True, exist_ok=True)

    def run(self, paths: Sequence[Union[str, Path]]) -> List[Optional[Dict[str, Any]]]:
        """
        Run the pipeline on a list of treebank files.

        Returns one result dict per input path; documents that failed to load
        or measure are None and logged.
        """
        paths = [Path(p) for p in paths]
        results: List[Optional[Dict[str, Any]]] = []

        with ProgressTracker(disable=not self.progress) as tracker:
            task = tracker.add_task(f"Measuring {len(paths)} treebanks", total=len(paths))
            for path in paths:
                results.append(self._process_one(path))
                tracker.update(task, advance=1)

        return self._finish(results)

    def run_documents(
        self, documents: Sequence[TreebankDocument]
    ) -> List[Optional[Dict[str, Any]]]:
        """Like run, for documents that are already loaded."""
        results: List[Optional[Dict[str, Any]]] = []
        for document in documents:
            try:
                results.append(self.measure(document))
            except Exception as e:
                logger.error(f"Measuring failed for {document.source_path}: {e}")
                results.append(None)
        return self._finish(results)

    def _finish(
        self, results: List[Optional[Dict[str, Any]]]
    ) -> List[Optional[Dict[str, Any]]]:
        """Attach similarity vectors and save the successful results."""
        valid = [r for r in results if r is not None]
        if valid:
            self._similarity.compute_batch(valid)

        if self.save:
            for result in valid:
                self._save_json(result)

        return results

    def _process_one(self, path: Path) -> Optional[Dict[str, Any]]:
        """Load and measure one document. Returns None on failure."""
        try:
            document = load_document(path)
        except Exception as e:
            logger.error(f"Loading failed for {path}: {e}")
            return None

        try:
            return self.measure(document)
        except Exception as e:
            logger.error(f"Measuring failed for {path}: {e}")
            return None

    def measure(self, document: TreebankDocument) -> Dict[str, Any]:
        """Apply the metrics to a loaded document and build its result dict."""
        names = [m.name for m in self.metrics]
        sentences = []
        for sentence in document.iter_sentences():
            values = sentence.apply(self.metrics)
            sentences.append(
                {
                    "id": sentence.sentence_id,
                    "text": render(sentence, self.render_flags),
                    "values": dict(zip(names, values)),
                    "profile": tree_profile(sentence),
                }
            )

        summary = {}
        for name in names:
            column = [s["values"][name] for s in sentences]
            summary[name] = sum(column) / len(column) if column else 0.0

        return {
            "source_path": document.source_path,
            "document_id": document.id,
            "title": document.get_title(),
            "metric_names": names,
            "sentences": sentences,
            "summary": summary,
            "similarity_vector": None,
        }

    def _save_json(self, result: Dict[str, Any]) -> Path:
        """Serialize a result dict to <output_dir>/<stem>.json."""
        stem = Path(result["source_path"]).stem or result["document_id"]
        out_path = self.output_dir / f"{stem}.json"

        try:
            out_path.write_text(
                json.dumps(result, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            logger.info(f"Saved results to {out_path}")
        except Exception as e:
            logger.error(f"Failed to save JSON for {result['source_path']}: {e}")

        return out_path
