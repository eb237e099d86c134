import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Union

from .document import TreebankDocument
from .loader import collect_treebank_files, load_document
from ..output.sink import format_sentence_line
from ..utils.logger import setup_logger
from ..utils.progress import ProgressTracker

logger = setup_logger(__name__)


class TreebankCollection:
    """
    A set of treebank documents processed together.

    Usage:
        collection = TreebankCollection.from_directory("treebanks/")
        results = collection.apply(metrics, sink=ConsoleSink())

    Documents are processed one at a time; results are nested as
    results[document][sentence][metric].
    """

    def __init__(self, documents: Optional[List[TreebankDocument]] = None, name: str = ""):
        self.name = name
        self.documents: List[TreebankDocument] = list(documents or [])

    @classmethod
    def from_directory(
        cls, path: Union[str, Path], pattern: str = "*.xml"
    ) -> "TreebankCollection":
        """Load every treebank file under path; unreadable files are skipped."""
        collection = cls(name=Path(path).name)
        collection.load(collect_treebank_files(path, pattern))
        return collection

    def load(self, paths: Sequence[Union[str, Path]]) -> int:
        """Load the given files into the collection. Returns how many loaded."""
        loaded = 0
        for path in paths:
            try:
                self.documents.append(load_document(path))
                loaded += 1
            except Exception as e:
                logger.error(f"Could not load treebank {path}: {e}")
        logger.info(f"{loaded} treebanks loaded from collection {self.name!r}")
        return loaded

    def apply(
        self,
        metrics: Union[Any, Sequence[Any]],
        sink=None,
        progress: bool = True,
        precision: int = 2,
    ) -> List[List[List[float]]]:
        """
        Apply the metrics to every sentence of every document.

        With a sink, the titles are listed first, then each document gets a
        "% <title> (<id>)" header and one line per sentence prefixed with the
        1-based document number.
        """
        if sink is not None:
            for document in self.documents:
                sink.write_line(f" {{'{document.get_title()}'}}")

        results = []
        with ProgressTracker(disable=not progress) as tracker:
            task = tracker.add_task(
                f"Processing {len(self.documents)} treebanks",
                total=len(self.documents),
            )
            for number, document in enumerate(self.documents, start=1):
                if sink is not None:
                    sink.write_line(f"% {document.get_title()} ({document.id})")
                    sink.write_line("")

                document_results = []
                for sentence in document.iter_sentences():
                    values = sentence.apply(metrics)
                    document_results.append(values)
                    if sink is not None:
                        sink.write_line(
                            format_sentence_line(
                                sentence.sentence_id,
                                values,
                                prefix=str(number),
                                precision=precision,
                            )
                        )
                results.append(document_results)
                tracker.update(task, advance=1)

        return results

    def get_num_of_nodes(self) -> int:
        return sum(d.get_num_of_nodes() for d in self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[TreebankDocument]:
        return iter(self.documents)
