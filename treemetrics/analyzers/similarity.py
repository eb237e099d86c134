import logging
from typing import Any, Dict, List, Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity
from sklearn.preprocessing import StandardScaler

logger = logging.getLogger(__name__)


class ProfileSimilarityAnalyzer:
    """
    Compares documents by their tree-metric profiles.

    A document's profile is the mean of each metric over its sentences (the
    "summary" of a pipeline result). Profiles are rescaled per metric to unit
    variance across the batch so that large-valued metrics (node counts) do
    not drown small ones (normalized wavelet sums), then compared with cosine
    similarity.
    """

    def _profile_matrix(self, results: Sequence[Dict[str, Any]]) -> np.ndarray:
        names = _shared_metric_names(results)
        rows = [[r["summary"].get(name, 0.0) for name in names] for r in results]
        if not names:
            return np.zeros((len(results), 0))
        matrix = np.asarray(rows, dtype=float)
        return StandardScaler(with_mean=False).fit_transform(matrix)

    def compute_batch(self, results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Attach a "similarity_vector" (the rescaled profile) to every result.
        Returns the same list.
        """
        if not results:
            return results

        try:
            matrix = self._profile_matrix(results)
            for i, result in enumerate(results):
                result["similarity_vector"] = matrix[i].tolist()
        except Exception as e:
            logger.error(f"Profile vector computation failed: {e}")

        return results

    def similarity_matrix(self, results: Sequence[Dict[str, Any]]) -> List[List[float]]:
        """Pairwise cosine similarity of the documents' profiles."""
        if not results:
            return []
        matrix = self._profile_matrix(results)
        if matrix.shape[1] == 0:
            return [[0.0] * len(results) for _ in results]
        return cosine_similarity(matrix).tolist()


def _shared_metric_names(results: Sequence[Dict[str, Any]]) -> List[str]:
    """Metric names present in every result, in the order of the first one."""
    if not results:
        return []
    names = list(results[0].get("summary", {}))
    for result in results[1:]:
        present = set(result.get("summary", {}))
        names = [n for n in names if n in present]
    return names
