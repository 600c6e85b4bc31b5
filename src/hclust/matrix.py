"""Cluster set backed by a dense numpy distance matrix."""

import logging
from typing import Hashable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform

from .cluster_set import ClusterSet, OptimizedClusterSet

logger = logging.getLogger(__name__)


class MatrixClusterSet(ClusterSet, OptimizedClusterSet):
    """
    Cluster set over a square distance matrix.

    Items are the matrix labels (row indices unless ``labels`` is given).
    Merges use the same swap-to-end policy as ``DistanceMapClusterSet``.
    Distances for a left-hand item are read from one matrix row, so this set
    implements ``each_item_distance`` directly.

    Parameters:
        matrix: Square (n, n) array of pairwise distances
        labels: Optional sequence of n unique hashable item labels
    """

    def __init__(self, matrix, labels: Optional[Sequence[Hashable]] = None):
        matrix = np.asarray(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Distance matrix must be square, got shape {matrix.shape}")

        n = matrix.shape[0]
        if labels is None:
            labels = list(range(n))
        else:
            labels = list(labels)
            if len(labels) != n:
                raise ValueError(
                    f"Expected {n} labels for a {n}x{n} matrix, got {len(labels)}"
                )
            if len(set(labels)) != n:
                raise ValueError("Labels must be unique")

        self.matrix = matrix
        self.labels: List[Hashable] = labels
        self._rows = {label: idx for idx, label in enumerate(labels)}
        self.clusters: List[List[Hashable]] = [[label] for label in labels]

    @classmethod
    def from_vectors(
        cls,
        vectors,
        metric: str = "euclidean",
        labels: Optional[Sequence[Hashable]] = None,
    ) -> "MatrixClusterSet":
        """
        Build a cluster set from observation vectors.

        Args:
            vectors: (n_samples, n_features) array
            metric: Any metric accepted by ``scipy.spatial.distance.pdist``
            labels: Optional item labels, one per row

        Returns:
            MatrixClusterSet with one singleton cluster per row
        """
        vectors = np.asarray(vectors, dtype=float)
        if vectors.ndim != 2:
            raise ValueError(f"Expected a 2-D array of vectors, got shape {vectors.shape}")

        logger.debug(f"Computing pairwise distances with metric: {metric}")
        if len(vectors) < 2:
            matrix = np.zeros((len(vectors), len(vectors)))
        else:
            matrix = squareform(pdist(vectors, metric=metric))
        return cls(matrix, labels=labels)

    def count(self) -> int:
        return len(self.clusters)

    def each_cluster(self, start: int = -1) -> Iterator[int]:
        return iter(range(start + 1, len(self.clusters)))

    def each_item(self, cluster: int) -> Iterator[Hashable]:
        return iter(self.clusters[cluster])

    def distance(self, c1: int, c2: int, item1: Hashable, item2: Hashable) -> float:
        return float(self.matrix[self._rows[item1], self._rows[item2]])

    def each_item_distance(
        self, c1: int, c2: int, item1: Hashable
    ) -> Iterator[Tuple[Hashable, float]]:
        members = self.clusters[c2]
        row = self.matrix[self._rows[item1]]
        values = row[[self._rows[item2] for item2 in members]]
        return zip(members, values.tolist())

    def merge(self, cluster1: int, cluster2: int) -> Tuple[int, int]:
        i, j = sorted((cluster1, cluster2))

        last = len(self.clusters) - 1
        if j < last:
            self.clusters[last], self.clusters[j] = self.clusters[j], self.clusters[last]
            j = last

        self.clusters[i].extend(self.clusters[j])
        del self.clusters[j]
        return i, last

    def labels_array(self) -> np.ndarray:
        """Cluster index of every item, in original row order."""
        result = np.full(len(self.labels), -1, dtype=np.int64)
        for cluster_id, members in enumerate(self.clusters):
            for item in members:
                result[self._rows[item]] = cluster_id
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.clusters!r})"
