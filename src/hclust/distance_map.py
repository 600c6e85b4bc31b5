"""Cluster set backed by a map of maps of item distances."""

from typing import Dict, Hashable, Iterator, List, Mapping, Optional, Tuple

from .cluster_set import ClusterSet

# DistanceMap maps item pairs to the distance between them. It does not have
# to be symmetric, but every pair should be defined in at least one direction.
DistanceMap = Mapping[Hashable, Mapping[Hashable, float]]


class DistanceMapClusterSet(ClusterSet):
    """
    In-memory cluster set over a distance map.

    One singleton cluster is created for every unique item found in the outer
    or inner keys, in first-seen order. A missing ``(a, b)`` distance is looked
    up as ``(b, a)``, then falls back to ``default_distance``.

    Example:
        >>> clusters = DistanceMapClusterSet({
        ...     "a": {"b": 0.0, "c": 0.0, "d": 1.0, "e": 0.4},
        ...     "b": {"c": 0.1, "d": 0.9, "e": 0.4},
        ...     "c": {"d": 0.9, "e": 0.2},
        ...     "d": {"e": 0.1},
        ... })
        >>> cluster(clusters, Threshold(0.4), CompleteLinkage())
        >>> cluster_members(clusters)
        [['a', 'b', 'c'], ['e', 'd']]
    """

    def __init__(
        self,
        data: Optional[DistanceMap] = None,
        default_distance: float = 1.0,
    ):
        self.data: DistanceMap = data or {}
        self.default_distance = default_distance
        self.clusters: List[List[Hashable]] = []

        seen = set()
        for item1, row in self.data.items():
            for item in (item1, *row.keys()):
                if item not in seen:
                    seen.add(item)
                    self.clusters.append([item])

    def count(self) -> int:
        return len(self.clusters)

    def each_cluster(self, start: int = -1) -> Iterator[int]:
        return iter(range(start + 1, len(self.clusters)))

    def each_item(self, cluster: int) -> Iterator[Hashable]:
        return iter(self.clusters[cluster])

    def distance(self, c1: int, c2: int, item1: Hashable, item2: Hashable) -> float:
        row = self.data.get(item1)
        if row is not None and item2 in row:
            return row[item2]
        row = self.data.get(item2)
        if row is not None and item1 in row:
            return row[item1]
        return self.default_distance

    def merge(self, cluster1: int, cluster2: int) -> Tuple[int, int]:
        i, j = sorted((cluster1, cluster2))

        # move the to-be-merged cluster to the end of the list
        last = len(self.clusters) - 1
        if j < last:
            self.clusters[last], self.clusters[j] = self.clusters[j], self.clusters[last]
            j = last

        self.clusters[i].extend(self.clusters[j])
        del self.clusters[j]
        return i, last

    def to_dict(self) -> Dict[int, List[Hashable]]:
        """Current membership keyed by cluster index."""
        return {idx: list(members) for idx, members in enumerate(self.clusters)}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.clusters!r})"
