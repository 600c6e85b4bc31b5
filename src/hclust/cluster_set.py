"""Data-source contract consumed by the clustering engine.

A ``ClusterSet`` is implemented by the caller. Clusters are identified by
dense integer indices that are only valid for the current live set: a merge
may move some other live cluster's identity into the slot freed by the
absorbed cluster. Items inside clusters are opaque hashable tokens.

Implementations must enumerate clusters in a deterministic order within a
run, and must not be mutated by anything other than the engine while a run
is in progress. Sharing one set between concurrent runs is not supported.
"""

from abc import ABC, abstractmethod
from typing import Generic, Hashable, Iterator, List, Tuple, TypeVar

ClusterItem = TypeVar("ClusterItem", bound=Hashable)


class ClusterSet(ABC, Generic[ClusterItem]):
    """Abstract data source for agglomerative clustering."""

    @abstractmethod
    def count(self) -> int:
        """Number of live clusters."""

    @abstractmethod
    def each_cluster(self, start: int = -1) -> Iterator[int]:
        """
        Enumerate every live cluster index after ``start``.

        Use ``start=-1`` to enumerate all clusters. The order must be stable
        within a single pass.
        """

    @abstractmethod
    def each_item(self, cluster: int) -> Iterator[ClusterItem]:
        """Enumerate every item of ``cluster``."""

    @abstractmethod
    def distance(
        self, c1: int, c2: int, item1: ClusterItem, item2: ClusterItem
    ) -> float:
        """Distance between ``item1`` in cluster ``c1`` and ``item2`` in ``c2``."""

    @abstractmethod
    def merge(self, cluster1: int, cluster2: int) -> Tuple[int, int]:
        """
        Merge two clusters, reducing ``count()`` by one.

        Returns:
            ``(kept, swapped_in)``: ``kept`` is the index now holding the merged
            cluster. ``swapped_in`` is the index vacated by the merge; if another
            live cluster was relocated to keep indices dense it was moved from
            ``swapped_in`` into the slot of the absorbed cluster. After the
            merge ``swapped_in`` is never a live index.
        """


class OptimizedClusterSet(ABC, Generic[ClusterItem]):
    """
    Optional capability for batching distances per left-hand item.

    ``each_item_distance(c1, c2, item1)`` is equivalent to::

        for item2 in cs.each_item(c2):
            yield item2, cs.distance(c1, c2, item1, item2)

    but lets implementors prepare ``(c1, item1)`` once for the whole of ``c2``.
    Any object defining ``each_item_distance`` counts as an implementation.
    """

    @abstractmethod
    def each_item_distance(
        self, c1: int, c2: int, item1: ClusterItem
    ) -> Iterator[Tuple[ClusterItem, float]]:
        """Yield ``(item2, distance)`` for every item of ``c2`` against ``item1``."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is OptimizedClusterSet:
            method = getattr(subclass, "each_item_distance", None)
            if callable(method):
                return True
        return NotImplemented


class DefaultOptimizedClusterSet(OptimizedClusterSet[ClusterItem]):
    """Generic ``each_item_distance`` built from the base contract."""

    def __init__(self, cluster_set: ClusterSet[ClusterItem]):
        self.cluster_set = cluster_set

    def each_item_distance(
        self, c1: int, c2: int, item1: ClusterItem
    ) -> Iterator[Tuple[ClusterItem, float]]:
        for item2 in self.cluster_set.each_item(c2):
            yield item2, self.cluster_set.distance(c1, c2, item1, item2)


def as_optimized(cluster_set: ClusterSet) -> OptimizedClusterSet:
    """Return ``cluster_set`` itself if it is optimized, else a generic adapter."""
    if isinstance(cluster_set, OptimizedClusterSet):
        return cluster_set
    return DefaultOptimizedClusterSet(cluster_set)


def cluster_members(cluster_set: ClusterSet) -> List[List[ClusterItem]]:
    """Snapshot the members of every live cluster, in enumeration order."""
    return [list(cluster_set.each_item(c)) for c in cluster_set.each_cluster(-1)]
