"""Agglomerative clustering engine.

The engine repeatedly scores every pair of live clusters with a linkage
strategy, merges the best pair if the checker allows it, and keeps a cache of
pair scores. When the linkage supplies Lance-Williams coefficients the cache
is carried across merges and only the distances to the merged cluster are
recomputed, from the pre-merge scores, instead of rescanning items.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .checker import Checker
from .cluster_set import ClusterSet, as_optimized
from .linkage import LinkageType

logger = logging.getLogger(__name__)


def _key(i: int, j: int) -> Tuple[int, int]:
    return (i, j) if i < j else (j, i)


class HClustering:
    """
    Hierarchical clustering wrapper for an arbitrary cluster set.

    One instance holds the state of one run: the pair-score cache and the
    linkage accumulator. Neither may be shared with a concurrent run.

    Attributes:
        cluster_set: Data source that is enumerated and merged in place
        checker: Stop criteria consulted before every merge
        linkage: Method used to score cluster pairs
        merges: Number of merges performed so far
    """

    def __init__(
        self,
        cluster_set: ClusterSet,
        checker: Checker,
        linkage: LinkageType,
    ):
        self.cluster_set = cluster_set
        self.checker = checker
        self.linkage = linkage
        self.merges = 0

        self._items = as_optimized(cluster_set)
        self._cache: Dict[Tuple[int, int], float] = {}

    def dist(self, i: int, j: int) -> float:
        """Linkage score between clusters ``i`` and ``j``, memoized."""
        key = _key(i, j)
        score = self._cache.get(key)
        if score is None:
            score = self._accumulate(*key)
            self._cache[key] = score
        return score

    def _accumulate(self, i: int, j: int) -> float:
        """Stream every cross-cluster item distance into the linkage."""
        self.linkage.reset()
        for item1 in self.cluster_set.each_item(i):
            for item2, d in self._items.each_item_distance(i, j, item1):
                self.linkage.put(item1, item2, d)
        return self.linkage.get()

    def _coefficients(self, i: int, j: int) -> Sequence[float]:
        if self.linkage.size_dependent:
            self._accumulate(i, j)
        return self.linkage.lw_params()

    def merge_next(self) -> bool:
        """
        Merge the best pair of clusters if the checker allows it.

        Every pair is scored and the lowest score wins; ties go to the first
        pair found in enumeration order.

        Returns:
            True if a pair was merged, False if there was no candidate pair
            or the checker vetoed the merge
        """
        best_score = math.inf
        best_pair: Optional[Tuple[int, int]] = None

        for c1 in self.cluster_set.each_cluster(-1):
            for c2 in self.cluster_set.each_cluster(c1):
                score = self.dist(c1, c2)
                if score < best_score:
                    best_score = score
                    best_pair = (c1, c2)

        if best_pair is None:
            return False

        i, j = best_pair
        if not self.checker.check(self.cluster_set, i, j, best_score):
            logger.debug(f"Checker stopped clustering before ({i},{j}) ~~ {best_score}")
            return False

        coefficients = list(self._coefficients(i, j))
        if len(coefficients) == 4:
            self._merge_and_update(i, j, coefficients)
        else:
            # no usable recurrence: every score is recomputed next round
            self.cluster_set.merge(i, j)
            self._cache.clear()

        self.merges += 1
        logger.debug(
            f"Merged ({i},{j}) ~~ {best_score}, "
            f"{self.cluster_set.count()} clusters left"
        )
        return True

    def _merge_and_update(self, i: int, j: int, coefficients: List[float]) -> None:
        """
        Merge clusters ``i`` and ``j`` and update every affected cached score.

        1) snapshot d(i,k), d(j,k) and d(i,j) for every other cluster k
        2) merge through the cluster set
        3) move the cache entries of a relocated cluster, purge the vacated index
        4) apply the Lance-Williams recurrence for the merged cluster
        """
        cs = self.cluster_set
        n_before = cs.count()

        others = [k for k in cs.each_cluster(-1) if k != i and k != j]
        d_ik = {k: self.dist(i, k) for k in others}
        d_jk = {k: self.dist(j, k) for k in others}
        d_ij = self.dist(i, j)

        kept, vacated = cs.merge(i, j)
        absorbed = j if kept == i else i
        relocated = vacated != absorbed

        if relocated:
            # the cluster formerly at `vacated` now lives at `absorbed`
            for k in range(n_before):
                if k == vacated or k == absorbed:
                    continue
                score = self._cache.pop(_key(vacated, k), None)
                if score is None:
                    self._cache.pop(_key(absorbed, k), None)
                else:
                    self._cache[_key(absorbed, k)] = score

        for k in range(n_before):
            if k != vacated:
                self._cache.pop(_key(vacated, k), None)

        alpha_i, alpha_j, beta, gamma = coefficients
        for k in others:
            post = absorbed if relocated and k == vacated else k
            dik = d_ik[k]
            djk = d_jk[k]
            self._cache[_key(kept, post)] = (
                alpha_i * dik
                + alpha_j * djk
                + beta * d_ij
                + gamma * abs(dik - djk)
            )

    def run(self) -> int:
        """
        Merge until one cluster remains or the checker stops the run.

        Returns:
            Number of merges performed by this call
        """
        start = self.merges
        logger.info(
            f"Clustering {self.cluster_set.count()} clusters "
            f"with {self.linkage!r} and {self.checker!r}"
        )

        while self.cluster_set.count() > 1:
            if not self.merge_next():
                break

        performed = self.merges - start
        logger.info(
            f"Clustering finished after {performed} merges, "
            f"{self.cluster_set.count()} clusters"
        )
        return performed


def cluster(cluster_set: ClusterSet, checker: Checker, linkage: LinkageType) -> None:
    """
    Cluster ``cluster_set`` in place until the checker stops the run.

    Partial progress is kept when the run stops early.

    Example:
        >>> clusters = DistanceMapClusterSet({"a": {"b": 0.0, "c": 1.0}})
        >>> cluster(clusters, Threshold(0.4), CompleteLinkage())
        >>> clusters.count()
        2
    """
    HClustering(cluster_set, checker, linkage).run()
