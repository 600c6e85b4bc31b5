"""Stopping criteria for the merge loop.

A checker is asked once before every prospective merge and may veto it.
Checkers combine by wrapping one another, which is also the hook for callers
that want to collect the merge tree.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .cluster_set import ClusterSet

logger = logging.getLogger(__name__)


class Checker(ABC):
    """Decision criteria used to stop clustering."""

    @abstractmethod
    def check(self, clusters: ClusterSet, i: int, j: int, next_score: float) -> bool:
        """
        Decide whether to merge clusters ``i`` and ``j``.

        Args:
            clusters: The current cluster set, before the merge
            i: First candidate cluster index
            j: Second candidate cluster index
            next_score: Linkage score of the candidate pair

        Returns:
            True to continue clustering, False to stop
        """


class Threshold(Checker):
    """Stops before a merge whose score exceeds ``limit``."""

    def __init__(self, limit: float):
        self.limit = limit

    def check(self, clusters: ClusterSet, i: int, j: int, next_score: float) -> bool:
        return next_score <= self.limit

    def __repr__(self) -> str:
        return f"Threshold({self.limit!r})"


class MaxClusters(Checker):
    """Stops once the number of clusters has come down to ``limit``."""

    def __init__(self, limit: int):
        self.limit = limit

    def check(self, clusters: ClusterSet, i: int, j: int, next_score: float) -> bool:
        return clusters.count() > self.limit

    def __repr__(self) -> str:
        return f"MaxClusters({self.limit!r})"


class TreeLog(Checker):
    """Logs every merge decision of the wrapped checker, without changing it."""

    def __init__(
        self,
        checker: Checker,
        log: Optional[logging.Logger] = None,
        level: int = logging.INFO,
    ):
        self.checker = checker
        self.log = log or logger
        self.level = level

    def check(self, clusters: ClusterSet, i: int, j: int, next_score: float) -> bool:
        decision = self.checker.check(clusters, i, j, next_score)
        if decision:
            self.log.log(
                self.level, "  merge (%d,%d) ~~ %f %r", i, j, next_score, clusters
            )
        else:
            self.log.log(self.level, "  STOP  (%d,%d) ~~ %f", i, j, next_score)
        return decision

    def __repr__(self) -> str:
        return f"TreeLog({self.checker!r})"


class AllOf(Checker):
    """Continues only while every wrapped checker agrees."""

    def __init__(self, *checkers: Checker):
        if not checkers:
            raise ValueError("AllOf requires at least one checker")
        self.checkers = list(checkers)

    def check(self, clusters: ClusterSet, i: int, j: int, next_score: float) -> bool:
        return all(c.check(clusters, i, j, next_score) for c in self.checkers)

    def __repr__(self) -> str:
        return f"AllOf({', '.join(repr(c) for c in self.checkers)})"


@dataclass
class MergeStep:
    """One accepted merge, as seen by the checker before it happened."""

    step: int
    i: int
    j: int
    score: float
    cluster_count: int  # clusters before the merge


class MergeRecorder(Checker):
    """
    Records every merge the wrapped checker accepts.

    Indices are those of the cluster set at the time of each step. Together
    with the cluster set's merge policy this is enough to rebuild a tree.
    """

    def __init__(self, checker: Checker):
        self.checker = checker
        self.steps: List[MergeStep] = []

    def check(self, clusters: ClusterSet, i: int, j: int, next_score: float) -> bool:
        decision = self.checker.check(clusters, i, j, next_score)
        if decision:
            self.steps.append(
                MergeStep(len(self.steps), i, j, next_score, clusters.count())
            )
        return decision

    def __repr__(self) -> str:
        return f"MergeRecorder({self.checker!r})"


def checker_from_config(config) -> Checker:
    """
    Build a checker from a ``ClusteringConfig``.

    Threshold and cluster-count limits are combined when both are set; with
    neither set clustering runs down to a single cluster.
    """
    checkers: List[Checker] = []
    if config.threshold is not None:
        checkers.append(Threshold(config.threshold))
    if config.max_clusters is not None:
        checkers.append(MaxClusters(config.max_clusters))

    if not checkers:
        checker: Checker = Threshold(float("inf"))
    elif len(checkers) == 1:
        checker = checkers[0]
    else:
        checker = AllOf(*checkers)

    if config.trace_merges:
        checker = TreeLog(checker)
    return checker
