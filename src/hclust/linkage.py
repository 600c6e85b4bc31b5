"""Linkage strategies for scoring candidate cluster pairs."""

import math
from abc import ABC, abstractmethod
from typing import Dict, Hashable, List, Optional, Set, Type


class LinkageType(ABC):
    """
    Defines how two clusters are scored from their pairwise item distances.

    A linkage is a stateful accumulator: ``reset()``, then ``put()`` for every
    cross-cluster item pair, then ``get()`` for the score. Instances are reused
    across pairs and must not be shared between concurrent runs.
    """

    # True when lw_params() depends on the sizes of the two clusters last
    # accumulated, so the engine must accumulate the merging pair first.
    size_dependent = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Linkage name."""

    @abstractmethod
    def reset(self) -> None:
        """Clear all accumulated state."""

    @abstractmethod
    def put(self, item1: Hashable, item2: Hashable, dist: float) -> None:
        """Add a distance observation for the item pair."""

    @abstractmethod
    def get(self) -> float:
        """Current score; ``math.inf`` if nothing has been observed."""

    @abstractmethod
    def lw_params(self) -> List[float]:
        """
        Lance-Williams coefficients ``[alpha_i, alpha_j, beta, gamma]``.

        Anything other than four values makes the engine fall back to
        recomputing every pair at each merge.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CompleteLinkage(LinkageType):
    """Maximum distance between any pair of items from the two clusters."""

    def __init__(self):
        self._max_dist: Optional[float] = None

    @property
    def name(self) -> str:
        return "complete"

    def reset(self) -> None:
        self._max_dist = None

    def put(self, item1: Hashable, item2: Hashable, dist: float) -> None:
        if self._max_dist is None or dist > self._max_dist:
            self._max_dist = dist

    def get(self) -> float:
        if self._max_dist is None:
            return math.inf
        return self._max_dist

    def lw_params(self) -> List[float]:
        return [0.5, 0.5, 0.0, 0.5]


class SingleLinkage(LinkageType):
    """Minimum distance between any pair of items from the two clusters."""

    def __init__(self):
        self._min_dist: Optional[float] = None

    @property
    def name(self) -> str:
        return "single"

    def reset(self) -> None:
        self._min_dist = None

    def put(self, item1: Hashable, item2: Hashable, dist: float) -> None:
        if self._min_dist is None or dist < self._min_dist:
            self._min_dist = dist

    def get(self) -> float:
        if self._min_dist is None:
            return math.inf
        return self._min_dist

    def lw_params(self) -> List[float]:
        return [0.5, 0.5, 0.0, -0.5]


class AverageLinkage(LinkageType):
    """
    Mean of all pairwise distances between the two clusters.

    Unweighted (UPGMA) by default: after a merge the new distance is weighted
    by the item counts of the two merged clusters. With ``weighted=True``
    (WPGMA) both clusters count equally regardless of size.
    """

    def __init__(self, weighted: bool = False):
        self.weighted = weighted
        self._total = 0.0
        self._pairs = 0
        self._left: Set[Hashable] = set()
        self._right: Set[Hashable] = set()

    @property
    def name(self) -> str:
        return "weighted" if self.weighted else "average"

    @property
    def size_dependent(self) -> bool:
        return not self.weighted

    def reset(self) -> None:
        self._total = 0.0
        self._pairs = 0
        self._left = set()
        self._right = set()

    def put(self, item1: Hashable, item2: Hashable, dist: float) -> None:
        self._total += dist
        self._pairs += 1
        if not self.weighted:
            self._left.add(item1)
            self._right.add(item2)

    def get(self) -> float:
        if self._pairs == 0:
            return math.inf
        return self._total / self._pairs

    def lw_params(self) -> List[float]:
        if self.weighted:
            return [0.5, 0.5, 0.0, 0.0]
        ni = float(len(self._left))
        nj = float(len(self._right))
        if ni + nj == 0:
            return []
        return [ni / (ni + nj), nj / (ni + nj), 0.0, 0.0]

    def __repr__(self) -> str:
        return f"AverageLinkage(weighted={self.weighted})"


def complete_linkage() -> LinkageType:
    """Complete-linkage clustering (maximum pairwise distance)."""
    return CompleteLinkage()


def single_linkage() -> LinkageType:
    """Single-linkage clustering (minimum pairwise distance)."""
    return SingleLinkage()


def average_linkage() -> LinkageType:
    """Average-linkage clustering, also known as UPGMA."""
    return AverageLinkage()


def weighted_average_linkage() -> LinkageType:
    """WPGMA clustering: average linkage with clusters weighted equally."""
    return AverageLinkage(weighted=True)


# Linkage registry for lookup by name
LINKAGES: Dict[str, Type[LinkageType]] = {
    "complete": CompleteLinkage,
    "single": SingleLinkage,
    "average": AverageLinkage,
    "weighted": AverageLinkage,
}


def get_linkage(name: str) -> LinkageType:
    """
    Get a linkage strategy by name.

    Args:
        name: Linkage name ('complete', 'single', 'average', 'weighted')

    Returns:
        A fresh linkage instance

    Raises:
        ValueError: If the linkage name is not recognized
    """
    if name not in LINKAGES:
        raise ValueError(f"Unknown linkage: {name}. "
                        f"Available linkages: {list(LINKAGES.keys())}")

    if name == "weighted":
        return AverageLinkage(weighted=True)
    return LINKAGES[name]()
