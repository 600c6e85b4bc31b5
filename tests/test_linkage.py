"""Tests for linkage strategies."""

import math

import pytest

from hclust.linkage import (
    LINKAGES,
    AverageLinkage,
    CompleteLinkage,
    LinkageType,
    SingleLinkage,
    average_linkage,
    complete_linkage,
    get_linkage,
    single_linkage,
    weighted_average_linkage,
)

OBSERVATIONS = [("a", "x", 0.3), ("a", "y", 0.9), ("b", "x", 0.1), ("b", "y", 0.5)]


def feed(linkage, observations=OBSERVATIONS):
    linkage.reset()
    for item1, item2, dist in observations:
        linkage.put(item1, item2, dist)
    return linkage.get()


class TestScores:
    """Test get() after a stream of observations."""

    def test_complete_is_maximum(self):
        assert feed(CompleteLinkage()) == 0.9

    def test_single_is_minimum(self):
        assert feed(SingleLinkage()) == 0.1

    def test_average_is_mean(self):
        assert feed(AverageLinkage()) == pytest.approx(0.45)

    def test_weighted_average_is_mean(self):
        assert feed(AverageLinkage(weighted=True)) == pytest.approx(0.45)

    def test_complete_with_negative_distances(self):
        assert feed(CompleteLinkage(), [("a", "b", -2.0), ("a", "c", -3.0)]) == -2.0

    def test_single_with_negative_distances(self):
        assert feed(SingleLinkage(), [("a", "b", -2.0), ("a", "c", -3.0)]) == -3.0

    @pytest.mark.parametrize("name", sorted(LINKAGES))
    def test_empty_accumulation_is_infinite(self, name):
        linkage = get_linkage(name)
        linkage.reset()
        assert math.isinf(linkage.get())

    @pytest.mark.parametrize("name", sorted(LINKAGES))
    def test_reset_is_idempotent(self, name):
        linkage = get_linkage(name)
        first = feed(linkage)
        second = feed(linkage)
        assert first == second

    def test_reset_clears_previous_pair(self):
        linkage = CompleteLinkage()
        feed(linkage, [("a", "b", 5.0)])
        assert feed(linkage, [("a", "c", 1.0)]) == 1.0


class TestLanceWilliamsParams:
    """Test the Lance-Williams coefficients."""

    def test_complete(self):
        assert CompleteLinkage().lw_params() == [0.5, 0.5, 0.0, 0.5]

    def test_single(self):
        assert SingleLinkage().lw_params() == [0.5, 0.5, 0.0, -0.5]

    def test_weighted_average(self):
        assert AverageLinkage(weighted=True).lw_params() == [0.5, 0.5, 0.0, 0.0]

    def test_average_uses_cluster_sizes(self):
        linkage = AverageLinkage()
        feed(
            linkage,
            [(a, b, 1.0) for a in ("p", "q") for b in ("x", "y", "z")],
        )
        alpha_i, alpha_j, beta, gamma = linkage.lw_params()
        assert alpha_i == pytest.approx(0.4)
        assert alpha_j == pytest.approx(0.6)
        assert beta == 0.0
        assert gamma == 0.0

    def test_average_sizes_reset_between_pairs(self):
        linkage = AverageLinkage()
        feed(linkage, [(a, b, 1.0) for a in range(3) for b in range(10, 13)])
        feed(linkage, [(0, 10, 1.0)])
        assert linkage.lw_params() == [0.5, 0.5, 0.0, 0.0]

    def test_average_without_observations_has_no_params(self):
        linkage = AverageLinkage()
        linkage.reset()
        assert linkage.lw_params() == []

    def test_size_dependence(self):
        assert AverageLinkage().size_dependent is True
        assert AverageLinkage(weighted=True).size_dependent is False
        assert CompleteLinkage().size_dependent is False
        assert SingleLinkage().size_dependent is False


class TestRegistry:
    """Test linkage lookup by name."""

    @pytest.mark.parametrize(
        "name,cls,weighted",
        [
            ("complete", CompleteLinkage, None),
            ("single", SingleLinkage, None),
            ("average", AverageLinkage, False),
            ("weighted", AverageLinkage, True),
        ],
    )
    def test_get_linkage(self, name, cls, weighted):
        linkage = get_linkage(name)
        assert isinstance(linkage, cls)
        assert isinstance(linkage, LinkageType)
        assert linkage.name == name
        if weighted is not None:
            assert linkage.weighted is weighted

    def test_unknown_linkage(self):
        with pytest.raises(ValueError, match="Unknown linkage"):
            get_linkage("ward")

    def test_factories(self):
        assert isinstance(complete_linkage(), CompleteLinkage)
        assert isinstance(single_linkage(), SingleLinkage)
        assert average_linkage().weighted is False
        assert weighted_average_linkage().weighted is True

    def test_get_linkage_returns_fresh_instances(self):
        assert get_linkage("complete") is not get_linkage("complete")
