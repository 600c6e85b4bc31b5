"""Tests for stop criteria."""

import logging
from unittest.mock import Mock

import pytest

from hclust.checker import (
    AllOf,
    Checker,
    MaxClusters,
    MergeRecorder,
    MergeStep,
    Threshold,
    TreeLog,
    checker_from_config,
)
from hclust.config import ClusteringConfig
from hclust.distance_map import DistanceMapClusterSet
from hclust.engine import HClustering
from hclust.linkage import CompleteLinkage


@pytest.fixture
def three_clusters():
    return DistanceMapClusterSet({"a": {"b": 0.1, "c": 0.2}})


class TestThreshold:
    def test_continues_up_to_limit(self, three_clusters):
        checker = Threshold(0.4)
        assert checker.check(three_clusters, 0, 1, 0.3) is True
        assert checker.check(three_clusters, 0, 1, 0.4) is True
        assert checker.check(three_clusters, 0, 1, 0.41) is False

    def test_repr(self):
        assert repr(Threshold(0.5)) == "Threshold(0.5)"


class TestMaxClusters:
    def test_continues_while_above_limit(self, three_clusters):
        assert MaxClusters(2).check(three_clusters, 0, 1, 100.0) is True
        assert MaxClusters(3).check(three_clusters, 0, 1, 0.0) is False

    def test_ignores_score(self, three_clusters):
        checker = MaxClusters(1)
        assert checker.check(three_clusters, 0, 1, float("inf")) is True


class TestTreeLog:
    def test_logs_merge_and_keeps_decision(self, three_clusters, caplog):
        checker = TreeLog(Threshold(1.0))
        with caplog.at_level(logging.INFO, logger="hclust.checker"):
            assert checker.check(three_clusters, 0, 1, 0.1) is True
        assert "merge (0,1)" in caplog.text

    def test_logs_stop_and_keeps_decision(self, three_clusters, caplog):
        checker = TreeLog(Threshold(0.0))
        with caplog.at_level(logging.INFO, logger="hclust.checker"):
            assert checker.check(three_clusters, 1, 2, 0.5) is False
        assert "STOP  (1,2)" in caplog.text

    def test_custom_logger_and_level(self, three_clusters, caplog):
        custom = logging.getLogger("tests.tree")
        checker = TreeLog(Threshold(1.0), log=custom, level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger="tests.tree"):
            checker.check(three_clusters, 0, 2, 0.2)
        assert [r.name for r in caplog.records] == ["tests.tree"]
        assert caplog.records[0].levelno == logging.DEBUG

    def test_delegates_arguments(self, three_clusters):
        inner = Mock(spec=Checker)
        inner.check.return_value = True
        TreeLog(inner).check(three_clusters, 0, 2, 0.7)
        inner.check.assert_called_once_with(three_clusters, 0, 2, 0.7)


class TestAllOf:
    def test_requires_every_checker(self, three_clusters):
        checker = AllOf(Threshold(0.5), MaxClusters(1))
        assert checker.check(three_clusters, 0, 1, 0.2) is True
        assert checker.check(three_clusters, 0, 1, 0.6) is False
        assert AllOf(Threshold(0.5), MaxClusters(3)).check(
            three_clusters, 0, 1, 0.2
        ) is False

    def test_short_circuits(self, three_clusters):
        second = Mock(spec=Checker)
        AllOf(Threshold(0.0), second).check(three_clusters, 0, 1, 1.0)
        second.check.assert_not_called()

    def test_requires_a_checker(self):
        with pytest.raises(ValueError):
            AllOf()


class TestMergeRecorder:
    def test_records_only_accepted_merges(self, three_clusters):
        recorder = MergeRecorder(Threshold(0.5))
        recorder.check(three_clusters, 0, 1, 0.1)
        recorder.check(three_clusters, 0, 2, 0.9)
        assert recorder.steps == [MergeStep(0, 0, 1, 0.1, 3)]


class TestCheckerFromConfig:
    def test_no_limits_runs_to_one_cluster(self, three_clusters):
        checker = checker_from_config(ClusteringConfig())
        assert checker.check(three_clusters, 0, 1, 1e300) is True

    def test_threshold_only(self):
        checker = checker_from_config(ClusteringConfig(threshold=0.3))
        assert isinstance(checker, Threshold)
        assert checker.limit == 0.3

    def test_max_clusters_only(self):
        checker = checker_from_config(ClusteringConfig(max_clusters=4))
        assert isinstance(checker, MaxClusters)

    def test_both_limits_combined(self):
        checker = checker_from_config(ClusteringConfig(threshold=0.3, max_clusters=4))
        assert isinstance(checker, AllOf)
        assert len(checker.checkers) == 2

    def test_trace_wraps_in_tree_log(self):
        checker = checker_from_config(ClusteringConfig(threshold=0.3, trace_merges=True))
        assert isinstance(checker, TreeLog)
        assert isinstance(checker.checker, Threshold)


class TestReprs:
    """Wrapping checkers show what they wrap."""

    def test_tree_log(self):
        assert repr(TreeLog(Threshold(0.5))) == "TreeLog(Threshold(0.5))"

    def test_all_of(self):
        checker = AllOf(Threshold(0.5), MaxClusters(2))
        assert repr(checker) == "AllOf(Threshold(0.5), MaxClusters(2))"

    def test_merge_recorder(self):
        checker = MergeRecorder(TreeLog(MaxClusters(3)))
        assert repr(checker) == "MergeRecorder(TreeLog(MaxClusters(3)))"

    def test_engine_start_log_names_checker(self, three_clusters, caplog):
        engine = HClustering(
            three_clusters, MergeRecorder(Threshold(1.0)), CompleteLinkage()
        )
        with caplog.at_level(logging.INFO, logger="hclust.engine"):
            engine.run()
        assert "MergeRecorder(Threshold(1.0))" in caplog.text
        assert "object at 0x" not in caplog.text
