"""Shared fixtures for hclust tests."""

import logging

import numpy as np
import pytest

from hclust.distance_map import DistanceMapClusterSet


FIVE_ITEMS = {
    "a": {"b": 0.0, "c": 0.0, "d": 1.0, "e": 0.4},
    "b": {"c": 0.1, "d": 0.9, "e": 0.4},
    "c": {"d": 0.9, "e": 0.2},
    "d": {"e": 0.1},
}


@pytest.fixture
def five_items():
    """Five-item distance map with two obvious groups."""
    return {k: dict(v) for k, v in FIVE_ITEMS.items()}


@pytest.fixture
def five_item_set(five_items):
    return DistanceMapClusterSet(five_items)


@pytest.fixture
def random_points():
    """Nine random points in 3-D; pairwise distances have no ties."""
    rng = np.random.default_rng(7)
    return rng.normal(size=(9, 3))


@pytest.fixture
def random_matrix(random_points):
    """Symmetric distance matrix of ``random_points``."""
    diff = random_points[:, None, :] - random_points[None, :, :]
    return np.sqrt((diff ** 2).sum(axis=-1))


@pytest.fixture
def restore_hclust_logger():
    """Drop handlers that configure_logging attached during a test."""
    package_logger = logging.getLogger("hclust")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield package_logger
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
