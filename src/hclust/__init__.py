"""
hclust: agglomerative hierarchical clustering over arbitrary data sources
"""

__version__ = "1.0.0"

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
from hclust.cluster_set import (
    ClusterItem,
    ClusterSet,
    DefaultOptimizedClusterSet,
    OptimizedClusterSet,
    as_optimized,
    cluster_members,
)
from hclust.config import (
    ClusteringConfig,
    HClustConfig,
    LoggingConfig,
    get_default_config,
    load_config,
    validate_config,
)
from hclust.distance_map import DistanceMap, DistanceMapClusterSet
from hclust.engine import HClustering, cluster
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
from hclust.matrix import MatrixClusterSet

__all__ = [
    # Engine
    "cluster",
    "HClustering",
    # Data sources
    "ClusterItem",
    "ClusterSet",
    "OptimizedClusterSet",
    "DefaultOptimizedClusterSet",
    "as_optimized",
    "cluster_members",
    "DistanceMap",
    "DistanceMapClusterSet",
    "MatrixClusterSet",
    # Linkage
    "LinkageType",
    "CompleteLinkage",
    "SingleLinkage",
    "AverageLinkage",
    "complete_linkage",
    "single_linkage",
    "average_linkage",
    "weighted_average_linkage",
    "get_linkage",
    "LINKAGES",
    # Stop criteria
    "Checker",
    "Threshold",
    "MaxClusters",
    "TreeLog",
    "AllOf",
    "MergeRecorder",
    "MergeStep",
    "checker_from_config",
    # Configuration
    "HClustConfig",
    "ClusteringConfig",
    "LoggingConfig",
    "load_config",
    "get_default_config",
    "validate_config",
]
