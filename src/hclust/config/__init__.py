"""Configuration system for hclust.

Configuration Sources (Priority Order):
1. Programmatic (highest) - Direct API calls or CLI flags
2. Environment Variables - HCLUST_* prefixed variables
3. Project Config - ./hclust.toml
4. User Config - ~/.config/hclust/config.toml
5. Defaults (lowest) - Built-in defaults

Example Usage:
    from hclust.config import load_config

    config = load_config(project_path=Path("."))
    print(config.clustering.linkage)    # "complete"
    print(config.clustering.threshold)  # None

Environment Variables:
    - HCLUST_CLUSTERING_LINKAGE=average
    - HCLUST_CLUSTERING_THRESHOLD=0.4
    - HCLUST_LOGGING_LEVEL=DEBUG
"""

from .loader import (
    ConfigLoader,
    get_default_config,
    load_config,
)
from .logging_setup import configure_logging
from .schema import (
    ClusteringConfig,
    HClustConfig,
    LinkageName,
    LoggingConfig,
    LogLevel,
)
from .validation import (
    ConfigValidationError,
    ValidationError,
    ValidationResult,
    ensure_valid,
    validate_config,
    validate_value,
)

__all__ = [
    # Main config class
    "HClustConfig",
    # Section configs
    "ClusteringConfig",
    "LoggingConfig",
    # Enums
    "LinkageName",
    "LogLevel",
    # Loading
    "ConfigLoader",
    "load_config",
    "get_default_config",
    "configure_logging",
    # Validation
    "ConfigValidationError",
    "ValidationError",
    "ValidationResult",
    "ensure_valid",
    "validate_config",
    "validate_value",
]
