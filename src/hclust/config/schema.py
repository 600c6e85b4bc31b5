"""Configuration schema dataclasses for hclust.

This module defines all configuration options as typed dataclasses,
providing a single source of truth for default values and types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class LinkageName(str, Enum):
    """Built-in linkage strategies."""

    COMPLETE = "complete"
    SINGLE = "single"
    AVERAGE = "average"
    WEIGHTED = "weighted"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ClusteringConfig:
    """Clustering run settings."""

    linkage: str = "complete"
    threshold: Optional[float] = None  # None = no score limit
    max_clusters: Optional[int] = None  # None = run down to one cluster
    trace_merges: bool = False
    default_distance: float = 1.0  # for pairs missing from a distance map

    def __post_init__(self) -> None:
        """Normalize enum values; range and type checks live in validate_config."""
        if isinstance(self.linkage, LinkageName):
            self.linkage = self.linkage.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "linkage": self.linkage,
            "threshold": self.threshold,
            "max_clusters": self.max_clusters,
            "trace_merges": self.trace_merges,
            "default_distance": self.default_distance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClusteringConfig:
        """Create from dictionary."""
        return cls(
            linkage=data.get("linkage", "complete"),
            threshold=data.get("threshold"),
            max_clusters=data.get("max_clusters"),
            trace_merges=data.get("trace_merges", False),
            default_distance=data.get("default_distance", 1.0),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(levelname)s - %(name)s - %(message)s"
    file: Optional[str] = None
    console: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level,
            "format": self.format,
            "file": self.file,
            "console": self.console,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoggingConfig:
        """Create from dictionary."""
        return cls(
            level=data.get("level", "INFO"),
            format=data.get("format", "%(levelname)s - %(name)s - %(message)s"),
            file=data.get("file"),
            console=data.get("console", True),
        )


@dataclass
class HClustConfig:
    """Main configuration container for hclust.

    Configuration is loaded from multiple sources with the following priority:
    1. Programmatic (highest) - Direct API calls or CLI flags
    2. Environment Variables - HCLUST_* prefixed
    3. Project Config - ./hclust.toml
    4. User Config - ~/.config/hclust/config.toml
    5. Defaults (lowest) - Built-in defaults
    """

    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "clustering": self.clustering.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HClustConfig:
        """Create configuration from dictionary."""
        return cls(
            clustering=ClusteringConfig.from_dict(data.get("clustering", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
        )

    def get_nested(self, key: str, default: Any = None) -> Any:
        """Get a nested configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., "clustering.threshold")
            default: Default value if key not found

        Returns:
            The configuration value or default
        """
        obj: Any = self
        for part in key.split("."):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default
        return obj

    def set_nested(self, key: str, value: Any) -> None:
        """Set a nested configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., "clustering.threshold")
            value: Value to set

        Raises:
            KeyError: If the key does not name an existing setting
            ValueError: If the value is rejected by validate_value
        """
        from .validation import validate_value

        parts = key.split(".")
        obj: Any = self
        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise KeyError(f"Invalid configuration key: {key}")
        if not hasattr(obj, parts[-1]):
            raise KeyError(f"Invalid configuration key: {key}")
        error = validate_value(key, value)
        if error is not None:
            raise ValueError(str(error))
        setattr(obj, parts[-1], value)
