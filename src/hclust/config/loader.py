"""Configuration loader for hclust.

This module handles loading configuration from multiple sources:
1. Default values (lowest priority)
2. User config file (~/.config/hclust/config.toml)
3. Project config file (./hclust.toml)
4. Environment variables (HCLUST_* prefix)
5. Programmatic overrides (highest priority)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from .schema import HClustConfig

# Use tomllib (3.11+) or tomli for older Python versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

# Default paths
USER_CONFIG_DIR = Path.home() / ".config" / "hclust"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.toml"
PROJECT_CONFIG_NAME = "hclust.toml"
ENV_PREFIX = "HCLUST_"

# Known section names (first level)
SECTIONS = {"clustering", "logging"}


def _parse_env_value(value: str) -> Any:
    """Parse an environment variable value to appropriate Python type."""
    # Handle booleans
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    # Handle None
    if value.lower() in ("none", "null", ""):
        return None

    # Try numeric types
    try:
        if "." in value or "e" in value.lower() or value.lower() == "inf":
            return float(value)
        return int(value)
    except ValueError:
        pass

    # Return as string
    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """Load configuration from multiple sources with priority handling."""

    def __init__(
        self,
        project_path: Optional[Path] = None,
        user_config_path: Optional[Path] = None,
    ):
        """Initialize the configuration loader.

        Args:
            project_path: Directory containing hclust.toml
            user_config_path: Optional override for user config path
        """
        self.project_path = Path(project_path) if project_path else None
        self.user_config_path = (
            Path(user_config_path) if user_config_path else USER_CONFIG_PATH
        )

    def load(self) -> HClustConfig:
        """Load configuration from all sources with priority handling.

        Priority (highest to lowest):
        1. Environment variables (HCLUST_*)
        2. Project config (./hclust.toml)
        3. User config (~/.config/hclust/config.toml)
        4. Default values

        Returns:
            Merged HClustConfig instance
        """
        config_dict: dict[str, Any] = {}

        if self.user_config_path.exists():
            user_data = self._load_toml(self.user_config_path)
            if user_data:
                config_dict = _deep_merge(config_dict, user_data)
                logger.debug(f"Loaded user config from {self.user_config_path}")

        if self.project_path:
            project_config_path = self.project_path / PROJECT_CONFIG_NAME
            if project_config_path.exists():
                project_data = self._load_toml(project_config_path)
                if project_data:
                    config_dict = _deep_merge(config_dict, project_data)
                    logger.debug(f"Loaded project config from {project_config_path}")

        env_overrides = self._load_env_vars()
        if env_overrides:
            config_dict = _deep_merge(config_dict, env_overrides)
            logger.debug("Applied environment variable overrides")

        return HClustConfig.from_dict(config_dict)

    def _load_toml(self, path: Path) -> Optional[dict[str, Any]]:
        """Load a TOML configuration file.

        Args:
            path: Path to the TOML file

        Returns:
            Parsed configuration dict or None if failed
        """
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Failed to load TOML config from {path}: {e}")
            return None

    def _load_env_vars(self) -> dict[str, Any]:
        """Load configuration from environment variables.

        Environment variables are prefixed with HCLUST_ and use underscores
        to separate nested keys. For example:
        - HCLUST_CLUSTERING_THRESHOLD -> clustering.threshold
        - HCLUST_CLUSTERING_MAX_CLUSTERS -> clustering.max_clusters
        - HCLUST_LOGGING_LEVEL -> logging.level

        Returns:
            Configuration dictionary from environment variables
        """
        result: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX) :].lower().split("_")
            nested = self._build_nested_dict(parts, _parse_env_value(value))
            result = _deep_merge(result, nested)

        return result

    def _build_nested_dict(self, parts: list[str], value: Any) -> dict[str, Any]:
        """Build a nested dictionary from key parts.

        The first part selects the section when it names one; the remaining
        parts are joined back with underscores to form the key name.

        Args:
            parts: List of key parts from splitting on underscores
            value: Value to set

        Returns:
            Nested dictionary
        """
        if not parts:
            return {}

        if parts[0] in SECTIONS:
            section = parts[0]
            remaining = parts[1:]
            if not remaining:
                return {section: value}
            return {section: {"_".join(remaining): value}}

        return {"_".join(parts): value}


def load_config(
    project_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> HClustConfig:
    """Load hclust configuration from all sources.

    This is the main entry point for loading configuration.

    Args:
        project_path: Optional directory containing hclust.toml
        user_config_path: Optional override for user config path

    Returns:
        Merged HClustConfig instance
    """
    loader = ConfigLoader(project_path, user_config_path)
    return loader.load()


def get_default_config() -> HClustConfig:
    """Get an HClustConfig with all default values.

    Returns:
        HClustConfig with defaults
    """
    return HClustConfig()
