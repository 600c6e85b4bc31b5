"""Configuration validation for hclust.

This module provides validation utilities for configuration values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .schema import HClustConfig, LinkageName, LogLevel


@dataclass
class ValidationError:
    """Represents a configuration validation error."""

    key: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.key}: {self.message} (got: {self.value!r})"
        return f"{self.key}: {self.message}"


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    valid: bool
    errors: list[ValidationError]
    warnings: list[ValidationError]

    def __bool__(self) -> bool:
        return self.valid


class ConfigValidationError(Exception):
    """Raised when a configuration fails validation before it is used.

    Attributes:
        errors: List of ValidationError objects describing what failed
        warnings: List of ValidationError objects for non-fatal issues
    """

    def __init__(
        self,
        message: str,
        errors: list[ValidationError],
        warnings: Optional[list[ValidationError]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors
        self.warnings = warnings or []

    def __str__(self) -> str:
        lines = [super().__str__()]
        if self.errors:
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"  - {error}")
        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  - {warning}")
        return "\n".join(lines)


def validate_config(config: HClustConfig) -> ValidationResult:
    """Validate a configuration instance.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with errors and warnings
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_clustering(config, errors, warnings)
    _validate_logging(config, errors, warnings)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def ensure_valid(config: HClustConfig) -> HClustConfig:
    """Return ``config`` unchanged, or raise if it has validation errors.

    Raises:
        ConfigValidationError: If validation reports any error
    """
    result = validate_config(config)
    if not result:
        raise ConfigValidationError(
            "Invalid hclust configuration", result.errors, result.warnings
        )
    return config


def _is_number(value: Any) -> bool:
    """True for int and float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_cluster_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _is_linkage(value: Any) -> bool:
    return isinstance(value, str) and value in {e.value for e in LinkageName}


def _validate_clustering(
    config: HClustConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate clustering configuration."""
    clustering = config.clustering

    if not _is_linkage(clustering.linkage):
        errors.append(
            ValidationError(
                "clustering.linkage",
                f"must be one of {sorted(e.value for e in LinkageName)}",
                clustering.linkage,
            )
        )

    if clustering.threshold is not None:
        if not _is_number(clustering.threshold) or math.isnan(clustering.threshold):
            errors.append(
                ValidationError(
                    "clustering.threshold",
                    "must be a number",
                    clustering.threshold,
                )
            )
        elif clustering.threshold < 0:
            warnings.append(
                ValidationError(
                    "clustering.threshold",
                    "negative threshold stops before any non-negative merge",
                    clustering.threshold,
                )
            )

    if clustering.max_clusters is not None and not _is_cluster_count(
        clustering.max_clusters
    ):
        errors.append(
            ValidationError(
                "clustering.max_clusters",
                "must be a positive integer",
                clustering.max_clusters,
            )
        )

    if clustering.threshold is None and clustering.max_clusters is None:
        warnings.append(
            ValidationError(
                "clustering",
                "neither threshold nor max_clusters set, clustering runs to one cluster",
            )
        )

    if not isinstance(clustering.trace_merges, bool):
        errors.append(
            ValidationError(
                "clustering.trace_merges",
                "must be true or false",
                clustering.trace_merges,
            )
        )

    if not _is_number(clustering.default_distance):
        errors.append(
            ValidationError(
                "clustering.default_distance",
                "must be a number",
                clustering.default_distance,
            )
        )


def _validate_logging(
    config: HClustConfig,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate logging configuration."""
    logging_cfg = config.logging

    valid_levels = {e.value for e in LogLevel}
    if str(logging_cfg.level).upper() not in valid_levels:
        errors.append(
            ValidationError(
                "logging.level",
                f"must be one of {sorted(valid_levels)}",
                logging_cfg.level,
            )
        )

    if not logging_cfg.console and not logging_cfg.file:
        warnings.append(
            ValidationError(
                "logging",
                "console output disabled and no log file set, logs are discarded",
            )
        )


def validate_value(key: str, value: Any) -> Optional[ValidationError]:
    """Validate a single configuration value.

    Used by ``HClustConfig.set_nested`` before a value is assigned.

    Args:
        key: Configuration key (dot notation)
        value: Value to validate

    Returns:
        ValidationError if invalid, None if valid
    """
    validators = {
        "clustering.linkage": lambda v: (
            None
            if _is_linkage(v)
            else ValidationError(key, "must be a known linkage", v)
        ),
        "clustering.threshold": lambda v: (
            None
            if v is None or (_is_number(v) and not math.isnan(v))
            else ValidationError(key, "must be a number", v)
        ),
        "clustering.max_clusters": lambda v: (
            None
            if v is None or _is_cluster_count(v)
            else ValidationError(key, "must be a positive integer", v)
        ),
        "clustering.trace_merges": lambda v: (
            None
            if isinstance(v, bool)
            else ValidationError(key, "must be true or false", v)
        ),
        "clustering.default_distance": lambda v: (
            None if _is_number(v) else ValidationError(key, "must be a number", v)
        ),
        "logging.level": lambda v: (
            None
            if str(v).upper() in {e.value for e in LogLevel}
            else ValidationError(key, "must be a valid log level", v)
        ),
        "logging.console": lambda v: (
            None
            if isinstance(v, bool)
            else ValidationError(key, "must be true or false", v)
        ),
    }

    if key in validators:
        return validators[key](value)

    return None
