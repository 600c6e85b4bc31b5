"""Apply a LoggingConfig to the ``hclust`` logger hierarchy."""

from __future__ import annotations

import logging

from .schema import LoggingConfig

LOGGER_NAME = "hclust"


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Attach handlers described by ``config`` to the ``hclust`` logger.

    Handlers installed by a previous call are replaced, so repeated calls do
    not duplicate output. The library itself never calls this; applications
    and the CLI do.

    Args:
        config: Logging settings

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(str(config.level).upper())

    for handler in list(package_logger.handlers):
        if getattr(handler, "_hclust_managed", False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = []
    if config.console:
        handlers.append(logging.StreamHandler())
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._hclust_managed = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)

    return package_logger
