"""Centralised Loguru logger shared by every engine module."""
from __future__ import annotations

import sys

from loguru import logger

_DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace the active sinks with a single stderr sink at ``level``.

    Library code never calls this; command-line entry points do, after reading
    the ``logging.level`` entry of their YAML configuration.
    """

    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_DEFAULT_FORMAT)


__all__ = ["configure_logging", "logger"]
