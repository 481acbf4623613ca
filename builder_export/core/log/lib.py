"""Logging setup for builder-export.

Modules log through ``get_logger(__name__)``; the CLI configures handlers
once with ``setup_logging`` using the BUILDER_LOG_LEVEL setting.
"""

import logging
import sys
from typing import Optional, TextIO

__all__ = ["get_logger", "setup_logging", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure basic logging.

    Args:
        level: Logging level number or name ("DEBUG", "info", ...).
            Unknown names fall back to INFO.
        stream: Output stream. Defaults to stderr so stdout stays free
            for exported documents.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger. Defaults to the package logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "builder-export")
