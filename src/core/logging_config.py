"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Events go to stderr so command output on stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_CONFIGURED_LEVEL: int | None = None


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        level: Standard logging level, e.g. ``logging.INFO``.
    """
    global _CONFIGURED_LEVEL
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
    _CONFIGURED_LEVEL = level


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger carrying the module name as a field.
    """
    if _CONFIGURED_LEVEL is None:
        configure_logging()
    return structlog.get_logger(logger_name=name)


def _stderr_logger_factory(*_: Any) -> structlog.PrintLogger:
    """Create a print logger bound to the current ``sys.stderr``."""
    return structlog.PrintLogger(file=sys.stderr)
