"""Structured logging configuration.

This module initializes a logger with a stable structured format.
Events render as JSON lines on stderr with an ISO timestamp and level.
The level comes from StowageConfig; until a client applies it, loggers
filter at the default level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import StowageConfigError

_LEVEL_NUMBERS = {name: logging.getLevelName(name.upper()) for name in SUPPORTED_LOG_LEVELS}


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structured output filtered at one level.

    Args:
        log_level: Level name, usually the validated StowageConfig.log_level.

    Raises:
        StowageConfigError: If log_level is not a supported level name.
    """
    level = _LEVEL_NUMBERS.get(log_level)
    if level is None:
        raise StowageConfigError(
            f"Unsupported log level '{log_level}'. Use one of {', '.join(_LEVEL_NUMBERS)}."
        )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # Resolved per event so redirected stderr streams are honoured.
    return structlog.PrintLogger(sys.stderr)
