"""Structured logging configuration.

Standard output belongs to the line protocol, so every log event is written
to standard error.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

DEFAULT_LEVEL = "WARNING"
LEVEL_ENV_VAR = "ROWSTORE_LOG_LEVEL"


def default_level() -> str:
    """Return the log level named by the environment, or WARNING."""
    return os.environ.get(LEVEL_ENV_VAR, DEFAULT_LEVEL).upper()


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_format: str = "console",
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    numeric_level = getattr(logging, level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )
    _configure_structlog(numeric_level, log_format)


def _configure_structlog(numeric_level: int, log_format: str = "console") -> None:
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> Any:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    # structlog's own defaults print every level to stdout
    if not structlog.is_configured():
        _configure_structlog(getattr(logging, default_level(), logging.WARNING))

    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
