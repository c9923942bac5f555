"""
Logging configuration for the generator.

Generated code goes to stdout, so log events are rendered to stderr.
The level comes from VECTORGEN_LOG_LEVEL unless the caller overrides it.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

import structlog

LOG_LEVEL_ENV = "VECTORGEN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "info"


def resolve_level(level: str | None = None) -> int:
    """Map a level name to its numeric value.

    Args:
        level: Level name (case-insensitive). None reads VECTORGEN_LOG_LEVEL.

    Returns:
        Numeric log level. Unknown names fall back to info.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    return structlog.stdlib.NAME_TO_LEVEL.get(level.lower(), 20)


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Configure structlog for a generator run.

    Args:
        level: Level name; None reads VECTORGEN_LOG_LEVEL (default info).
        stream: Destination stream, stderr by default.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
