"""Structlog configuration for the application.

Probes log through structlog; this module decides how those events are
rendered. Interactive runs get the console renderer, everything else gets
one JSON object per line on stdout.
"""

import logging
import os
import sys

import structlog

_TRUTHY = ("1", "true", "yes")


def _wants_color() -> bool:
    # FORCE_COLOR covers containers, where stdout is not a TTY
    return os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY or sys.stdout.isatty()


def _min_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for the Tracker probes.

    Args:
        log_level: Minimum level name; events below it are dropped and
            unknown names behave like INFO
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if _wants_color():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_min_level(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
