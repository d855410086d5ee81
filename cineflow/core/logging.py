"""
Structured Logging Configuration

structlog setup for a command-line client: every log line goes to stderr
so it never mixes with command output on stdout. Development renders
readable console lines; any other environment emits JSON.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.types import Processor

from ..config import Settings, get_settings

# Third-party loggers that log every HTTP request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _renderer(settings: Settings) -> List[Processor]:
    if settings.environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(log_level: Optional[str] = None):
    """
    Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR. Defaults to DEBUG when
            `settings.debug` is on, otherwise INFO.
    """
    settings = get_settings()
    if log_level is None:
        log_level = "DEBUG" if settings.debug else "INFO"
    level = getattr(logging, log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    # Per-request transport logs only show up in debug runs
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=processors + _renderer(settings),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "cineflow") -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
