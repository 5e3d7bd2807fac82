"""structlog setup and the log sink capability handed to adapters."""

import logging
import sys
from typing import Any, Optional, Protocol

import structlog

from tastebuddy.config import settings


class LogSink(Protocol):
    """Side channel for warnings and errors raised inside adapters.

    A structlog BoundLogger satisfies this protocol. Implementations must not
    raise and must not block.
    """

    def warning(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure structlog for the process.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        json_logs: Render JSON lines instead of the console renderer,
            defaults to settings.LOG_JSON
    """
    level = level or settings.LOG_LEVEL
    if json_logs is None:
        json_logs = settings.LOG_JSON

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_sink(**initial_values: Any) -> LogSink:
    """Return the default structlog-backed sink, bound to initial_values."""
    return structlog.get_logger(**initial_values)
