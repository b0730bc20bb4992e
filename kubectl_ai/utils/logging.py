"""Structured logging for kubectl-ai.

stdout belongs to the user: it carries the manifest echo, the confirmation
prompt and kubectl's output, and may be piped or captured. Log events are
therefore written to stderr only, and stay silent below WARNING unless
``--verbose`` is given.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: int = logging.WARNING) -> None:
    """Route structlog events at or above ``level`` to stderr.

    Args:
        level: Standard logging level; ``--verbose`` selects logging.DEBUG,
            which traces pipeline transitions and kubectl invocations.
    """
    stream = sys.stderr
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=stream.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Reconfigured per invocation; cached loggers would keep the old stream
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structlog logger."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
