"""Structured logging for the graph lab.

Library modules emit snake_case events through structlog; this module decides
where they end up. Events are routed through the standard library, so
ordinary handlers (and pytest's ``caplog``) see them, and each one is rendered
either as a JSON object or as a plain console line. Command results are
printed on stdout, so log lines go to stderr unless another stream is given.

Example:
    >>> from graphlab.log_config import configure_logging, get_logger, log_context
    >>> configure_logging(level="INFO", json_logs=False)
    >>> with log_context(graph="weighted", command="shortest-path"):
    ...     get_logger(__name__).info("query_started", start=0, stop=2)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(
    level: str = "INFO",
    json_logs: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the graph lab.

    Args:
        level: One of LOG_LEVELS, case-insensitive
        json_logs: If True, use JSONRenderer; if False, use ConsoleRenderer
        stream: Destination of the log lines; defaults to sys.stderr

    Raises:
        ValueError: If an invalid log level is provided
    """
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        msg = f"Invalid log level: {level}"
        raise ValueError(msg)
    numeric_level = getattr(logging, level_name)

    # No-op when the root logger already has handlers (pytest installs its own)
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=numeric_level,
    )
    logging.getLogger().setLevel(numeric_level)

    processors: list[Any] = [
        # Per-edge debug events are dropped before any rendering work
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        )

    # Loggers are not cached: the CLI reconfigures once the config file is read
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind context variables for the duration of a ``with`` block.

    Values bound before the block are restored when it exits, even if the
    block raises.

    Example:
        >>> with log_context(graph="g1", command="dfs"):
        ...     logger.info("command_started")  # carries graph and command
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


def bind_correlation_id(correlation_id: str) -> None:
    """Tag every following log line in this context with ``correlation_id``."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def unbind_correlation_id() -> None:
    structlog.contextvars.unbind_contextvars("correlation_id")


def clear_context() -> None:
    """Drop every context variable bound so far."""
    structlog.contextvars.clear_contextvars()
