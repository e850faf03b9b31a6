"""Structured logging configuration for meilisearch-lite.

The library itself only emits events through structlog loggers; nothing is
printed unless the application (or the CLI) calls :func:`configure_logging`.
Supported outputs:
- Colorized console output for development (TTY detection)
- logfmt for machine-parseable plain text
- JSON lines
- Call ID tracking via contextvars, so every event emitted while a request
  is dispatched can be correlated
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import (
    bind_contextvars,
    merge_contextvars,
    unbind_contextvars,
)
from structlog.processors import TimeStamper, add_log_level


if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor, WrappedLogger

__all__ = [
    "LogFormat",
    "LogLevel",
    "clear_call_context",
    "configure_logging",
    "generate_call_id",
    "get_call_id",
    "get_logger",
    "set_call_id",
]


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_stdlib_level(self) -> int:
        """Convert to stdlib logging level.

        Returns:
            The corresponding logging module level constant.
        """
        level: int = getattr(logging, self.name)
        return level


class LogFormat(StrEnum):
    """Log output format.

    Attributes:
        AUTO: Console renderer on a TTY, logfmt otherwise.
        CONSOLE: Human-readable console output.
        LOGFMT: key=value pairs, one event per line.
        JSON: One JSON object per line.
    """

    AUTO = "auto"
    CONSOLE = "console"
    LOGFMT = "logfmt"
    JSON = "json"


_call_id_var: ContextVar[str | None] = ContextVar("call_id", default=None)


def generate_call_id() -> str:
    """Generate a new unique call ID.

    Returns:
        A short UUID-based call ID (first 8 characters).
    """
    return uuid.uuid4().hex[:8]


def get_call_id() -> str | None:
    """Get the current call ID from context.

    Returns:
        The current call ID, or None if not set.
    """
    return _call_id_var.get()


def set_call_id(call_id: str | None = None) -> str:
    """Set the call ID in context.

    If no call_id is provided, a new one is generated.
    Also binds the call_id to structlog's contextvars.

    Args:
        call_id: Optional call ID to set. If None, generates a new one.

    Returns:
        The call ID that was set.
    """
    if call_id is None:
        call_id = generate_call_id()

    _call_id_var.set(call_id)
    bind_contextvars(call_id=call_id)
    return call_id


def clear_call_context() -> None:
    """Clear the call ID from context and from structlog's contextvars."""
    _call_id_var.set(None)
    unbind_contextvars("call_id")


def add_call_id(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add call_id to event dict if present in context and not already set.

    Args:
        logger: The wrapped logger object (unused but required by protocol).
        method_name: The name of the log method called (unused but required).
        event_dict: The event dictionary to process.

    Returns:
        The event dictionary with call_id added if available.
    """
    del logger, method_name  # Unused but required by processor protocol
    if "call_id" not in event_dict:
        call_id = get_call_id()
        if call_id is not None:
            event_dict["call_id"] = call_id
    return event_dict


def _create_renderer(log_format: LogFormat) -> Processor:
    """Create the final renderer for the processor chain.

    Args:
        log_format: Resolved output format (never AUTO).

    Returns:
        Configured renderer processor.
    """
    if log_format is LogFormat.CONSOLE:
        return structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    if log_format is LogFormat.JSON:
        return structlog.processors.JSONRenderer(sort_keys=False)
    return structlog.processors.LogfmtRenderer(
        key_order=["timestamp", "level", "event", "call_id"],
        drop_missing=True,
        bool_as_flag=False,
    )


def _resolve_format(
    log_format: LogFormat | str,
    force_colors: bool | None,  # noqa: FBT001
) -> LogFormat:
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())
    if log_format is not LogFormat.AUTO:
        return log_format
    if force_colors is not None:
        use_colors = force_colors
    else:
        use_colors = (
            sys.stderr is not None
            and hasattr(sys.stderr, "isatty")
            and sys.stderr.isatty()
        )
    return LogFormat.CONSOLE if use_colors else LogFormat.LOGFMT


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    *,
    log_format: LogFormat | str = LogFormat.AUTO,
    force_colors: bool | None = None,
) -> None:
    """Configure structured logging for the application.

    Sets up structlog with ISO 8601 UTC timestamps, log level names, the
    current call ID and the selected renderer. Library code never calls
    this; it is meant for applications and the CLI.

    Args:
        level: Minimum log level. Can be a LogLevel enum or string
            ('debug', 'info', 'warning', 'error', 'critical').
        log_format: Output format. AUTO picks console on a TTY and logfmt
            otherwise.
        force_colors: With AUTO format, force console output on/off instead
            of detecting a TTY.

    Example:
        >>> from meilisearch_lite.observability import configure_logging
        >>> configure_logging(level="debug", log_format="json")
    """
    if isinstance(level, str):
        level = LogLevel(level.lower())

    resolved = _resolve_format(log_format, force_colors)

    processors: list[Processor] = [
        merge_contextvars,
        add_call_id,
        add_log_level,
        TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if resolved is not LogFormat.CONSOLE:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_create_renderer(resolved))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level.to_stdlib_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # httpx logs through stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level.to_stdlib_level(),
        force=True,
    )


def get_logger(
    name: str | None = None,
    **initial_context: object,
) -> structlog.typing.FilteringBoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.
        **initial_context: Initial key-value pairs to bind to the logger.

    Returns:
        A bound structlog logger.

    Example:
        >>> logger = get_logger(__name__, api="Indexes")
        >>> logger.info("index_created", uid="movies")
    """
    log: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    if initial_context:
        log = log.bind(**initial_context)
    return log
