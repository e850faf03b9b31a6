"""Observability module (structured logging and dispatch hooks)."""

from __future__ import annotations

from meilisearch_lite.observability.logging import (
    LogFormat,
    LogLevel,
    clear_call_context,
    configure_logging,
    generate_call_id,
    get_call_id,
    get_logger,
    set_call_id,
)


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
