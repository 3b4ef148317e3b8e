"""Structured log rendering for errors plus stdout logging setup."""

from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    configure_logging_from_settings,
)
from .context import bind_context, context_trace_id, get_context, log_context
from .serializer import to_log_dict, to_log_json
from .trace import resolve_trace_id

__all__ = [
    "ContextFilter",
    "JsonFormatter",
    "PlainFormatter",
    "bind_context",
    "configure_logging",
    "configure_logging_from_settings",
    "context_trace_id",
    "get_context",
    "log_context",
    "resolve_trace_id",
    "to_log_dict",
    "to_log_json",
]
