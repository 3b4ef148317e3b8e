"""Trace id resolution from OpenTelemetry and the logging context."""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.context import Context

from .context import context_trace_id


def resolve_trace_id(context: Context | None = None) -> str | None:
    """Return the correlation id for ``context`` (or the current context).

    A valid OpenTelemetry span wins and yields the 32-hex trace id. Without an
    explicit ``context``, the ``trace_id`` bound through ``log_context`` is the
    fallback. An explicit ``context`` is looked up in isolation from that
    ambient state.
    """
    span_context = trace.get_current_span(context).get_span_context()
    if span_context.is_valid:
        return trace.format_trace_id(span_context.trace_id)
    if context is not None:
        return None
    return context_trace_id()
