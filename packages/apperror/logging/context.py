"""Request-scoped logging context.

Values bound here are attached to every log record by ``ContextFilter`` and
act as the fallback source for trace ids when no OpenTelemetry span is active.
Each binding installs a fresh read-only mapping, so snapshots handed out by
``get_context`` never change underneath their holder.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Iterator, Mapping

from . import fields

_LOG_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar(
    "apperror_log_context", default=MappingProxyType({})
)


def get_context() -> dict[str, str]:
    """Return a copy of the current logging context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind stringified values into the current context; ``None`` is skipped."""
    bound = {str(key): str(value) for key, value in values.items() if value is not None}
    if not bound:
        return
    _LOG_CONTEXT.set(MappingProxyType({**_LOG_CONTEXT.get(), **bound}))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of a block."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)


def context_trace_id() -> str | None:
    """Return the trace id bound in the logging context, if any."""
    return _LOG_CONTEXT.get().get(fields.TRACE_ID) or None
