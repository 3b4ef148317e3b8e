"""Stdout logging configuration with structured error payloads.

Design goals:
- Always emit logs to stdout for container log collection.
- Render ``AppError`` exceptions as structured ``error`` objects rather than
  flattened strings, with the ambient trace id attached.
- Keep the API small; this is configuration, not a logging framework.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from ..config import AppErrorSettings
from ..errors import AppError, find_in_chain
from . import fields
from .context import bind_context, get_context
from .serializer import to_log_dict


class ContextFilter(logging.Filter):
    """Inject the current logging context into each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        setattr(record, "context", get_context())
        return True


class JsonFormatter(logging.Formatter):
    """Emit newline-delimited JSON logs with stable core fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.now(UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            payload.update(context)

        error = _error_payload(record)
        if error is not None:
            payload[fields.ERROR] = error
        if record.exc_info:
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)

        return _compact_json(payload)


class PlainFormatter(logging.Formatter):
    """Human-readable formatter that appends context and error ``key=value`` pairs.

    An ``AppError`` in the logged exception chain is appended as
    ``error=<json>`` so its fields survive without parsing the traceback.
    """

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs: list[str] = []
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            pairs.extend(f"{key}={value}" for key, value in sorted(context.items()))
        error = _error_payload(record)
        if error is not None:
            pairs.append(f"{fields.ERROR}={_compact_json(error)}")
        if not pairs:
            return message
        return f"{message} {' '.join(pairs)}"


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
) -> None:
    """Configure root logging with a single stdout handler.

    Existing root handlers are replaced, so repeated calls do not duplicate
    output. ``service`` and ``environment`` are bound into the logging context.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level.upper())
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())
    root.addHandler(handler)

    bind_context(**{fields.SERVICE: service, fields.ENVIRONMENT: environment})


def configure_logging_from_settings(settings: AppErrorSettings) -> None:
    """Apply the ``logging`` section of resolved settings."""
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )


def _error_payload(record: logging.LogRecord) -> dict[str, Any] | None:
    """Return the structured payload of an ``AppError`` in ``exc_info``."""
    if not record.exc_info:
        return None
    exc = record.exc_info[1]
    if exc is None or find_in_chain(exc, AppError) is None:
        return None
    return to_log_dict(exc)


def _compact_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, default=str, separators=(",", ":"))
