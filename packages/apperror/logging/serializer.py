"""JSON rendering of errors for structured logs."""

from __future__ import annotations

import json
from typing import Any

from opentelemetry.context import Context

from ..errors import AppError, find_in_chain
from . import fields
from .trace import resolve_trace_id


def to_log_dict(err: BaseException, *, context: Context | None = None) -> dict[str, Any]:
    """Return the log payload for ``err``.

    The first ``AppError`` in the chain is rendered from its data fields, never
    from its text form. Errors without one become ``{"error": str(err)}``.
    Empty ``service``, ``code`` and ``fields`` are omitted, as is an
    unresolved trace id.
    """
    app_err = find_in_chain(err, AppError)
    if app_err is None:
        return {fields.ERROR: str(err)}

    payload: dict[str, Any] = {}
    if app_err.service:
        payload[fields.SERVICE] = app_err.service
    if app_err.code:
        payload[fields.CODE] = app_err.code
    payload[fields.MESSAGE] = app_err.message
    if app_err.fields:
        payload[fields.FIELDS] = dict(app_err.fields)

    trace_id = resolve_trace_id(context) or app_err.trace_id
    if trace_id:
        payload[fields.TRACE_ID] = trace_id
    return payload


def to_log_json(err: BaseException, *, context: Context | None = None) -> bytes:
    """Return ``to_log_dict(err)`` as compact UTF-8 JSON; never raises."""
    payload = to_log_dict(err, context=context)
    try:
        return _dumps(payload)
    except (TypeError, ValueError) as exc:
        return _dumps({fields.ERROR: f"failed to marshal app error: {exc}"})


def _dumps(payload: dict[str, Any]) -> bytes:
    """Serialize one payload compactly."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
