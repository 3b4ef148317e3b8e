"""Lossless conversion between ``AppError`` and ``google.rpc.Status``.

``encode`` never fails: when the structured detail cannot be attached the
caller gets a generic ``INTERNAL`` status instead. ``decode`` never fails
either: statuses without a structured detail degrade to an ``unknown`` error
that still carries the status code and message.
"""

from __future__ import annotations

import logging

import grpc
from google.protobuf import any_pb2
from google.protobuf import message as protobuf_message
from google.rpc import error_details_pb2, status_pb2
from opentelemetry.context import Context
from pydantic import ValidationError
from pydantic_settings import SettingsError
import yaml

from ..config import WireSettings, default_settings
from ..errors import AppError, codes
from ..logging import fields
from ..logging.context import log_context
from ..logging.trace import resolve_trace_id
from .detail import ErrorDetail

logger = logging.getLogger(__name__)

MARSHAL_FAILURE_MESSAGE = "failed to marshal error"

_STATUS_CODE_BY_VALUE: dict[int, grpc.StatusCode] = {
    code.value[0]: code for code in grpc.StatusCode
}


def status_code_value(code: grpc.StatusCode) -> int:
    """Return the wire integer for one gRPC status code."""
    return code.value[0]


def status_code_from_value(value: int) -> grpc.StatusCode:
    """Return the gRPC status code for a wire integer; unknown maps to UNKNOWN."""
    return _STATUS_CODE_BY_VALUE.get(value, grpc.StatusCode.UNKNOWN)


def encode(
    err: AppError,
    *,
    context: Context | None = None,
    max_detail_bytes: int | None = None,
) -> status_pb2.Status:
    """Convert ``err`` into a status carrying one packed ``ErrorDetail``.

    An unset or ``OK`` code is reported as ``UNKNOWN``. When a trace id
    resolves (from ``context``, else from ``err.trace_id``) it travels as a
    ``google.rpc.RequestInfo`` detail. Attachment failures, and a serialized
    size above ``max_detail_bytes`` when a limit is given or configured, yield
    an ``INTERNAL`` "failed to marshal error" status without any of the
    original content. No limit applies by default.
    """
    wire = _wire_settings()
    limit = max_detail_bytes if max_detail_bytes is not None else wire.max_detail_bytes

    code = err.grpc_code
    if code is None or code == grpc.StatusCode.OK:
        code = grpc.StatusCode.UNKNOWN

    trace_id = None
    if wire.attach_request_info:
        trace_id = resolve_trace_id(context) or err.trace_id

    try:
        status = status_pb2.Status(code=status_code_value(code), message=err.message)
        status.details.add().Pack(
            ErrorDetail(
                service=err.service,
                code=err.code,
                message=err.message,
                fields=dict(err.fields),
            )
        )
        if trace_id:
            status.details.add().Pack(error_details_pb2.RequestInfo(request_id=trace_id))
        size = status.ByteSize()
    except (TypeError, ValueError, protobuf_message.Error) as exc:
        return _marshal_failure(err, reason=f"{type(exc).__name__}: {exc}")

    if limit is not None and size > limit:
        return _marshal_failure(err, reason=f"status size {size} exceeds {limit} bytes")
    return status


def decode(status: status_pb2.Status | None) -> AppError | None:
    """Rebuild an ``AppError`` from ``status``; ``None`` maps to ``None``."""
    if status is None:
        return None

    detail = None
    trace_id = None
    for item in status.details:
        if detail is None and item.Is(ErrorDetail.DESCRIPTOR):
            detail = _unpack(item, ErrorDetail)
        elif trace_id is None and item.Is(error_details_pb2.RequestInfo.DESCRIPTOR):
            info = _unpack(item, error_details_pb2.RequestInfo)
            if info is not None and info.request_id:
                trace_id = info.request_id

    grpc_code = status_code_from_value(status.code)
    if detail is None:
        return AppError(
            service=codes.UNKNOWN_SERVICE,
            code=codes.UNKNOWN_CODE,
            message=status.message,
            grpc_code=grpc_code,
            trace_id=trace_id,
        )
    return AppError(
        service=detail.service,
        code=detail.code,
        message=detail.message,
        fields=dict(detail.fields),
        grpc_code=grpc_code,
        trace_id=trace_id,
    )


def _unpack(item: any_pb2.Any, message_class: type) -> protobuf_message.Message | None:
    """Unpack one ``Any``; corrupt payloads are treated as absent."""
    target = message_class()
    try:
        if item.Unpack(target):
            return target
    except protobuf_message.DecodeError:
        logger.debug("Skipping undecodable status detail %s", item.type_url)
    return None


def _marshal_failure(err: AppError, *, reason: str) -> status_pb2.Status:
    """Log the dropped error and return the generic internal status."""
    with log_context({fields.SERVICE: err.service, fields.CODE: err.code}):
        logger.warning("Error detail attachment failed: %s", reason)
    return status_pb2.Status(
        code=status_code_value(grpc.StatusCode.INTERNAL),
        message=MARSHAL_FAILURE_MESSAGE,
    )


def _wire_settings() -> WireSettings:
    """Return configured wire settings, or defaults when config cannot load."""
    try:
        return default_settings().wire
    except (ValidationError, SettingsError, yaml.YAMLError, OSError) as exc:
        logger.warning(
            "Using default wire settings; configuration failed to load: %s", exc
        )
        return WireSettings()
