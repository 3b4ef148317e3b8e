"""HTTP error bodies for gRPC failures surfaced through FastAPI.

Status codes follow grpc-gateway's ``HTTPStatusFromCode`` table. The body
shape is ``{code, service, service_code, message, fields?, trace_id?}``.
"""

from __future__ import annotations

import logging

import grpc
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from google.rpc import status_pb2
from pydantic import BaseModel

from ..errors import AppError, codes
from ..logging import fields as log_fields
from ..logging.context import log_context
from ..logging.trace import resolve_trace_id
from ..wire import decode, from_rpc_error

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Service unavailable. Please try again later."

HTTP_STATUS_BY_GRPC_CODE: dict[grpc.StatusCode, int] = {
    grpc.StatusCode.OK: 200,
    grpc.StatusCode.CANCELLED: 499,
    grpc.StatusCode.UNKNOWN: 500,
    grpc.StatusCode.INVALID_ARGUMENT: 400,
    grpc.StatusCode.DEADLINE_EXCEEDED: 504,
    grpc.StatusCode.NOT_FOUND: 404,
    grpc.StatusCode.ALREADY_EXISTS: 409,
    grpc.StatusCode.PERMISSION_DENIED: 403,
    grpc.StatusCode.UNAUTHENTICATED: 401,
    grpc.StatusCode.RESOURCE_EXHAUSTED: 429,
    grpc.StatusCode.FAILED_PRECONDITION: 400,
    grpc.StatusCode.ABORTED: 409,
    grpc.StatusCode.OUT_OF_RANGE: 400,
    grpc.StatusCode.UNIMPLEMENTED: 501,
    grpc.StatusCode.INTERNAL: 500,
    grpc.StatusCode.UNAVAILABLE: 503,
    grpc.StatusCode.DATA_LOSS: 500,
}


class HttpErrorBody(BaseModel):
    """Outward-facing JSON error body."""

    code: int
    service: str = ""
    service_code: str = ""
    message: str
    fields: dict[str, str] | None = None
    trace_id: str | None = None


def http_status_from_code(code: grpc.StatusCode | None) -> int:
    """Map a gRPC status code to its HTTP status; unknown codes map to 500."""
    if code is None:
        return 500
    return HTTP_STATUS_BY_GRPC_CODE.get(code, 500)


def http_error_from_status(
    status: status_pb2.Status, *, trace_id: str | None = None
) -> HttpErrorBody:
    """Build the HTTP body for one inbound status."""
    err = decode(status)
    assert err is not None
    return _body_from_error(err, trace_id=trace_id)


def http_error_from_app_error(
    err: AppError, *, trace_id: str | None = None
) -> HttpErrorBody:
    """Build the HTTP body for an ``AppError`` raised in-process.

    The body is projected from the error itself; no status encoding (and so
    no detail size limit) is involved. Unset and ``OK`` codes report 500.
    """
    code = err.grpc_code
    if code is None or code == grpc.StatusCode.OK:
        code = grpc.StatusCode.UNKNOWN
    return _body_from_error(err.with_grpc_code(code), trace_id=trace_id)


def http_error_from_rpc_error(
    error: grpc.RpcError, *, trace_id: str | None = None
) -> HttpErrorBody:
    """Build the HTTP body for one client-side ``RpcError``."""
    return _body_from_error(from_rpc_error(error), trace_id=trace_id)


def install_error_handlers(app: FastAPI) -> None:
    """Register JSON error handlers for ``grpc.RpcError`` and ``AppError``."""
    app.add_exception_handler(grpc.RpcError, _handle_rpc_error)
    app.add_exception_handler(AppError, _handle_app_error)


async def _handle_rpc_error(request: Request, exc: Exception) -> JSONResponse:
    """Render an upstream gRPC failure."""
    assert isinstance(exc, grpc.RpcError)
    body = http_error_from_rpc_error(exc, trace_id=resolve_trace_id())
    return _respond(request, body)


async def _handle_app_error(request: Request, exc: Exception) -> JSONResponse:
    """Render an ``AppError`` raised directly by a route."""
    assert isinstance(exc, AppError)
    body = http_error_from_app_error(exc, trace_id=resolve_trace_id())
    return _respond(request, body)


def _body_from_error(err: AppError, *, trace_id: str | None) -> HttpErrorBody:
    """Project a decoded error onto the HTTP body shape."""
    resolved_trace_id = trace_id or err.trace_id
    unstructured = (
        err.service == codes.UNKNOWN_SERVICE and err.code == codes.UNKNOWN_CODE
    )
    if unstructured and err.grpc_code == grpc.StatusCode.UNAVAILABLE:
        return HttpErrorBody(
            code=503,
            message=UNAVAILABLE_MESSAGE,
            trace_id=resolved_trace_id,
        )
    return HttpErrorBody(
        code=http_status_from_code(err.grpc_code),
        service=err.service,
        service_code=err.code,
        message=err.message,
        fields=dict(err.fields) or None,
        trace_id=resolved_trace_id,
    )


def _respond(request: Request, body: HttpErrorBody) -> JSONResponse:
    """Log and serialize one error body."""
    with log_context(
        {
            log_fields.SERVICE: body.service,
            log_fields.CODE: body.service_code,
            "path": request.url.path,
        }
    ):
        logger.warning("Request failed with HTTP %s: %s", body.code, body.message)
    return JSONResponse(status_code=body.code, content=body.model_dump(exclude_none=True))
