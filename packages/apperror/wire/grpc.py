"""gRPC server/client glue for the status codec."""

from __future__ import annotations

import logging

import grpc
from google.protobuf import message as protobuf_message
from google.rpc import status_pb2
from grpc_status import rpc_status
from opentelemetry.context import Context

from ..errors import AppError, exception_to_app_error, find_in_chain
from .codec import decode, encode, status_code_value

logger = logging.getLogger(__name__)


def to_grpc_status(err: AppError, *, context: Context | None = None) -> grpc.Status:
    """Encode ``err`` into a ``grpc.Status`` with details in trailing metadata."""
    return rpc_status.to_status(encode(err, context=context))


def abort(
    servicer_context: grpc.ServicerContext,
    exc: BaseException,
    *,
    context: Context | None = None,
) -> None:
    """Abort the current RPC with the structured status for ``exc``.

    The first ``AppError`` in the chain is sent as-is; any other exception is
    normalized first. gRPC raises from ``abort_with_status`` to end the call.
    """
    err = find_in_chain(exc, AppError) or exception_to_app_error(exc)
    servicer_context.abort_with_status(to_grpc_status(err, context=context))


def from_rpc_error(error: grpc.RpcError) -> AppError:
    """Map one client-side ``RpcError`` back into an ``AppError``.

    Rich status from trailing metadata is preferred. Calls without it, or with
    a trailer that disagrees with the call's own code/message, are decoded
    from the call code and details alone.
    """
    status = _rich_status(error)
    if status is None:
        code = error.code() if hasattr(error, "code") else grpc.StatusCode.UNKNOWN
        details = error.details() if hasattr(error, "details") else str(error)
        status = status_pb2.Status(code=status_code_value(code), message=details or "")
    decoded = decode(status)
    assert decoded is not None
    return decoded


def _rich_status(error: grpc.RpcError) -> status_pb2.Status | None:
    """Return the ``google.rpc.Status`` trailer of ``error``, if usable."""
    if not hasattr(error, "trailing_metadata"):
        return None
    try:
        return rpc_status.from_call(error)
    except (ValueError, protobuf_message.DecodeError) as exc:
        logger.debug("Ignoring inconsistent status trailer: %s", exc)
        return None
