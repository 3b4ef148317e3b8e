"""Structured errors that survive gRPC boundaries and structured logs.

Typical use::

    ErrUserNotFound = new_template(
        "user-service", "US-404", "user not found"
    ).with_grpc_code(grpc.StatusCode.NOT_FOUND)

    err = ErrUserNotFound.with_field("id", user_id)
    status = encode(err)          # google.rpc.Status for the wire
    same = decode(status)         # AppError on the other side
    logger.warning(to_log_json(err))

The HTTP gateway adapter lives in ``packages.apperror.gateway`` and is not
imported here so FastAPI stays optional.
"""

from packages.apperror.config import AppErrorSettings, load_settings
from packages.apperror.errors import (
    AppError,
    ErrorFields,
    ErrorTemplate,
    chain_contains,
    codes,
    exception_to_app_error,
    find_in_chain,
    iter_chain,
    new,
    new_template,
    templates,
    wrap,
)
from packages.apperror.logging import (
    configure_logging,
    configure_logging_from_settings,
    log_context,
    resolve_trace_id,
    to_log_dict,
    to_log_json,
)
from packages.apperror.wire import (
    ErrorDetail,
    abort,
    decode,
    encode,
    from_rpc_error,
    to_grpc_status,
)

__all__ = [
    "AppError",
    "AppErrorSettings",
    "ErrorDetail",
    "ErrorFields",
    "ErrorTemplate",
    "abort",
    "chain_contains",
    "codes",
    "configure_logging",
    "configure_logging_from_settings",
    "decode",
    "encode",
    "exception_to_app_error",
    "find_in_chain",
    "from_rpc_error",
    "iter_chain",
    "load_settings",
    "log_context",
    "new",
    "new_template",
    "resolve_trace_id",
    "templates",
    "to_grpc_status",
    "to_log_dict",
    "to_log_json",
    "wrap",
]
