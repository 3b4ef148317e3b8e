"""Wire codec between ``AppError`` and gRPC rich status."""

from .codec import (
    MARSHAL_FAILURE_MESSAGE,
    decode,
    encode,
    status_code_from_value,
    status_code_value,
)
from .detail import ErrorDetail
from .grpc import abort, from_rpc_error, to_grpc_status

__all__ = [
    "MARSHAL_FAILURE_MESSAGE",
    "ErrorDetail",
    "abort",
    "decode",
    "encode",
    "from_rpc_error",
    "status_code_from_value",
    "status_code_value",
    "to_grpc_status",
]
