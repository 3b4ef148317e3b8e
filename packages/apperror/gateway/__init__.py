"""Thin HTTP gateway adapter over the wire codec."""

from .http import (
    HTTP_STATUS_BY_GRPC_CODE,
    UNAVAILABLE_MESSAGE,
    HttpErrorBody,
    http_error_from_app_error,
    http_error_from_rpc_error,
    http_error_from_status,
    http_status_from_code,
    install_error_handlers,
)

__all__ = [
    "HTTP_STATUS_BY_GRPC_CODE",
    "UNAVAILABLE_MESSAGE",
    "HttpErrorBody",
    "http_error_from_app_error",
    "http_error_from_rpc_error",
    "http_error_from_status",
    "http_status_from_code",
    "install_error_handlers",
]
