"""Reusable ``common`` error templates.

Templates are shared prototypes and are never raised themselves. Each raise
site builds its own ``AppError`` from one::

    raise templates.NOT_FOUND.with_field("user_id", user_id)
    raise templates.INTERNAL() from exc

Enriched copies still satisfy ``copy.matches(template)``.
"""

from __future__ import annotations

import grpc

from . import codes
from .types import new_template

INTERNAL = new_template(
    codes.COMMON_SERVICE, codes.INTERNAL, "internal error"
).with_grpc_code(grpc.StatusCode.INTERNAL)
INVALID_INPUT = new_template(
    codes.COMMON_SERVICE, codes.INVALID_INPUT, "invalid input"
).with_grpc_code(grpc.StatusCode.INVALID_ARGUMENT)
NOT_FOUND = new_template(
    codes.COMMON_SERVICE, codes.NOT_FOUND, "not found"
).with_grpc_code(grpc.StatusCode.NOT_FOUND)
PERMISSION_DENIED = new_template(
    codes.COMMON_SERVICE, codes.PERMISSION_DENIED, "permission denied"
).with_grpc_code(grpc.StatusCode.PERMISSION_DENIED)
TIMEOUT = new_template(
    codes.COMMON_SERVICE, codes.TIMEOUT, "timeout"
).with_grpc_code(grpc.StatusCode.DEADLINE_EXCEEDED)
UNAVAILABLE = new_template(
    codes.COMMON_SERVICE, codes.UNAVAILABLE, "dependency unavailable"
).with_grpc_code(grpc.StatusCode.UNAVAILABLE)
