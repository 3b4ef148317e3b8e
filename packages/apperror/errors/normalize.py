"""Exception normalization into ``AppError`` values."""

from __future__ import annotations

from . import codes, templates
from .types import AppError


def exception_to_app_error(exc: BaseException) -> AppError:
    """Normalize a Python exception into an ``AppError``.

    ``AppError`` instances pass through unchanged. Other exceptions are
    wrapped (kept as the cause) with the closest common template. The
    mapping is deliberately coarse; services should wrap their own failures
    with their own templates before falling back to this function.
    """
    if isinstance(exc, AppError):
        return exc

    if isinstance(exc, ValueError):
        template = templates.INVALID_INPUT
    elif isinstance(exc, KeyError):
        template = templates.NOT_FOUND
    elif isinstance(exc, PermissionError):
        template = templates.PERMISSION_DENIED
    elif isinstance(exc, TimeoutError):
        template = templates.TIMEOUT
    elif isinstance(exc, ConnectionError):
        template = templates.UNAVAILABLE
    else:
        template = templates.INTERNAL

    return template.with_cause(exc).with_field(
        codes.EXCEPTION_TYPE_FIELD, type(exc).__name__
    )
