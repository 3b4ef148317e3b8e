"""Structured error value, templates and chain helpers."""

from . import codes, templates
from .chain import chain_contains, find_in_chain, iter_chain
from .normalize import exception_to_app_error
from .types import AppError, ErrorFields, ErrorTemplate, new, new_template, wrap

__all__ = [
    "AppError",
    "ErrorFields",
    "ErrorTemplate",
    "chain_contains",
    "codes",
    "exception_to_app_error",
    "find_in_chain",
    "iter_chain",
    "new",
    "new_template",
    "templates",
    "wrap",
]
