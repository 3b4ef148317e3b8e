"""Canonical structured error value.

``AppError`` carries a machine-readable identity (service + code), a
human-readable message, string key/value fields, an optional cause, an
optional gRPC status code and an optional trace id. Values are immutable:
every builder method returns a new instance.

Shared module-level errors should be ``ErrorTemplate`` prototypes rather than
``AppError`` instances. The interpreter writes traceback and cause state onto
whatever exception object is raised, so a raised shared instance would be
mutated by every raise site. Templates are not exceptions and hand out a fresh
``AppError`` from each builder call.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

import grpc

ErrorFields = Mapping[str, str]


@dataclass(frozen=True, eq=False)
class AppError(Exception):
    """Structured application error with service context and fields."""

    service: str
    code: str
    message: str
    fields: ErrorFields = field(default_factory=dict)
    cause: BaseException | None = field(default=None, repr=False)
    grpc_code: grpc.StatusCode | None = None
    trace_id: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Freeze fields and mirror ``cause`` onto the exception chain."""
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields or {})))
        if isinstance(self.cause, BaseException):
            object.__setattr__(self, "__cause__", self.cause)
            object.__setattr__(self, "__suppress_context__", True)

    def __str__(self) -> str:
        """Return the rendered error text."""
        return self.render()

    def render(self) -> str:
        """Render ``[service:code] message``, fields and cause as one line."""
        text = f"[{self.service}:{self.code}] {self.message}"
        if self.fields:
            # NOTE: field order follows insertion and is not a contract.
            pairs = ", ".join(
                f"{_quote(key)}:{_quote(value)}" for key, value in self.fields.items()
            )
            text += f" [fields:{{{pairs}}}]"
        if self.cause is not None:
            text += f": {self.cause}"
        return text

    def unwrap(self) -> BaseException | None:
        """Return the immediate cause, if any."""
        return self.cause

    def matches(self, candidate: object) -> bool:
        """Return whether ``candidate`` is the same kind of error.

        Identity is ``service`` + ``code``. Fields on ``candidate`` must all be
        present with equal values on this error; extra fields here are
        ignored. This lets call sites test an enriched error against the
        ``ErrorTemplate`` or ``AppError`` it was built from.
        """
        if not isinstance(candidate, (AppError, ErrorTemplate)):
            return False
        if self.service != candidate.service or self.code != candidate.code:
            return False
        for key, value in candidate.fields.items():
            if key not in self.fields or self.fields[key] != value:
                return False
        return True

    def with_field(self, key: str, value: str) -> AppError:
        """Return a copy with one field added or overwritten."""
        return self.add_fields({key: value})

    def add_fields(self, fields: ErrorFields) -> AppError:
        """Return a copy with ``fields`` merged over the existing fields.

        An empty mapping returns this same instance.
        """
        if not fields:
            return self
        merged = dict(self.fields)
        merged.update(fields)
        return replace(self, fields=merged)

    def with_fields(self, fields: ErrorFields) -> AppError:
        """Return a copy whose fields are replaced wholesale."""
        return replace(self, fields=fields)

    def with_grpc_code(self, code: grpc.StatusCode) -> AppError:
        """Return a copy carrying the gRPC status code used on encode."""
        return replace(self, grpc_code=code)

    def with_trace_id(self, trace_id: str | None) -> AppError:
        """Return a copy carrying a correlation id."""
        return replace(self, trace_id=trace_id)

    def with_cause(self, cause: BaseException | None) -> AppError:
        """Return a copy pointing at ``cause``."""
        return replace(self, cause=cause)


@dataclass(frozen=True)
class ErrorTemplate:
    """Shared prototype for one kind of ``AppError``; never raised itself.

    Call the template, or any of its builder methods, to get a fresh
    ``AppError``::

        raise USER_NOT_FOUND.with_field("id", user_id)
        raise USER_NOT_FOUND() from exc

    ``raise USER_NOT_FOUND`` fails with ``TypeError`` instead of silently
    sharing one exception object between raise sites.
    """

    service: str
    code: str
    message: str
    grpc_code: grpc.StatusCode | None = None

    @property
    def fields(self) -> ErrorFields:
        """Templates carry no fields."""
        return MappingProxyType({})

    def __call__(self) -> AppError:
        """Return a fresh error with this template's identity and code."""
        return AppError(
            service=self.service,
            code=self.code,
            message=self.message,
            grpc_code=self.grpc_code,
        )

    def with_grpc_code(self, code: grpc.StatusCode) -> ErrorTemplate:
        """Return a template carrying the gRPC status code used on encode."""
        return replace(self, grpc_code=code)

    def with_field(self, key: str, value: str) -> AppError:
        return self().with_field(key, value)

    def add_fields(self, fields: ErrorFields) -> AppError:
        return self().add_fields(fields)

    def with_fields(self, fields: ErrorFields) -> AppError:
        return self().with_fields(fields)

    def with_trace_id(self, trace_id: str | None) -> AppError:
        return self().with_trace_id(trace_id)

    def with_cause(self, cause: BaseException | None) -> AppError:
        return self().with_cause(cause)


def new(service: str, code: str, message: str) -> AppError:
    """Create a root error with no cause."""
    return AppError(service=service, code=code, message=message)


def new_template(service: str, code: str, message: str) -> ErrorTemplate:
    """Create a shared template for errors of one kind."""
    return ErrorTemplate(service=service, code=code, message=message)


def wrap(
    err: BaseException | None, template: AppError | ErrorTemplate
) -> AppError | None:
    """Attach ``err`` as the cause of a copy of ``template``.

    Returns ``None`` when ``err`` is ``None`` so callers can wrap whatever
    they got back without checking first.
    """
    if err is None:
        return None
    return template.with_cause(err)


def _quote(value: str) -> str:
    """Double-quote one string with JSON escaping."""
    return json.dumps(value, ensure_ascii=False)
