"""Tests for AppError construction, rendering, enrichment and chain helpers."""

from __future__ import annotations

import grpc
import pytest

from packages.apperror.errors import (
    AppError,
    chain_contains,
    find_in_chain,
    iter_chain,
    new,
    wrap,
)

USER_NOT_FOUND = new("user-service", "US-404", "user not found")
DATABASE = new("database", "DB-500", "internal database error")


def test_render_root_error_without_fields() -> None:
    """A root error renders as ``[service:code] message``."""
    assert new("svc", "C1", "msg").render() == "[svc:C1] msg"
    assert str(new("svc", "C1", "msg")) == "[svc:C1] msg"


def test_render_includes_quoted_fields() -> None:
    """Fields render as a quoted key/value block after the message."""
    err = USER_NOT_FOUND.with_field("id", "456")

    assert str(err) == '[user-service:US-404] user not found [fields:{"id":"456"}]'


def test_render_appends_cause_text() -> None:
    """The cause's text follows the rendered error after a colon."""
    err = wrap(ConnectionRefusedError("connection refused"), DATABASE)

    assert str(err) == "[database:DB-500] internal database error: connection refused"


def test_render_nested_app_error_cause() -> None:
    """Nested AppError causes render recursively."""
    inner = wrap(ValueError("bad id"), USER_NOT_FOUND)
    outer = wrap(inner, DATABASE)

    assert str(outer) == (
        "[database:DB-500] internal database error: "
        "[user-service:US-404] user not found: bad id"
    )


def test_add_fields_does_not_mutate_receiver() -> None:
    """Enrichment returns a new value and leaves the receiver untouched."""
    base = USER_NOT_FOUND.with_field("id", "1")
    enriched = base.add_fields({"id": "2", "attempt": "3"})

    assert dict(base.fields) == {"id": "1"}
    assert dict(enriched.fields) == {"id": "2", "attempt": "3"}
    assert enriched is not base
    assert USER_NOT_FOUND.fields == {}


def test_add_fields_with_empty_mapping_returns_same_instance() -> None:
    """Adding no fields returns the receiver itself."""
    assert USER_NOT_FOUND.add_fields({}) is USER_NOT_FOUND


def test_with_fields_replaces_instead_of_merging() -> None:
    """with_fields drops previous fields entirely."""
    err = USER_NOT_FOUND.with_field("id", "1").with_fields({"source": "web"})

    assert dict(err.fields) == {"source": "web"}


def test_fields_are_copied_and_read_only() -> None:
    """Caller-owned mappings cannot change the error after construction."""
    source = {"id": "1"}
    err = USER_NOT_FOUND.with_fields(source)
    source["id"] = "2"

    assert err.fields["id"] == "1"
    with pytest.raises(TypeError):
        err.fields["id"] = "3"  # type: ignore[index]


def test_with_grpc_code_only_changes_code() -> None:
    """Setting the transport code keeps identity, message and fields."""
    base = USER_NOT_FOUND.with_field("id", "1")
    coded = base.with_grpc_code(grpc.StatusCode.NOT_FOUND)

    assert base.grpc_code is None
    assert coded.grpc_code == grpc.StatusCode.NOT_FOUND
    assert (coded.service, coded.code, coded.message) == (
        base.service,
        base.code,
        base.message,
    )
    assert dict(coded.fields) == {"id": "1"}


def test_wrap_none_returns_none() -> None:
    """Wrapping no error yields no error."""
    assert wrap(None, USER_NOT_FOUND) is None


def test_wrap_copies_template_and_links_cause() -> None:
    """wrap attaches the cause to a copy and exposes it for unwrapping."""
    cause = RuntimeError("boom")
    err = wrap(cause, DATABASE)

    assert err is not None
    assert err is not DATABASE
    assert DATABASE.cause is None
    assert err.unwrap() is cause
    assert err.__cause__ is cause


def test_matches_uses_identity_and_field_subset() -> None:
    """Enriched copies still match their template, not the reverse."""
    template = USER_NOT_FOUND.with_field("tenant", "acme")
    enriched = template.with_field("id", "456")

    assert enriched.matches(template)
    assert enriched.matches(USER_NOT_FOUND)
    assert not template.matches(enriched)
    assert not enriched.matches(template.with_field("tenant", "other"))
    assert not enriched.matches(DATABASE)
    assert not enriched.matches(ValueError("not an app error"))


def test_equality_is_identity_based() -> None:
    """Structurally equal errors are distinct values."""
    assert new("svc", "C1", "msg") != new("svc", "C1", "msg")


def test_app_error_is_raisable_with_chain() -> None:
    """Raised errors keep the cause on ``__cause__``."""
    cause = KeyError("user-456")
    with pytest.raises(AppError) as exc_info:
        raise wrap(cause, USER_NOT_FOUND)  # type: ignore[misc]

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.matches(USER_NOT_FOUND)


def test_iter_chain_walks_app_and_foreign_links() -> None:
    """Traversal follows AppError causes and foreign ``__cause__`` links."""
    root = OSError("disk")
    middle = RuntimeError("io failed")
    middle.__cause__ = root
    err = wrap(middle, DATABASE)

    assert list(iter_chain(err)) == [err, middle, root]
    assert list(iter_chain(None)) == []


def test_iter_chain_stops_on_foreign_cycle() -> None:
    """A cycle built from foreign exceptions does not loop forever."""
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first

    assert list(iter_chain(first)) == [first, second]


def test_chain_contains_matches_templates_and_instances() -> None:
    """chain_contains finds exact links and template matches."""
    cause = ConnectionRefusedError("refused")
    inner = wrap(cause, DATABASE)
    outer = wrap(inner, USER_NOT_FOUND.with_field("id", "1"))

    assert chain_contains(outer, cause)
    assert chain_contains(outer, DATABASE)
    assert chain_contains(outer, USER_NOT_FOUND)
    assert not chain_contains(outer, new("billing", "B-1", "other"))


def test_find_in_chain_returns_first_instance() -> None:
    """find_in_chain returns the outermost link of the requested type."""
    app_err = wrap(ValueError("bad"), USER_NOT_FOUND)
    wrapper = RuntimeError("handler failed")
    wrapper.__cause__ = app_err

    assert find_in_chain(wrapper, AppError) is app_err
    assert isinstance(find_in_chain(wrapper, ValueError), ValueError)
    assert find_in_chain(wrapper, KeyError) is None
