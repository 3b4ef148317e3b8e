"""Causal chain traversal helpers for ``AppError`` and foreign exceptions."""

from __future__ import annotations

from typing import Iterator, TypeVar

from .types import AppError, ErrorTemplate

TError = TypeVar("TError", bound=BaseException)


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` followed by each cause, outermost first.

    ``AppError`` links follow ``cause``; other exceptions follow
    ``__cause__``. Traversal stops at the first revisited link.
    """
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if isinstance(current, AppError):
            current = current.unwrap()
        else:
            current = current.__cause__


def chain_contains(
    err: BaseException | None, target: BaseException | ErrorTemplate
) -> bool:
    """Return whether any link is ``target`` or matches it as a template."""
    for link in iter_chain(err):
        if link is target:
            return True
        if isinstance(link, AppError) and link.matches(target):
            return True
    return False


def find_in_chain(err: BaseException | None, kind: type[TError]) -> TError | None:
    """Return the first link that is an instance of ``kind``."""
    for link in iter_chain(err):
        if isinstance(link, kind):
            return link
    return None
