"""Cause-chain traversal for Python exceptions."""

from __future__ import annotations

from typing import Iterator


def iter_chain(exc: BaseException) -> Iterator[BaseException]:
    """
    Yield ``exc`` and then each underlying cause, outermost first.

    An explicit ``raise ... from cause`` wins over the implicit context; the
    implicit context is skipped when suppressed (``raise ... from None``).
    Traversal stops if an exception shows up twice.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


def describe(exc: BaseException) -> str:
    """Display text of one link; falls back to the class name for empty or unprintable messages."""
    try:
        text = str(exc)
    except Exception:
        return type(exc).__name__
    return text if text else type(exc).__name__


def cause_messages(exc: BaseException) -> list[str]:
    """Return the display text of every link in the chain, outermost first."""
    return [describe(e) for e in iter_chain(exc)]
