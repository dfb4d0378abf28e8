from __future__ import annotations

from eoe.chain import cause_messages, describe, iter_chain


def _raise_chain() -> BaseException:
    try:
        try:
            try:
                raise ValueError("Mm-noom-ba-deh")
            except ValueError as e:
                raise RuntimeError("Doom-boom-ba-beh") from e
        except RuntimeError as e:
            raise RuntimeError("Doo-boo-boom-ba-beh-beh") from e
    except RuntimeError as e:
        return e
    raise AssertionError("expected an exception")


def test_explicit_causes_are_walked_outermost_first() -> None:
    exc = _raise_chain()
    assert cause_messages(exc) == ["Doo-boo-boom-ba-beh-beh", "Doom-boom-ba-beh", "Mm-noom-ba-deh"]


def test_single_exception_has_one_link() -> None:
    exc = ValueError("alone")
    assert list(iter_chain(exc)) == [exc]


def test_implicit_context_is_followed() -> None:
    try:
        try:
            raise KeyError("k")
        except KeyError:
            raise RuntimeError("while handling")
    except RuntimeError as e:
        exc = e

    assert cause_messages(exc) == ["while handling", "'k'"]


def test_suppressed_context_is_not_followed() -> None:
    try:
        try:
            raise KeyError("k")
        except KeyError:
            raise RuntimeError("clean") from None
    except RuntimeError as e:
        exc = e

    assert cause_messages(exc) == ["clean"]


def test_explicit_cause_wins_over_context() -> None:
    cause = OSError("disk")
    try:
        try:
            raise KeyError("ignored")
        except KeyError:
            raise RuntimeError("outer") from cause
    except RuntimeError as e:
        exc = e

    assert cause_messages(exc) == ["outer", "disk"]


def test_cycle_stops_traversal() -> None:
    a = ValueError("a")
    b = ValueError("b")
    a.__cause__ = b
    b.__cause__ = a

    assert list(iter_chain(a)) == [a, b]


def test_empty_message_falls_back_to_class_name() -> None:
    assert describe(StopIteration()) == "StopIteration"
    assert describe(ValueError("x")) == "x"


class _Unprintable(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no str")


def test_unprintable_message_falls_back_to_class_name() -> None:
    try:
        try:
            raise _Unprintable()
        except _Unprintable as e:
            raise ValueError("outer") from e
    except ValueError as e:
        exc = e

    assert cause_messages(exc) == ["outer", "_Unprintable"]
