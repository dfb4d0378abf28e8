from __future__ import annotations

import pytest

from eoe.types import ChainedError, ExitSignal, Outcome, Segment, Verdict


def test_chained_error_from_exception() -> None:
    try:
        try:
            raise ValueError("inner")
        except ValueError as e:
            raise RuntimeError("outer") from e
    except RuntimeError as e:
        err = ChainedError.from_exception(e)

    assert err.causes == ("outer", "inner")
    assert len(err) == 2


def test_segment_defaults_to_unstyled() -> None:
    assert Segment("x").style == ""


def test_verdict_plain_lines_drop_styles() -> None:
    verdict = Verdict(
        outcome=Outcome.TERMINATED,
        lines=((Segment("error", "bold red"), Segment(": "), Segment("boom")),),
        exit_code=1,
    )
    assert verdict.terminated is True
    assert verdict.plain_lines() == ["error: boom"]


def test_passthrough_verdict_is_not_terminated() -> None:
    verdict = Verdict(outcome=Outcome.PASSTHROUGH, value=5)
    assert verdict.terminated is False
    assert verdict.exit_code == 0
    assert verdict.plain_lines() == []


def test_exit_signal_behaves_like_system_exit() -> None:
    verdict = Verdict(outcome=Outcome.TERMINATED, exit_code=1)

    with pytest.raises(SystemExit) as info:
        raise ExitSignal(verdict)

    assert info.value.code == 1
    assert isinstance(info.value, ExitSignal)
    assert info.value.exit_code == 1
    assert info.value.verdict is verdict


def test_chained_error_requires_a_cause() -> None:
    with pytest.raises(ValueError, match="at least one cause"):
        ChainedError(())
