from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from .chain import cause_messages

EXIT_FAILURE = 1


class Outcome(str, Enum):
    """Terminal state of a single reporter call."""
    PASSTHROUGH = "passthrough"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class Segment:
    """
    A unit of styled output: the text and the ``rich`` style it is painted with.

    Usage example
    -------------
        label = Segment("error", "bold red")
        plain = Segment(": ")
    """
    text: str
    style: str = ""


Line = Tuple[Segment, ...]


@dataclass(frozen=True)
class ChainedError:
    """
    An ordered cause chain, outermost context first, original failure last.

    Usage example
    -------------
        err = ChainedError(("reading config", "file not found"))
        err = ChainedError.from_exception(exc)
    """
    causes: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.causes:
            raise ValueError("ChainedError needs at least one cause")

    @staticmethod
    def from_exception(exc: BaseException) -> "ChainedError":
        return ChainedError(causes=tuple(cause_messages(exc)))

    def __len__(self) -> int:
        return len(self.causes)


@dataclass(frozen=True)
class Verdict:
    """What the reporter decided for one value, before any output happens."""
    outcome: Outcome
    lines: Tuple[Line, ...] = ()
    exit_code: int = 0
    value: Any = None

    @property
    def terminated(self) -> bool:
        return self.outcome == Outcome.TERMINATED

    def plain_lines(self) -> list[str]:
        """Return the lines with styles stripped."""
        return ["".join(seg.text for seg in line) for line in self.lines]


class ExitSignal(SystemExit):
    """
    Raised instead of exiting the process directly.

    Entry points (see ``eoe.guards.run_main``) catch it and perform the exit.
    Left uncaught it behaves like ``sys.exit(exit_code)``.
    """

    def __init__(self, verdict: Verdict) -> None:
        super().__init__(verdict.exit_code)
        self.verdict = verdict

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code
