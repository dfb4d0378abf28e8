from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, TypeVar

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

from .config import ReporterConfig
from .logging import get_logger
from .types import EXIT_FAILURE, ChainedError, ExitSignal, Line, Outcome, Segment, Verdict

T = TypeVar("T")

# Console.color_system reports names; Style.render wants the enum.
_COLOR_SYSTEMS = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


def make_console(cfg: ReporterConfig) -> Console:
    """
    Build the stderr console for a config.

    With color="auto", Rich decides: no styling when stderr is not a terminal,
    and NO_COLOR / FORCE_COLOR / TERM=dumb are honoured.
    """
    kwargs: dict[str, Any] = {"stderr": True}
    if cfg.color == "always":
        kwargs["force_terminal"] = True
    elif cfg.color == "never":
        kwargs["color_system"] = None
    return Console(**kwargs)


@dataclass
class ErrorReporter:
    """
    Renders a failure's cause chain (or an absent value) to stderr and signals exit.

    Failures are exceptions or `ChainedError` values; absent means ``None``.
    Anything else passes through untouched.

    Usage example
    -------------
        reporter = ErrorReporter(cfg=ReporterConfig())
        value = reporter.exit_on_error(maybe_value)
    """

    cfg: ReporterConfig
    console: Optional[Console] = None
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.console is None:
            self.console = make_console(self.cfg)
        if self.logger is None:
            self.logger = get_logger()

    def chain_lines(self, causes: Sequence[str]) -> tuple[Line, ...]:
        """One line per cause: "error" for the first, "caused by" for the rest."""
        lines: list[Line] = []
        for index, cause in enumerate(causes):
            label = self.cfg.label if index == 0 else self.cfg.caused_by
            lines.append((label, self.cfg.separator, Segment(cause)))
        return tuple(lines)

    def absent_line(self) -> Line:
        return (self.cfg.label, self.cfg.separator, Segment(self.cfg.fallback_message, self.cfg.message_style))

    def check(self, value: Any) -> Verdict:
        """Decide what to do with `value` without writing anything."""
        if isinstance(value, BaseException):
            value = ChainedError.from_exception(value)
        if isinstance(value, ChainedError):
            return Verdict(
                outcome=Outcome.TERMINATED,
                lines=self.chain_lines(value.causes),
                exit_code=EXIT_FAILURE,
            )
        if value is None:
            return Verdict(outcome=Outcome.TERMINATED, lines=(self.absent_line(),), exit_code=EXIT_FAILURE)
        return Verdict(outcome=Outcome.PASSTHROUGH, value=value)

    def paint(self, segment: Segment) -> str:
        """Segment text wrapped in the console's ANSI codes; the text itself is never altered."""
        assert self.console is not None
        style = Style.parse(segment.style)
        if self.console.no_color:
            style = style.without_color
        return style.render(segment.text, color_system=_COLOR_SYSTEMS.get(self.console.color_system or ""))

    def render(self, verdict: Verdict) -> None:
        """Write the verdict's lines to the console's file, one per line."""
        assert self.console is not None
        out = self.console.file
        for line in verdict.lines:
            out.write("".join(self.paint(seg) for seg in line) + "\n")
        out.flush()

    def exit_on_error(self, value: Any) -> Any:
        """
        Return `value` if it is present, otherwise report it and raise `ExitSignal`.

        Usage example
        -------------
            config = reporter.exit_on_error(load_config_or_exception())
        """
        verdict = self.check(value)
        if not verdict.terminated:
            return verdict.value

        self.render(verdict)
        assert self.logger is not None
        self.logger.debug(
            "Reported %d line(s); exiting with code %d", len(verdict.lines), verdict.exit_code
        )
        raise ExitSignal(verdict)

    quit_on_error = exit_on_error


def exit_on_error(value: T, *, config: Optional[ReporterConfig] = None) -> T:
    """Report-and-exit using a reporter built from `config` (defaults if None)."""
    reporter = ErrorReporter(cfg=config if config is not None else ReporterConfig())
    return reporter.exit_on_error(value)


def quit_on_error(value: T, *, config: Optional[ReporterConfig] = None) -> T:
    """Same as `exit_on_error`, for those who prefer the word."""
    return exit_on_error(value, config=config)
