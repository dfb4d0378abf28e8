from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from .config import ReporterConfig
from .reporter import ErrorReporter
from .types import ExitSignal

T = TypeVar("T")


@contextmanager
def exit_guard(reporter: ErrorReporter) -> Iterator[None]:
    """
    Context manager that turns any exception raised inside into a reported exit.

    KeyboardInterrupt, SystemExit (and so ExitSignal) pass through untouched.

    Usage example
    -------------
        with exit_guard(reporter):
            cfg = load_settings(path)
    """
    try:
        yield
    except Exception as exc:
        reporter.exit_on_error(exc)


def guard(fn: Callable[[], T], reporter: ErrorReporter) -> T:
    """
    Call `fn` and return its result; report and signal exit if it raises.

    Usage example
    -------------
        data = guard(lambda: json.loads(raw), reporter)
    """
    try:
        return fn()
    except Exception as exc:
        return reporter.exit_on_error(exc)


def run_main(entry: Callable[[], object], reporter: Optional[ErrorReporter] = None) -> int:
    """
    Run a program's entry function and return the process exit code.

    Returns 0 when `entry` returns normally, or the `ExitSignal` code when it
    was reported. The caller performs the actual exit.

    Usage example
    -------------
        if __name__ == "__main__":
            sys.exit(run_main(main))
    """
    reporter = reporter if reporter is not None else ErrorReporter(cfg=ReporterConfig())
    try:
        with exit_guard(reporter):
            entry()
    except ExitSignal as signal:
        return signal.exit_code
    return 0
