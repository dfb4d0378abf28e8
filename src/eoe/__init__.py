"""
eoe: exit on error.

Report an exception's cause chain (or a missing value) on stderr and exit 1.

Key primitives
--------------
- ReporterConfig: immutable styling config (label, separator, fallback message, color)
- ConfigBuilder: write-once staging for ReporterConfig (CLI > env > file > defaults)
- ErrorReporter: check / render / exit_on_error for a single value
- exit_on_error(), quit_on_error(): one-shot helpers with an explicit config
- exit_guard(), guard(), run_main(): wrap code and entry points
"""

from .config import ConfigBuilder, ConfigError, ReporterConfig, resolve_config
from .guards import exit_guard, guard, run_main
from .logging import configure_logging
from .reporter import ErrorReporter, exit_on_error, quit_on_error
from .types import ChainedError, ExitSignal, Outcome, Segment, Verdict
from .version import __version__

__all__ = [
    "ChainedError",
    "ConfigBuilder",
    "ConfigError",
    "ErrorReporter",
    "ExitSignal",
    "Outcome",
    "ReporterConfig",
    "Segment",
    "Verdict",
    "__version__",
    "configure_logging",
    "exit_guard",
    "exit_on_error",
    "guard",
    "quit_on_error",
    "resolve_config",
    "run_main",
]
