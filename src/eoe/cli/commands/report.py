"""`eoe report` command implementation."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from eoe.config import COLOR_MODES, ConfigError, ReporterConfig, resolve_config
from eoe.guards import run_main
from eoe.reporter import ErrorReporter
from eoe.types import ChainedError


def add_subparser(subparsers: argparse._SubParsersAction) -> None:
    """Register the `report` command."""
    parser = subparsers.add_parser(
        "report",
        help="Print an error chain (outermost first) to stderr and exit 1.",
    )
    parser.add_argument("messages", nargs="*", help="Causes, outermost first. None reports the fallback message.")
    parser.add_argument("--config", default=None, help="YAML config file (default: ./eoe.yaml or ./.eoe.yaml).")
    parser.add_argument("--color", choices=COLOR_MODES, default=None)
    parser.add_argument("--label", default=None, help="Text of the first-line label.")
    parser.add_argument("--label-style", default=None, help="Rich style of the labels, e.g. 'bold red'.")
    parser.add_argument("--separator", default=None, help="Text between label and message.")
    parser.add_argument("--message-style", default=None, help="Rich style of the fallback message.")
    parser.add_argument("--fallback", default=None, help="Message used when no causes are given.")
    parser.set_defaults(command="report", handler=run)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    out: dict[str, Any] = {}
    label: dict[str, str] = {}
    if args.label is not None:
        label["text"] = args.label
    if args.label_style is not None:
        label["style"] = args.label_style
    if label:
        out["label"] = label
    if args.separator is not None:
        out["separator"] = args.separator
    if args.message_style is not None:
        out["message_style"] = args.message_style
    if args.fallback is not None:
        out["fallback_message"] = args.fallback
    if args.color is not None:
        out["color"] = args.color
    return out


def run(args: argparse.Namespace) -> int:
    """Execute the `report` command; always returns a failure exit code."""
    bootstrap = ErrorReporter(cfg=ReporterConfig(color=args.color or "auto"))

    def _resolve() -> ReporterConfig:
        try:
            return resolve_config(
                overrides=_overrides(args),
                config_path=Path(args.config) if args.config else None,
            )
        except ConfigError as error:
            raise ConfigError("eoe report could not load its configuration") from error

    return run_main(lambda: _report(args, _resolve()), reporter=bootstrap)


def _report(args: argparse.Namespace, cfg: ReporterConfig) -> None:
    reporter = ErrorReporter(cfg=cfg)
    value = ChainedError(tuple(args.messages)) if args.messages else None
    reporter.exit_on_error(value)
