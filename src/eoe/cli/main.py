"""eoe command-line interface entrypoint."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from eoe.cli.commands import report
from eoe.logging import configure_logging
from eoe.version import __version__


def build_arg_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="eoe",
        description="eoe - print an error and its causes to stderr, then exit 1",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr.")
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<command>")
    report.add_subparser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse args, run the selected command and return its exit code."""
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        configure_logging(level=logging.DEBUG)
    return args.handler(args)


def app() -> None:
    """Console script entrypoint; performs the process exit."""
    raise SystemExit(main())


if __name__ == "__main__":
    app()
