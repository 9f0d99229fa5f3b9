"""Command-line entry point for scene-codegen."""

from __future__ import annotations

import argparse
import sys

from . import __version__
from .cli_integration import add_subcommands
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="scene-codegen",
        description="Compile design-tool scenes into Avalonia views, view-models and themes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    add_subcommands(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without the program name (defaults to ``sys.argv``).

    Returns:
        Process exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("ERROR" if args.quiet else args.log_level)
    logger.debug(f"Running command: {args.command}")

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
