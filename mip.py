#!/usr/bin/env python3
"""
Unified CLI for the Math Images Processor.

Usage:
    mip process <file>              # Normalize one formula image
    mip process <dir>               # Normalize every .png/.jpg/.jpeg in a directory
    mip process <dir> --sequential  # Same, one file at a time
    mip process <dir> -o out/ --png # Custom output directory, PNG output
    mip inspect <file>              # Report bbox / scale / placement, write nothing
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.process import add_process_subparser
from cli.inspection import add_inspect_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mip",
        description=(
            "Math Images Processor - normalize formula images to a fixed "
            "grayscale canvas for machine learning"
        ),
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_process_subparser(subparsers)
    add_inspect_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if args.command is None or cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
