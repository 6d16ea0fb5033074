"""Shared CLI options that map onto ProcessorConfig."""

from __future__ import annotations

import argparse

import config
from preprocessing import ProcessorConfig, INTERPOLATION_FLAGS


def add_config_args(parser: argparse.ArgumentParser) -> None:
    """Add canvas / threshold options to a subcommand parser."""
    group = parser.add_argument_group("canvas options")
    group.add_argument(
        "--width",
        type=int,
        default=config.CANVAS_WIDTH,
        help=f"Canvas width in pixels (default: {config.CANVAS_WIDTH})",
    )
    group.add_argument(
        "--height",
        type=int,
        default=config.CANVAS_HEIGHT,
        help=f"Canvas height in pixels (default: {config.CANVAS_HEIGHT})",
    )
    group.add_argument(
        "--border",
        type=int,
        default=config.BORDER_PX,
        help=f"White margin on every side in pixels (default: {config.BORDER_PX})",
    )
    group.add_argument(
        "--threshold",
        type=int,
        default=config.BACKGROUND_THRESHOLD,
        help=(
            "Pixels darker than this count as ink "
            f"(default: {config.BACKGROUND_THRESHOLD})"
        ),
    )
    group.add_argument(
        "--interpolation",
        choices=sorted(INTERPOLATION_FLAGS),
        default=config.INTERPOLATION,
        help=f"Resampling filter (default: {config.INTERPOLATION})",
    )
    group.add_argument(
        "--invert",
        action="store_true",
        help="Flip images that look like light strokes on a dark background",
    )


def config_from_args(args: argparse.Namespace) -> ProcessorConfig:
    return ProcessorConfig(
        canvas_width=args.width,
        canvas_height=args.height,
        border_px=args.border,
        background_threshold=args.threshold,
        interpolation=args.interpolation,
        auto_invert=args.invert or config.AUTO_INVERT,
    )
