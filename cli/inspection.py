"""Inspect command: run the pipeline on one file and report what it did."""

from __future__ import annotations

import argparse
import logging

from preprocessing import run_pipeline
from preprocessing.errors import FormulaImageError
from sources import load_image

from .options import add_config_args, config_from_args

logger = logging.getLogger(__name__)


def add_inspect_subparser(subparsers: argparse._SubParsersAction) -> None:
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show bounding box and placement for one image without writing output",
    )
    inspect_parser.add_argument("source", help="Image file to inspect")
    add_config_args(inspect_parser)
    inspect_parser.set_defaults(_cmd=cmd_inspect)


def cmd_inspect(args: argparse.Namespace) -> int:
    try:
        img = load_image(args.source)
        result = run_pipeline(img, config_from_args(args))
    except (FormulaImageError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    height, width = img.shape[:2]
    channels = 1 if img.ndim == 2 else img.shape[2]
    logger.info("Source:      %s", args.source)
    logger.info("Input size:  %sx%s (%s channel%s)", width, height, channels, "" if channels == 1 else "s")
    logger.info("Inverted:    %s", "yes" if result.inverted else "no")

    if result.is_empty:
        logger.info("Ink bbox:    none (blank canvas)")
    else:
        bbox = result.bbox
        logger.info(
            "Ink bbox:    (%s,%s)-(%s,%s) [%sx%s]",
            bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y, bbox.width, bbox.height,
        )
        logger.info("Scale:       %.3f", result.scale_factor)
        logger.info("Placed at:   x=%s y=%s", *result.offset)

    canvas_w, canvas_h = result.dimensions
    logger.info("Canvas:      %sx%s", canvas_w, canvas_h)
    return 0
