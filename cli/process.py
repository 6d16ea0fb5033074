"""Process command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import config
from batch import output_path_for, process_directory, process_image_file
from batch.strategies import STRATEGY_NAMES
from preprocessing.errors import FormulaImageError
from sources import is_supported_image

from .options import add_config_args, config_from_args

logger = logging.getLogger(__name__)


def add_process_subparser(subparsers: argparse._SubParsersAction) -> None:
    process_parser = subparsers.add_parser(
        "process",
        help="Normalize a formula image or a directory of formula images",
    )
    process_parser.add_argument(
        "source",
        help="Image file or directory of .png/.jpg/.jpeg files",
    )
    process_parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help=f"Output directory (default: ./{config.DEFAULT_OUTPUT_DIR})",
    )
    process_parser.add_argument(
        "--strategy",
        choices=STRATEGY_NAMES,
        default=config.DEFAULT_BATCH_STRATEGY,
        help=f"How to schedule a directory batch (default: {config.DEFAULT_BATCH_STRATEGY})",
    )
    process_parser.add_argument(
        "--sequential",
        dest="strategy",
        action="store_const",
        const="sequential",
        help="Shorthand for --strategy sequential",
    )
    process_parser.add_argument(
        "--workers", "-j",
        type=int,
        default=config.DEFAULT_WORKERS,
        help="Thread pool size for parallel batches (default: automatic)",
    )
    process_parser.add_argument(
        "--png",
        action="store_true",
        help="Write PNG output regardless of the input format",
    )
    process_parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of images to process (default: all)",
    )
    process_parser.add_argument(
        "--artifacts",
        metavar="DIR",
        help="Save intermediate step images for a single file to DIR",
    )
    add_config_args(process_parser)
    process_parser.set_defaults(_cmd=cmd_process)


def cmd_process(args: argparse.Namespace) -> int:
    source = Path(args.source)
    output_dir = Path(args.output_dir) if args.output_dir else Path.cwd() / config.DEFAULT_OUTPUT_DIR
    processor_config = config_from_args(args)

    try:
        processor_config.validate()
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    if source.is_file():
        if not is_supported_image(source):
            logger.error("%s is not a supported image file", source)
            return 1
        logger.info("Processing single file: %s", source)
        output_path = output_path_for(source, output_dir, force_png=args.png)
        try:
            process_image_file(source, output_path, processor_config, artifact_dir=args.artifacts)
        except (FormulaImageError, OSError, ValueError) as exc:
            logger.error("Error processing file %s: %s", source, exc)
            return 1
        logger.info("Processing completed. Output saved in %s", output_dir)
        return 0

    if not source.is_dir():
        logger.error("Provided path is neither a file nor a directory: %s", source)
        return 1

    if args.artifacts:
        logger.warning("--artifacts is only supported for single files; ignoring")

    logger.info("Processing directory: %s", source)
    try:
        report = process_directory(
            source,
            output_dir,
            processor_config,
            strategy=args.strategy,
            workers=args.workers,
            force_png=args.png,
            limit=args.limit,
        )
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("%s", "=" * 50)
    logger.info("Processing Complete!")
    logger.info("%s", "=" * 50)
    logger.info("Images found:     %s", report.total)
    logger.info("Images processed: %s", len(report.succeeded))
    logger.info("Images failed:    %s", len(report.failed))
    for failed in report.failed:
        logger.info("  %s: %s", failed.path.name, failed.error)
    logger.info("Output saved in %s", output_dir)
    return 0 if report.ok else 1
