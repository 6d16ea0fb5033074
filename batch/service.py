"""Batch service entrypoints for reuse across CLI and library callers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from preprocessing import ProcessorConfig, PreprocessResult, run_pipeline
from preprocessing.errors import FormulaImageError
from sources import load_image, save_image, scan_local_images

from .strategies import BatchStrategy, get_strategy

logger = logging.getLogger(__name__)


@dataclass
class FailedFile:
    """A file that could not be processed."""

    path: Path
    error: str


@dataclass
class FileOutcome:
    """Outcome of processing one file in a batch."""

    input_path: Path
    output_path: Path
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Successes and failures of a batch run, both sorted by input path."""

    succeeded: list[Path] = field(default_factory=list)
    failed: list[FailedFile] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


def output_path_for(input_path: Path, output_dir: Path, force_png: bool = False) -> Path:
    """Compute where the processed version of input_path is written."""
    name = Path(input_path).name
    if force_png:
        name = Path(name).with_suffix(".png").name
    return Path(output_dir) / name


def process_image_file(
    input_path: str | Path,
    output_path: str | Path,
    config: ProcessorConfig | None = None,
    artifact_dir: str | None = None,
) -> PreprocessResult:
    """Decode an image file, preprocess it, and write the canvas to output_path.

    Raises:
        DecodeError: If the input cannot be read.
        EncodeError: If the output cannot be written.
        InvalidDimensions / UnsupportedFormat: From the pipeline itself.
    """
    img = load_image(input_path)
    result = run_pipeline(img, config, artifact_dir=artifact_dir)
    save_image(result.processed, output_path)
    return result


def process_directory(
    input_dir: str | Path,
    output_dir: str | Path,
    config: ProcessorConfig | None = None,
    strategy: str | BatchStrategy | None = None,
    workers: int | None = None,
    force_png: bool = False,
    limit: int | None = None,
    progress: bool = True,
) -> BatchReport:
    """Process every supported image in a directory.

    Each file is decoded, preprocessed and written to output_dir under the
    same file name. A file that fails is logged and recorded in the report;
    the rest of the batch continues.

    Args:
        input_dir: Directory (or single image file) to process.
        output_dir: Destination directory, created if missing.
        config: Preprocessing configuration. If None, uses default settings.
        strategy: "parallel", "sequential" or a BatchStrategy instance.
        workers: Thread pool size for the parallel strategy.
        force_png: Write every output as PNG regardless of input format.
        limit: Maximum number of images to process (default: all).
        progress: Show a progress bar.

    Returns:
        BatchReport with the succeeded input paths and the failed files.

    Raises:
        ValueError: If input_dir is not a directory or supported image file.
        InvalidDimensions: If the configuration is invalid.
    """
    if config is None:
        config = ProcessorConfig()
    config.validate()

    image_files = scan_local_images(input_dir)
    logger.info("Found %s images in %s", len(image_files), input_dir)

    if limit is not None:
        image_files = image_files[:limit]
        logger.info("Processing limited to %s images", limit)

    report = BatchReport()
    if not image_files:
        logger.warning("No images found.")
        return report

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if not isinstance(strategy, (str, type(None))):
        runner = strategy
    else:
        runner = get_strategy(strategy, workers)
    logger.debug("Using %s strategy", runner.name)

    def process_one(image_path: Path) -> FileOutcome:
        out_path = output_path_for(image_path, output_dir, force_png)
        try:
            process_image_file(image_path, out_path, config)
        except (FormulaImageError, OSError, ValueError) as exc:
            logger.warning("Error processing file %s: %s", image_path, exc)
            return FileOutcome(image_path, out_path, error=str(exc))
        return FileOutcome(image_path, out_path)

    outcomes = list(
        tqdm(
            runner.map(process_one, image_files),
            total=len(image_files),
            desc="Processing",
            disable=not progress,
        )
    )

    for outcome in sorted(outcomes, key=lambda o: o.input_path):
        if outcome.ok:
            report.succeeded.append(outcome.input_path)
        else:
            report.failed.append(FailedFile(outcome.input_path, outcome.error))

    return report
