"""
Preprocessing pipeline that applies all steps in order.

The pipeline is the main entry point for normalizing formula images. It
validates the configuration, applies the steps and returns the final canvas
together with the metadata needed to explain it.

This module provides three entry points:
1. preprocess() - Pure in-memory function returning the final canvas
2. run_pipeline() - Same pipeline, returning a PreprocessResult with metadata
3. build_pipeline() - The composable Pipeline used by both

Pipeline order:
    Grayscale → (Invert if light-on-dark) → Contrast → Crop → Fit to canvas
"""

import logging

import numpy as np

from .config import ProcessorConfig, PreprocessResult
from .normalization import _validate_image
from .steps import (
    Pipeline,
    GrayscaleStep,
    InvertStep,
    ContrastStep,
    CropStep,
    CanvasFitStep,
    PreprocessStep,
)

logger = logging.getLogger(__name__)


def build_pipeline(config: ProcessorConfig) -> Pipeline:
    """Build a Pipeline from a ProcessorConfig.

    Creates the standard formula normalization pipeline:
    1. GrayscaleStep - Convert to luminance
    2. InvertStep - Fix light-on-dark polarity (if auto_invert)
    3. ContrastStep - Min-max contrast stretch
    4. CropStep - Crop to the ink bounding box
    5. CanvasFitStep - Scale and center on the fixed canvas

    Args:
        config: Preprocessing configuration.

    Returns:
        Pipeline configured according to the config.
    """
    steps: list[PreprocessStep] = [GrayscaleStep()]

    if config.auto_invert:
        steps.append(
            InvertStep(
                dark_threshold=config.invert_dark_threshold,
                light_threshold=config.invert_light_threshold,
            )
        )

    steps.append(ContrastStep())
    steps.append(CropStep(threshold=config.background_threshold))
    steps.append(
        CanvasFitStep(
            width=config.canvas_width,
            height=config.canvas_height,
            border=config.border_px,
            interpolation=config.interpolation,
        )
    )

    return Pipeline(steps=steps)


def run_pipeline(
    img: np.ndarray,
    config: ProcessorConfig | None = None,
    artifact_dir: str | None = None,
) -> PreprocessResult:
    """Apply the full preprocessing pipeline to an image.

    The configuration is validated before any pixel work. All operations are
    pure and non-mutating; the original image is preserved.

    Args:
        img: Input image as numpy array: (H, W), (H, W, 1), RGB (H, W, 3)
             or RGBA (H, W, 4), dtype uint8.
        config: Preprocessing configuration. If None, uses default settings.
        artifact_dir: Optional directory to save intermediate images.

    Returns:
        PreprocessResult containing the original image, the final canvas and
        the bounding box / placement metadata.

    Raises:
        InvalidDimensions: If the canvas leaves no room for content.
        UnsupportedFormat: If the image has an unsupported channel count.
        ValueError: If the configuration or image is otherwise invalid.
        TypeError: If img is not a numpy array.

    Examples:
        >>> img = np.full((20, 50, 3), 255, dtype=np.uint8)
        >>> img[10:12, 10:12] = 0
        >>> result = run_pipeline(img)
        >>> result.processed.shape
        (100, 300)
        >>> result.bbox
        BoundingBox(min_x=10, min_y=10, max_x=11, max_y=11)
    """
    if config is None:
        config = ProcessorConfig()

    config.validate()
    _validate_image(img)

    original = img.copy()

    pipeline = build_pipeline(config)
    pipeline_result = pipeline.run(original, artifact_dir=artifact_dir)

    bbox = pipeline_result.bbox
    if bbox is None:
        logger.debug("No ink below threshold %s; producing blank canvas", config.background_threshold)
    else:
        logger.debug(
            "Ink bbox (%s,%s)-(%s,%s), scale %.3f",
            bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y,
            pipeline_result.scale_factor,
        )

    return PreprocessResult(
        original=original,
        processed=pipeline_result.final,
        bbox=bbox,
        scale_factor=pipeline_result.scale_factor,
        offset=pipeline_result.offset,
        config=config,
        inverted=pipeline_result.inverted,
        artifact_paths=pipeline_result.artifact_paths,
        metadata=pipeline_result.step_metadata,
    )


def preprocess(img: np.ndarray, config: ProcessorConfig | None = None) -> np.ndarray:
    """Normalize a formula image onto the configured canvas.

    Pure in-memory entry point with no I/O.

    Args:
        img: Input image as numpy array.
        config: Preprocessing configuration. If None, uses default settings.

    Returns:
        Grayscale uint8 canvas of shape (canvas_height, canvas_width).
    """
    return run_pipeline(img, config).processed
