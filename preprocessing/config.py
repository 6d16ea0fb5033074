"""
Configuration for the preprocessing pipeline.

All preprocessing steps are parameterized through ProcessorConfig so that a
run is a pure function of (image, config) and easy to reproduce.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from config import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    BORDER_PX,
    BACKGROUND_THRESHOLD,
    INTERPOLATION,
    AUTO_INVERT,
    INVERT_DARK_THRESHOLD,
    INVERT_LIGHT_THRESHOLD,
)

from .canvas import INTERPOLATION_FLAGS
from .cropping import BoundingBox
from .errors import InvalidDimensions


@dataclass(frozen=True)
class ProcessorConfig:
    """Configuration for all preprocessing steps.

    This immutable configuration object parameterizes every step of the
    pipeline. Default values produce the 300x100 canvas with a 5px margin that
    formula recognition models are trained on.

    Attributes:
        canvas_width: Width of the output canvas in pixels.
        canvas_height: Height of the output canvas in pixels.
        border_px: White margin kept free on every side of the canvas.
        background_threshold: Pixels strictly darker than this are ink.
        interpolation: Resampling filter name used when scaling the crop.
        auto_invert: Whether to flip light-on-dark images before cropping.
        invert_dark_threshold: Pixels below this count as dark for polarity.
        invert_light_threshold: Pixels above this count as light for polarity.
    """

    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    border_px: int = BORDER_PX
    background_threshold: int = BACKGROUND_THRESHOLD
    interpolation: str = INTERPOLATION

    # Polarity normalization
    auto_invert: bool = AUTO_INVERT
    invert_dark_threshold: int = INVERT_DARK_THRESHOLD
    invert_light_threshold: int = INVERT_LIGHT_THRESHOLD

    @property
    def available_width(self) -> int:
        """Canvas width left for content once the border is removed."""
        return self.canvas_width - 2 * self.border_px

    @property
    def available_height(self) -> int:
        """Canvas height left for content once the border is removed."""
        return self.canvas_height - 2 * self.border_px

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            InvalidDimensions: If the canvas leaves no room for content.
            ValueError: If any other parameter is invalid.
        """
        if self.border_px < 0:
            raise InvalidDimensions(f"border_px must be non-negative, got {self.border_px}")

        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise InvalidDimensions(
                "canvas dimensions must be positive, "
                f"got {self.canvas_width}x{self.canvas_height}"
            )

        if self.available_width <= 0 or self.available_height <= 0:
            raise InvalidDimensions(
                f"canvas {self.canvas_width}x{self.canvas_height} is too small for "
                f"a {self.border_px}px border: no room left for content"
            )

        if not 0 <= self.background_threshold <= 255:
            raise ValueError(
                "background_threshold must be within [0, 255], "
                f"got {self.background_threshold}"
            )

        if self.interpolation not in INTERPOLATION_FLAGS:
            raise ValueError(
                f"Unknown interpolation '{self.interpolation}'. "
                f"Expected one of: {', '.join(sorted(INTERPOLATION_FLAGS))}"
            )

        if not (0 <= self.invert_dark_threshold <= self.invert_light_threshold <= 255):
            raise ValueError(
                "invert thresholds must satisfy 0 <= dark <= light <= 255, "
                f"got dark={self.invert_dark_threshold}, light={self.invert_light_threshold}"
            )


@dataclass
class PreprocessResult:
    """Result of the preprocessing pipeline.

    Attributes:
        original: Input image exactly as received (copied).
        processed: Final canvas, grayscale uint8 of shape (canvas_height, canvas_width).
        bbox: Ink bounding box in the grayscale image, or None if no ink was found.
        scale_factor: Factor applied to the cropped formula (0.0 when nothing was placed).
        offset: (x, y) position of the scaled formula on the canvas.
        inverted: Whether the polarity step flipped the image.
        config: The configuration used for preprocessing.
        artifact_paths: Dict mapping step names to saved file paths (if artifact saving enabled).
        metadata: Per-step status and metrics.
    """

    original: np.ndarray
    processed: np.ndarray
    bbox: Optional[BoundingBox]
    scale_factor: float
    offset: tuple[int, int]
    config: ProcessorConfig
    inverted: bool = False
    artifact_paths: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when the source had no ink and the canvas is blank."""
        return self.bbox is None

    @property
    def dimensions(self) -> tuple[int, int]:
        """Get (width, height) of the processed canvas."""
        h, w = self.processed.shape[:2]
        return w, h
