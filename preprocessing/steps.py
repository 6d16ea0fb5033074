"""
Preprocessing step classes with a common interface.

Each step is a dataclass that implements the PreprocessStep interface.
Steps are pure: they take an input and return a new output without mutating
the original array.

Usage:
    from preprocessing.steps import GrayscaleStep, ContrastStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        ContrastStep(),
    ])
    result = pipeline.run(image)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import cv2
import numpy as np

from config import (
    BACKGROUND_THRESHOLD,
    INTERPOLATION,
    INVERT_DARK_THRESHOLD,
    INVERT_LIGHT_THRESHOLD,
)

from .canvas import fit_into_canvas
from .cropping import BoundingBox, crop_to_ink
from .normalization import enhance_contrast, invert_colors, is_inverted, to_grayscale


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    Steps should be pure functions: they take an input image and return a new
    output without mutating the original.

    Steps can optionally produce metadata (bounding box, scale factor) that is
    reported alongside the final canvas.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this preprocessing step to an image.

        Must be pure: never mutates the input image.

        Args:
            img: Input image as numpy array.

        Returns:
            Processed image as a new numpy array.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Return any metadata produced by the last call to apply().

        Returns:
            Dictionary of metadata. Empty by default.
        """
        return {}


@dataclass(frozen=True)
class GrayscaleStep(PreprocessStep):
    """Convert an RGB, RGBA or single-channel image to luminance."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return to_grayscale(img)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass
class InvertStep(PreprocessStep):
    """Flip polarity of images with light strokes on a dark background.

    The step is a copy when the image already has dark ink on light paper.

    Attributes:
        dark_threshold: Pixels below this count as dark.
        light_threshold: Pixels above this count as light.
    """

    dark_threshold: int = INVERT_DARK_THRESHOLD
    light_threshold: int = INVERT_LIGHT_THRESHOLD
    _inverted: bool = field(default=False, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        self._inverted = is_inverted(img, self.dark_threshold, self.light_threshold)
        if self._inverted:
            return invert_colors(img)
        return img.copy()

    @property
    def name(self) -> str:
        return "invert"

    def get_metadata(self) -> dict[str, Any]:
        return {
            "inverted": self._inverted,
            "step_status": "applied" if self._inverted else "declined",
            "skip_artifact": not self._inverted,
        }


@dataclass(frozen=True)
class ContrastStep(PreprocessStep):
    """Min-max stretch of a grayscale image to the full 0-255 range."""

    def apply(self, img: np.ndarray) -> np.ndarray:
        return enhance_contrast(img)

    @property
    def name(self) -> str:
        return "contrast"


@dataclass
class CropStep(PreprocessStep):
    """Crop a grayscale image to the bounding box of its ink pixels.

    An all-background image yields a zero-area (0, 0) crop, which CanvasFitStep
    turns into a blank canvas.

    Attributes:
        threshold: Pixels strictly below this value are ink.
    """

    threshold: int = BACKGROUND_THRESHOLD
    _bbox: Optional[BoundingBox] = field(default=None, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        cropped, self._bbox = crop_to_ink(img, self.threshold)
        return cropped

    @property
    def name(self) -> str:
        return f"crop(threshold={self.threshold})"

    def get_metadata(self) -> dict[str, Any]:
        return {
            "bbox": self._bbox,
            "step_status": "applied" if self._bbox is not None else "empty",
            "skip_artifact": self._bbox is None,
        }


@dataclass
class CanvasFitStep(PreprocessStep):
    """Scale content into a fixed canvas and center it.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        border: Margin kept free on every side.
        interpolation: Resampling filter name.
    """

    width: int
    height: int
    border: int
    interpolation: str = INTERPOLATION
    _scale_factor: float = field(default=0.0, init=False, repr=False)
    _offset: tuple[int, int] = field(default=(0, 0), init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        canvas, self._scale_factor, self._offset = fit_into_canvas(
            img, self.width, self.height, self.border, self.interpolation
        )
        return canvas

    @property
    def name(self) -> str:
        return f"fit({self.width}x{self.height})"

    def get_metadata(self) -> dict[str, Any]:
        return {
            "scale_factor": self._scale_factor,
            "offset": self._offset,
            "step_metrics": {
                "border": self.border,
                "interpolation": self.interpolation,
            },
        }


@dataclass
class StepResult:
    """Result of applying a single preprocessing step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Any metadata produced by the step.
        artifact_path: Path where the image was saved (if artifact saving enabled).
    """

    name: str
    image: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)
    artifact_path: str | None = None


@dataclass
class PipelineStepResults:
    """Results from running a preprocessing pipeline.

    Attributes:
        original: The original input image.
        steps: List of StepResult for each step in order.
        original_artifact_path: Path where original image was saved (if artifact saving enabled).
        step_metadata: Status and metrics per step, keyed by short step name.
    """

    original: np.ndarray
    steps: list[StepResult] = field(default_factory=list)
    original_artifact_path: str | None = None
    step_metadata: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def final(self) -> np.ndarray:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    def get_intermediate(self, step_name: str) -> np.ndarray | None:
        """Get intermediate image by step name (e.g., "grayscale", "contrast")."""
        for step in self.steps:
            if step.name == step_name or step.name.split("(")[0] == step_name:
                return step.image
        return None

    def get_metadata(self, key: str) -> Any | None:
        """Get metadata value from the first step that reports it."""
        for step in self.steps:
            if key in step.metadata:
                return step.metadata[key]
        return None

    @property
    def bbox(self) -> Optional[BoundingBox]:
        return self.get_metadata("bbox")

    @property
    def scale_factor(self) -> float:
        return self.get_metadata("scale_factor") or 0.0

    @property
    def offset(self) -> tuple[int, int]:
        return self.get_metadata("offset") or (0, 0)

    @property
    def inverted(self) -> bool:
        return bool(self.get_metadata("inverted"))

    @property
    def artifact_paths(self) -> dict[str, str]:
        """Map short step names ("original", "grayscale", ...) to saved paths."""
        paths = {}
        if self.original_artifact_path:
            paths["original"] = self.original_artifact_path
        for step in self.steps:
            if step.artifact_path:
                key = step.name.split("(")[0]
                paths[key] = step.artifact_path
        return paths


def _save_image(img: np.ndarray, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(path, img)


@dataclass
class Pipeline:
    """A sequence of preprocessing steps to apply to images.

    The pipeline runs each step in order, passing the output of one step
    as the input to the next. All intermediate results are preserved.

    Attributes:
        steps: List of PreprocessStep instances to apply in order.
    """

    steps: list[PreprocessStep]

    def run(
        self,
        img: np.ndarray,
        artifact_dir: str | None = None,
    ) -> PipelineStepResults:
        """Run the pipeline on an image.

        Args:
            img: Input image as numpy array.
            artifact_dir: Optional directory to save intermediate images.
                         If provided, saves original.png and each step's output.

        Returns:
            PipelineStepResults containing all intermediate images and metadata.
        """
        result = PipelineStepResults(original=img.copy())
        current = img.copy()

        if artifact_dir:
            original_path = f"{artifact_dir}/original.png"
            if img.ndim == 3 and img.shape[2] == 3:
                _save_image(cv2.cvtColor(img, cv2.COLOR_RGB2BGR), original_path)
            elif img.ndim == 3 and img.shape[2] == 4:
                _save_image(cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA), original_path)
            else:
                _save_image(img, original_path)
            result.original_artifact_path = original_path

        for step in self.steps:
            output = step.apply(current)
            metadata = step.get_metadata()
            step_key = step.name.split("(")[0]
            result.step_metadata[step_key] = {
                "status": metadata.get("step_status", "applied"),
                "metrics": metadata.get("step_metrics", {}),
            }

            artifact_path = None
            skip_artifact = bool(metadata.get("skip_artifact", False))
            if artifact_dir and not skip_artifact:
                artifact_path = f"{artifact_dir}/{step_key}.png"
                _save_image(output, artifact_path)

            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=metadata,
                    artifact_path=artifact_path,
                )
            )
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
