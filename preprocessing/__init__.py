"""
Image preprocessing module for formula images.

This module provides pure, deterministic functions that normalize images of
handwritten or typeset formulas into a fixed-size grayscale canvas. All
functions follow the pattern: input -> output with no mutation of the
original arrays.

Key components:
- config: ProcessorConfig dataclass for parameterizing all steps
- pipeline: preprocess() / run_pipeline() applying the steps in order
- steps: Class-based preprocessing steps with common PreprocessStep interface
- normalization: grayscale, polarity and contrast functions
- cropping: ink bounding box detection
- canvas: aspect-preserving fit onto the output canvas
- errors: exception hierarchy
"""

from .config import ProcessorConfig, PreprocessResult
from .pipeline import preprocess, run_pipeline, build_pipeline
from .normalization import to_grayscale, enhance_contrast, is_inverted, invert_colors
from .cropping import BoundingBox, find_ink_bbox, crop_to_ink
from .canvas import fit_into_canvas, INTERPOLATION_FLAGS
from .errors import (
    FormulaImageError,
    UnsupportedFormat,
    InvalidDimensions,
    DecodeError,
    EncodeError,
)
from .steps import (
    PreprocessStep,
    GrayscaleStep,
    InvertStep,
    ContrastStep,
    CropStep,
    CanvasFitStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    # Config and results
    "ProcessorConfig",
    "PreprocessResult",
    "BoundingBox",
    # Function API
    "preprocess",
    "run_pipeline",
    "build_pipeline",
    "to_grayscale",
    "enhance_contrast",
    "is_inverted",
    "invert_colors",
    "find_ink_bbox",
    "crop_to_ink",
    "fit_into_canvas",
    "INTERPOLATION_FLAGS",
    # Errors
    "FormulaImageError",
    "UnsupportedFormat",
    "InvalidDimensions",
    "DecodeError",
    "EncodeError",
    # Class-based API
    "PreprocessStep",
    "GrayscaleStep",
    "InvertStep",
    "ContrastStep",
    "CropStep",
    "CanvasFitStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
