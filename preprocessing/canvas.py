"""
Fit a cropped formula onto a fixed-size canvas.

The formula is scaled (preserving aspect ratio) into the canvas interior, i.e.
the canvas minus a border on every side, and centered on a white background.
"""

from __future__ import annotations

import cv2
import numpy as np

from config import BACKGROUND_VALUE, INTERPOLATION

from .errors import InvalidDimensions

INTERPOLATION_FLAGS = {
    "nearest": cv2.INTER_NEAREST,
    "linear": cv2.INTER_LINEAR,
    "cubic": cv2.INTER_CUBIC,
    "area": cv2.INTER_AREA,
    "lanczos": cv2.INTER_LANCZOS4,
}


def compute_fit(
    content_size: tuple[int, int],
    available_size: tuple[int, int],
) -> tuple[float, tuple[int, int]]:
    """Compute the scale factor and scaled size for fitting content.

    Args:
        content_size: (width, height) of the content.
        available_size: (width, height) of the space to fit into.

    Returns:
        Tuple of (scale_factor, (new_width, new_height)). The scaled size is
        rounded and clamped to [1, available] on each axis.
    """
    content_w, content_h = content_size
    avail_w, avail_h = available_size

    scale = min(avail_w / content_w, avail_h / content_h)
    new_w = min(avail_w, max(1, int(round(content_w * scale))))
    new_h = min(avail_h, max(1, int(round(content_h * scale))))
    return scale, (new_w, new_h)


def blank_canvas(width: int, height: int, dtype: np.dtype = np.uint8) -> np.ndarray:
    """Create a canvas filled with the background value."""
    return np.full((height, width), BACKGROUND_VALUE, dtype=dtype)


def fit_into_canvas(
    img: np.ndarray,
    width: int,
    height: int,
    border: int,
    interpolation: str = INTERPOLATION,
) -> tuple[np.ndarray, float, tuple[int, int]]:
    """Scale an image into a canvas without changing its aspect ratio.

    Pure function: returns a new array without modifying the input. Upscaling
    is allowed so that small formulas fill the available area.

    Args:
        img: Cropped grayscale image (2D). A zero-area array means there is
             nothing to place.
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        border: Margin in pixels kept free on every side.
        interpolation: Resampling filter name (see INTERPOLATION_FLAGS).

    Returns:
        Tuple of:
        - Canvas of shape (height, width), background white
        - Scale factor applied to the content (0.0 if nothing was placed)
        - (x, y) offset of the placed content's top-left corner

    Raises:
        InvalidDimensions: If the canvas leaves no room once the border is removed.
        ValueError: If the interpolation name is unknown or img is not 2D.

    Examples:
        >>> square = np.zeros((2, 2), dtype=np.uint8)
        >>> canvas, scale, offset = fit_into_canvas(square, 300, 100, 5)
        >>> canvas.shape, scale, offset
        ((100, 300), 45.0, (105, 5))
    """
    if img.ndim != 2:
        raise ValueError(
            f"fit_into_canvas requires grayscale input (2D array), "
            f"got {img.ndim}D array with shape {img.shape}"
        )

    avail_w = width - 2 * border
    avail_h = height - 2 * border
    if border < 0 or avail_w <= 0 or avail_h <= 0:
        raise InvalidDimensions(
            f"canvas {width}x{height} with border {border} has no room for content"
        )

    try:
        flag = INTERPOLATION_FLAGS[interpolation]
    except KeyError:
        raise ValueError(f"Unknown interpolation '{interpolation}'") from None

    canvas = blank_canvas(width, height, dtype=img.dtype)

    if img.size == 0:
        return canvas, 0.0, (border, border)

    img_h, img_w = img.shape
    scale, (new_w, new_h) = compute_fit((img_w, img_h), (avail_w, avail_h))

    if (new_w, new_h) == (img_w, img_h):
        resized = img
    else:
        resized = cv2.resize(img, (new_w, new_h), interpolation=flag)

    x_offset = border + (avail_w - new_w) // 2
    y_offset = border + (avail_h - new_h) // 2
    canvas[y_offset:y_offset + new_h, x_offset:x_offset + new_w] = resized

    return canvas, scale, (x_offset, y_offset)
