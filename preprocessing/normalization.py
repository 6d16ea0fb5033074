"""
Pixel normalization functions: grayscale, polarity and contrast.

All functions are pure: they take an input and return a new output without
mutating the original array. This ensures predictable behavior and makes
testing straightforward.
"""

import numpy as np
import cv2

from config import INVERT_DARK_THRESHOLD, INVERT_DOMINANCE_RATIO, INVERT_LIGHT_THRESHOLD

from .errors import UnsupportedFormat


def _validate_image(img: np.ndarray) -> None:
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")

    if img.dtype != np.uint8:
        raise UnsupportedFormat(f"Expected uint8 pixels, got dtype {img.dtype}")


def _require_grayscale(img: np.ndarray, operation: str) -> None:
    _validate_image(img)
    if img.ndim != 2:
        raise ValueError(
            f"{operation} requires grayscale input (2D array), "
            f"got {img.ndim}D array with shape {img.shape}"
        )


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert an image to single-channel luminance.

    Pure function: returns a new array without modifying the input.

    Args:
        img: Input image. Can be:
             - RGB (3 channels): converted with BT.601 luminance weights
             - RGBA (4 channels): alpha channel is dropped, then converted
             - Grayscale (2D or 1 channel): returned as a copy

    Returns:
        Grayscale image as 2D uint8 numpy array with the same width and height.

    Raises:
        TypeError: If img is not a numpy array.
        ValueError: If img is empty or not 2D/3D.
        UnsupportedFormat: If the dtype is not uint8 or the channel count is not 1, 3 or 4.

    Examples:
        >>> rgb = np.zeros((100, 200, 3), dtype=np.uint8)
        >>> gray = to_grayscale(rgb)
        >>> gray.shape
        (100, 200)
    """
    _validate_image(img)

    if img.ndim == 2:
        result = img.copy()
    else:
        channels = img.shape[2]
        if channels == 1:
            result = img[:, :, 0].copy()
        elif channels == 3:
            result = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)
        elif channels == 4:
            result = cv2.cvtColor(img, cv2.COLOR_RGBA2GRAY)
        else:
            raise UnsupportedFormat(
                f"Unsupported number of channels: {channels}. "
                "Expected 1, 3 (RGB), or 4 (RGBA)."
            )

    return result


def is_inverted(
    img: np.ndarray,
    dark_threshold: int = INVERT_DARK_THRESHOLD,
    light_threshold: int = INVERT_LIGHT_THRESHOLD,
) -> bool:
    """Check whether a grayscale image has light strokes on a dark background.

    Counts dark pixels (below dark_threshold) and light pixels (above
    light_threshold). The image is considered inverted when dark pixels
    outnumber light ones by INVERT_DOMINANCE_RATIO.

    Args:
        img: Grayscale image (2D array).
        dark_threshold: Values below this count as dark.
        light_threshold: Values above this count as light.

    Returns:
        True if the image should be inverted before cropping.
    """
    _require_grayscale(img, "is_inverted")
    dark_count = int(np.count_nonzero(img < dark_threshold))
    light_count = int(np.count_nonzero(img > light_threshold))
    return dark_count > INVERT_DOMINANCE_RATIO * light_count


def invert_colors(img: np.ndarray) -> np.ndarray:
    """Invert a grayscale image (white on black becomes black on white)."""
    _require_grayscale(img, "invert_colors")
    return cv2.bitwise_not(img)


def enhance_contrast(img: np.ndarray) -> np.ndarray:
    """Stretch the intensity range so the darkest pixel is 0 and the lightest 255.

    Linear min-max normalization. A uniform image (min == max) has no range to
    stretch and is returned unchanged.

    Args:
        img: Grayscale image (2D uint8 array).

    Returns:
        Contrast-stretched copy with the same shape and dtype.

    Raises:
        ValueError: If img is not a non-empty 2D array.

    Examples:
        >>> gray = np.array([[0, 10], [20, 51]], dtype=np.uint8)
        >>> enhance_contrast(gray)
        array([[  0,  50],
               [100, 255]], dtype=uint8)
    """
    _require_grayscale(img, "enhance_contrast")

    low, high = int(img.min()), int(img.max())
    if low == high:
        return img.copy()

    return cv2.normalize(img, None, 0, 255, cv2.NORM_MINMAX, dtype=cv2.CV_8U)
