"""
Image file decoding and encoding.

Images are decoded with Pillow into RGB-ordered numpy arrays so that they can
be fed straight into preprocessing.run_pipeline(). Processed canvases are
written back with Pillow; the output format follows the file extension.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from preprocessing.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Pillow modes that map directly onto 1, 3 or 4 channel arrays
_DIRECT_MODES = {"L", "RGB", "RGBA"}


def _reduce_int32(arr: np.ndarray) -> np.ndarray:
    """Map 32-bit grayscale samples to uint8 according to their actual range.

    Values already within 0-255 are kept. Values within 0-65535 are 16-bit
    samples (Pillow opens 16-bit PNGs as mode "I") and keep their high byte.
    Anything else is stretched from [min, max] to [0, 255].
    """
    low, high = int(arr.min()), int(arr.max())
    if low >= 0 and high <= 255:
        return arr.astype(np.uint8)
    if low >= 0 and high <= 65535:
        return (arr >> 8).astype(np.uint8)
    if high == low:
        return np.zeros(arr.shape, dtype=np.uint8)
    return ((arr - low) * 255 // (high - low)).astype(np.uint8)


def _normalize_mode(im: Image.Image) -> Image.Image:
    """Convert any Pillow mode to L, RGB or RGBA (8 bits per channel)."""
    if im.mode in _DIRECT_MODES:
        return im
    if im.mode in ("I;16", "I;16B", "I;16L"):
        # 16-bit grayscale: keep the high byte
        arr = np.asarray(im).astype(np.int64) >> 8
        return Image.fromarray(arr.astype(np.uint8))
    if im.mode == "I":
        return Image.fromarray(_reduce_int32(np.asarray(im).astype(np.int64)))
    if im.mode in ("1", "F"):
        return im.convert("L")
    if im.mode in ("LA", "PA") or (im.mode == "P" and "transparency" in im.info):
        return im.convert("RGBA")
    return im.convert("RGB")


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image file into a uint8 numpy array.

    Args:
        path: Image file path.

    Returns:
        Array of shape (H, W) for grayscale files, (H, W, 3) for RGB or
        (H, W, 4) for images with transparency.

    Raises:
        DecodeError: If the file is missing, unreadable or not an image.
    """
    path = Path(path)
    try:
        with Image.open(path) as im:
            im.load()
            arr = np.array(_normalize_mode(im))
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as exc:
        raise DecodeError(f"Cannot decode image {path}: {exc}") from exc

    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)

    logger.debug("Loaded %s with shape %s", path, arr.shape)
    return arr


def save_image(img: np.ndarray, path: str | Path) -> Path:
    """Encode an image array to a file, creating parent directories.

    Args:
        img: uint8 array of shape (H, W), (H, W, 3) or (H, W, 4).
        path: Destination path. The extension selects the format.

    Returns:
        The path written.

    Raises:
        EncodeError: If the array cannot be encoded or the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(img).save(path)
    except (OSError, ValueError, TypeError, KeyError) as exc:
        raise EncodeError(f"Cannot write image {path}: {exc}") from exc

    logger.debug("Saved %s", path)
    return path
