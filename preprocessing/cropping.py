"""
Ink bounding box detection and cropping.

A pixel is ink when its luminance is strictly below the background threshold.
The crop keeps the minimal axis-aligned rectangle that encloses every ink
pixel, bounds inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel bounds of the ink region.

    Attributes:
        min_x: Leftmost ink column.
        min_y: Topmost ink row.
        max_x: Rightmost ink column.
        max_y: Bottommost ink row.
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Invalid bounding box ({self.min_x},{self.min_y})-({self.max_x},{self.max_y})"
            )
        if self.min_x < 0 or self.min_y < 0:
            raise ValueError(f"Bounding box has negative coordinates: {self}")

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def as_slices(self) -> tuple[slice, slice]:
        """Return (rows, cols) slices selecting the box from an image array."""
        return (
            slice(self.min_y, self.max_y + 1),
            slice(self.min_x, self.max_x + 1),
        )

    def to_rect(self) -> tuple[int, int, int, int]:
        """Convert to an (x, y, w, h) rectangle."""
        return self.min_x, self.min_y, self.width, self.height


def ink_mask(img: np.ndarray, threshold: int) -> np.ndarray:
    """Boolean mask of pixels strictly darker than threshold."""
    if img.ndim != 2:
        raise ValueError(
            f"Ink detection requires grayscale input (2D array), "
            f"got {img.ndim}D array with shape {img.shape}"
        )
    return img < threshold


def find_ink_bbox(img: np.ndarray, threshold: int) -> Optional[BoundingBox]:
    """Find the minimal bounding box enclosing all ink pixels.

    Args:
        img: Grayscale image (2D array).
        threshold: Pixels with a value below this are ink.

    Returns:
        BoundingBox with inclusive bounds, or None if the image has no ink.
        A single ink pixel gives a 1x1 box.
    """
    mask = ink_mask(img, threshold)
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(mask.any(axis=0))
    return BoundingBox(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1]),
    )


def crop_to_ink(img: np.ndarray, threshold: int) -> tuple[np.ndarray, Optional[BoundingBox]]:
    """Crop an image to its ink bounding box.

    Pure function: the returned crop is a new array, never a view of the input.

    Args:
        img: Grayscale image (2D array).
        threshold: Pixels with a value below this are ink.

    Returns:
        Tuple of:
        - Cropped image. If there is no ink this is a zero-area (0, 0) array
          with the input dtype.
        - The BoundingBox used, or None for an all-background image.
    """
    bbox = find_ink_bbox(img, threshold)
    if bbox is None:
        return np.zeros((0, 0), dtype=img.dtype), None
    return img[bbox.as_slices()].copy(), bbox
