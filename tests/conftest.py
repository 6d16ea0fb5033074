"""Shared fixtures: synthetic formula images built from ink rectangles."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def make_formula(
    height: int,
    width: int,
    ink: list[tuple[int, int, int, int]] = (),
    channels: int = 3,
    background: int = 255,
    ink_value: int = 0,
) -> np.ndarray:
    """Build a white image with black rectangles.

    Args:
        height: Image height.
        width: Image width.
        ink: Rectangles as (x, y, w, h).
        channels: 0 for a 2D grayscale array, else the channel count.
        background: Paper value.
        ink_value: Stroke value.
    """
    shape = (height, width) if channels == 0 else (height, width, channels)
    img = np.full(shape, background, dtype=np.uint8)
    for x, y, w, h in ink:
        img[y:y + h, x:x + w] = ink_value
    if channels == 4:
        img[..., 3] = 255
    return img


@pytest.fixture
def formula_factory():
    return make_formula


@pytest.fixture
def write_image():
    def _write(path: Path, arr: np.ndarray) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(arr).save(path)
        return path

    return _write


@pytest.fixture
def formula_dir(tmp_path, write_image):
    """Directory with three formula images in mixed formats."""
    src = tmp_path / "formulas"
    write_image(src / "alpha.png", make_formula(40, 120, [(10, 10, 80, 15)]))
    write_image(src / "beta.png", make_formula(200, 50, [(5, 20, 30, 150)], channels=0))
    write_image(src / "gamma.jpg", make_formula(60, 60, [(20, 20, 20, 20)]))
    return src
