"""Tests for ink bounding box detection and cropping."""

import numpy as np
import pytest

from preprocessing import BoundingBox, crop_to_ink, find_ink_bbox

from conftest import make_formula


class TestBoundingBox:
    def test_dimensions_are_inclusive(self):
        bbox = BoundingBox(10, 10, 11, 11)
        assert bbox.width == 2
        assert bbox.height == 2
        assert bbox.to_rect() == (10, 10, 2, 2)

    def test_single_pixel_box(self):
        bbox = BoundingBox(3, 4, 3, 4)
        assert (bbox.width, bbox.height) == (1, 1)

    def test_inverted_bounds_raise(self):
        with pytest.raises(ValueError, match="Invalid bounding box"):
            BoundingBox(5, 0, 4, 0)

    def test_negative_coordinates_raise(self):
        with pytest.raises(ValueError, match="negative"):
            BoundingBox(-1, 0, 4, 0)

    def test_as_slices_selects_box(self):
        img = np.arange(100).reshape(10, 10)
        rows, cols = BoundingBox(2, 3, 4, 5).as_slices()
        assert img[rows, cols].shape == (3, 3)
        assert img[rows, cols][0, 0] == 32


class TestFindInkBbox:
    def test_small_square(self):
        gray = make_formula(20, 50, [(10, 10, 2, 2)], channels=0)
        assert find_ink_bbox(gray, 200) == BoundingBox(10, 10, 11, 11)

    def test_encloses_separate_strokes(self):
        gray = make_formula(40, 100, [(5, 30, 3, 3), (80, 2, 4, 1)], channels=0)
        assert find_ink_bbox(gray, 200) == BoundingBox(5, 2, 83, 32)

    def test_all_background_returns_none(self):
        gray = np.full((20, 50), 255, dtype=np.uint8)
        assert find_ink_bbox(gray, 250) is None

    def test_threshold_is_strict(self):
        gray = np.full((10, 10), 255, dtype=np.uint8)
        gray[4, 4] = 200
        assert find_ink_bbox(gray, 200) is None
        assert find_ink_bbox(gray, 201) == BoundingBox(4, 4, 4, 4)

    def test_ink_touching_edges(self):
        gray = np.full((10, 20), 255, dtype=np.uint8)
        gray[0, 19] = 0
        gray[9, 0] = 0
        assert find_ink_bbox(gray, 128) == BoundingBox(0, 0, 19, 9)

    def test_bbox_within_image(self):
        gray = np.random.randint(0, 256, (30, 40), dtype=np.uint8)
        bbox = find_ink_bbox(gray, 250)
        assert bbox is not None
        assert 0 <= bbox.min_x <= bbox.max_x <= 39
        assert 0 <= bbox.min_y <= bbox.max_y <= 29

    def test_requires_grayscale_input(self):
        with pytest.raises(ValueError, match="grayscale input"):
            find_ink_bbox(np.zeros((10, 10, 3), dtype=np.uint8), 200)


class TestCropToInk:
    def test_crop_contents(self):
        gray = make_formula(20, 50, [(10, 10, 2, 2)], channels=0)
        cropped, bbox = crop_to_ink(gray, 200)
        assert cropped.shape == (2, 2)
        assert np.all(cropped == 0)
        assert bbox == BoundingBox(10, 10, 11, 11)

    def test_empty_crop_is_zero_area(self):
        gray = np.full((20, 50), 255, dtype=np.uint8)
        cropped, bbox = crop_to_ink(gray, 250)
        assert bbox is None
        assert cropped.shape == (0, 0)
        assert cropped.dtype == np.uint8

    def test_crop_is_not_a_view(self):
        gray = make_formula(20, 50, [(10, 10, 5, 5)], channels=0)
        cropped, _ = crop_to_ink(gray, 200)
        cropped[:] = 99
        assert np.all(gray[10:15, 10:15] == 0)
