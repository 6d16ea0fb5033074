"""Tests for image file I/O and directory scanning."""

import numpy as np
import pytest
from PIL import Image

from preprocessing import DecodeError, EncodeError, preprocess
from sources import is_supported_image, load_image, save_image, scan_local_images

from conftest import make_formula


class TestLoadSave:
    def test_png_round_trip_is_lossless(self, tmp_path):
        canvas = preprocess(make_formula(30, 90, [(10, 5, 60, 20)]))
        path = save_image(canvas, tmp_path / "out.png")
        loaded = load_image(path)
        assert loaded.shape == canvas.shape
        assert loaded.dtype == np.uint8
        assert np.array_equal(loaded, canvas)

    def test_rgb_png_loads_as_rgb(self, tmp_path, write_image):
        img = make_formula(10, 20, [(2, 2, 3, 3)])
        write_image(tmp_path / "rgb.png", img)
        loaded = load_image(tmp_path / "rgb.png")
        assert loaded.shape == (10, 20, 3)
        assert np.array_equal(loaded, img)

    def test_rgba_png_keeps_alpha(self, tmp_path, write_image):
        img = make_formula(10, 20, channels=4)
        write_image(tmp_path / "rgba.png", img)
        assert load_image(tmp_path / "rgba.png").shape == (10, 20, 4)

    def test_palette_image_converted(self, tmp_path):
        Image.new("P", (20, 10), color=3).save(tmp_path / "palette.png")
        loaded = load_image(tmp_path / "palette.png")
        assert loaded.shape == (10, 20, 3)

    def test_la_image_converted_to_rgba(self, tmp_path):
        Image.new("LA", (20, 10), color=(0, 255)).save(tmp_path / "la.png")
        loaded = load_image(tmp_path / "la.png")
        assert loaded.shape == (10, 20, 4)

    def test_16bit_grayscale_reduced_to_8bit(self, tmp_path):
        arr = np.full((8, 8), 65535, dtype=np.uint16)
        Image.fromarray(arr).save(tmp_path / "deep.png")
        loaded = load_image(tmp_path / "deep.png")
        assert loaded.shape == (8, 8)
        assert loaded.dtype == np.uint8
        assert np.all(loaded == 255)

    def test_32bit_image_in_byte_range_is_kept(self, tmp_path):
        arr = np.tile(np.arange(0, 200, 25, dtype=np.int32), (4, 1))
        Image.fromarray(arr).save(tmp_path / "wide.tif")
        loaded = load_image(tmp_path / "wide.tif")
        assert loaded.dtype == np.uint8
        assert np.array_equal(loaded, arr.astype(np.uint8))

    def test_32bit_image_with_negative_values_is_stretched(self, tmp_path):
        arr = np.array([[-1000, 0, 1000]], dtype=np.int32)
        Image.fromarray(arr).save(tmp_path / "signed.tif")
        loaded = load_image(tmp_path / "signed.tif")
        assert loaded[0, 0] == 0
        assert loaded[0, 2] == 255
        assert 0 < loaded[0, 1] < 255

    def test_missing_file_raises_decode_error(self, tmp_path):
        with pytest.raises(DecodeError, match="Cannot decode"):
            load_image(tmp_path / "missing.png")

    def test_corrupt_file_raises_decode_error(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(DecodeError):
            load_image(path)

    def test_decode_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_image(tmp_path / "missing.png")

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "a" / "b" / "out.png"
        save_image(np.zeros((4, 4), dtype=np.uint8), path)
        assert path.exists()

    def test_unknown_extension_raises_encode_error(self, tmp_path):
        with pytest.raises(EncodeError, match="Cannot write"):
            save_image(np.zeros((4, 4), dtype=np.uint8), tmp_path / "out.unknownext")

    def test_rgba_as_jpeg_raises_encode_error(self, tmp_path):
        with pytest.raises(EncodeError):
            save_image(np.zeros((4, 4, 4), dtype=np.uint8), tmp_path / "out.jpg")


class TestScanLocalImages:
    def test_lists_supported_files_sorted(self, tmp_path, write_image):
        img = make_formula(4, 4)
        write_image(tmp_path / "b.JPG", img)
        write_image(tmp_path / "a.png", img)
        write_image(tmp_path / "c.jpeg", img)
        (tmp_path / "notes.txt").write_text("x")
        write_image(tmp_path / "nested" / "d.png", img)

        found = scan_local_images(tmp_path)
        assert [p.name for p in found] == ["a.png", "b.JPG", "c.jpeg"]

    def test_single_file(self, tmp_path, write_image):
        path = write_image(tmp_path / "one.png", make_formula(4, 4))
        assert scan_local_images(path) == [path.resolve()]

    def test_unsupported_file_raises(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("x")
        with pytest.raises(ValueError, match="not a supported image"):
            scan_local_images(path)

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(ValueError, match="not a valid file or directory"):
            scan_local_images(tmp_path / "nope")

    def test_empty_directory(self, tmp_path):
        assert scan_local_images(tmp_path) == []

    @pytest.mark.parametrize("name,expected", [
        ("x.png", True),
        ("x.JPEG", True),
        ("x.jpg", True),
        ("x.gif", False),
        ("x", False),
    ])
    def test_is_supported_image(self, tmp_path, name, expected):
        assert is_supported_image(tmp_path / name) is expected
