"""Tests for image output."""

import pytest
import numpy as np
from PIL import Image as PILImage

from raylite.image import save_image


class TestSaveImage:
    """Test save_image()."""

    def test_round_trip_png(self, tmp_path):
        pixels = np.zeros((3, 4, 3), dtype=np.uint8)
        pixels[0, 0] = (255, 0, 0)
        pixels[2, 3] = (0, 0, 255)

        path = save_image(pixels, tmp_path / "out.png")

        with PILImage.open(path) as img:
            assert img.size == (4, 3)
            assert img.mode == 'RGB'
            assert img.getpixel((0, 0)) == (255, 0, 0)
            assert img.getpixel((3, 2)) == (0, 0, 255)

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "out.png"
        save_image(np.zeros((1, 1, 3), dtype=np.uint8), target)
        assert target.exists()

    def test_rejects_float_buffer(self, tmp_path):
        with pytest.raises(ValueError, match="uint8"):
            save_image(np.zeros((2, 2, 3)), tmp_path / "out.png")

    def test_rejects_wrong_shape(self, tmp_path):
        with pytest.raises(ValueError, match="shape"):
            save_image(np.zeros((2, 2), dtype=np.uint8), tmp_path / "out.png")
