"""
Tests for crop, rotate and resize
"""

import numpy as np
import pytest

from core.exceptions import InvalidGeometryError
from core.image.buffer import PixelBuffer
from vision.transform import crop, resize, rotate


class TestCrop:
    """Test rectangle extraction"""

    def test_crop_copies_rows(self, test_buffer):
        out = crop(test_buffer, 50, 40, 30, 20)

        assert (out.width, out.height, out.channels) == (30, 20, 3)
        assert np.array_equal(out.pixels, test_buffer.pixels[40:60, 50:80])

    def test_crop_is_a_copy(self, test_buffer):
        out = crop(test_buffer, 0, 0, 10, 10)
        out.pixels[:] = 1

        assert test_buffer.pixels[0, 0, 0] == 0

    def test_full_image(self, test_buffer):
        out = crop(test_buffer, 0, 0, test_buffer.width, test_buffer.height)

        assert out.data == test_buffer.data

    @pytest.mark.parametrize(
        "x,y,w,h",
        [(300, 0, 21, 10), (0, 200, 10, 41), (-1, 0, 5, 5), (0, 0, 0, 5), (0, 0, 5, -2)],
    )
    def test_invalid_rectangle(self, test_buffer, x, y, w, h):
        with pytest.raises(InvalidGeometryError, match="Invalid crop rectangle"):
            crop(test_buffer, x, y, w, h)


class TestRotate:
    """Test arbitrary-angle rotation"""

    @pytest.fixture
    def solid(self):
        return PixelBuffer.from_array(np.full((40, 40, 3), (10, 200, 30), dtype=np.uint8))

    def test_zero_degrees_grows_by_one(self, solid):
        out = rotate(solid, 0)

        assert (out.width, out.height) == (41, 41)
        assert np.array_equal(out.pixels[:40, :40], solid.pixels)
        assert (out.pixels[40] == 0).all()
        assert (out.pixels[:, 40] == 0).all()

    def test_ninety_degrees_swaps_size(self):
        buffer = PixelBuffer.create(30, 10, 1)
        out = rotate(buffer, 90)

        assert abs(out.width - 11) <= 1
        assert abs(out.height - 31) <= 1

    def test_rotation_expands_canvas(self, solid):
        out = rotate(solid, 45)

        assert out.width > 55
        assert out.height > 55
        assert out.get_pixel(0, 0) == 0

    def test_roundtrip_restores_center(self, solid):
        """Test that rotating by angle then -angle keeps the content"""
        out = rotate(rotate(solid, 30), -30)
        cx, cy = out.width // 2, out.height // 2

        assert out.pixels[cy, cx].tolist() == [10, 200, 30]

    def test_keeps_channel_count(self, gray_buffer):
        assert rotate(gray_buffer, 15).channels == 1

    @pytest.mark.parametrize("angle", [float("nan"), float("inf"), float("-inf"), 1e300])
    def test_non_finite_angle_rejected(self, solid, angle):
        """Test that angles with no finite float32 radian value raise instead of allocating"""
        with pytest.raises(InvalidGeometryError, match="Rotation angle must be finite"):
            rotate(solid, angle)


class TestResize:
    """Test resampling"""

    def test_downscale(self, test_buffer):
        out = resize(test_buffer, 160, 120)

        assert (out.width, out.height, out.channels) == (160, 120, 3)

    def test_upscale_single_channel(self, gray_buffer):
        out = resize(gray_buffer, 64, 48)

        assert (out.width, out.height, out.channels) == (64, 48, 1)

    def test_flat_color_preserved(self):
        flat = PixelBuffer.from_array(np.full((10, 10, 3), 77, dtype=np.uint8))

        assert (resize(flat, 23, 7).pixels == 77).all()

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 5)])
    def test_non_positive_size(self, test_buffer, width, height):
        with pytest.raises(InvalidGeometryError, match="Width and height must be positive"):
            resize(test_buffer, width, height)
