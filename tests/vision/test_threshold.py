"""
Tests for thresholding strategies
"""

import numpy as np
import pytest

from core.exceptions import InvalidGeometryError
from core.image.buffer import PixelBuffer
from vision.threshold import adaptive_threshold, otsu, otsu_threshold, threshold


class TestGlobalThreshold:
    """Test fixed thresholds"""

    def test_strictly_greater(self, gray_buffer):
        out = threshold(gray_buffer, 128, 200)

        assert out.channels == 1
        assert out.get_pixel(16, 0) == 0  # value 128
        assert out.get_pixel(17, 0) == 200  # value 136

    def test_color_input_uses_luma(self):
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[0, 0] = (0, 255, 0)  # luma 149
        out = threshold(PixelBuffer.from_array(pixels), 140)

        assert out.get_pixel(0, 0) == 255
        assert out.get_pixel(1, 1) == 0

    @pytest.mark.parametrize("maxval", [-1, 256, 300])
    def test_maxval_out_of_range(self, gray_buffer, maxval):
        with pytest.raises(InvalidGeometryError, match="maxval must be between 0 and 255"):
            threshold(gray_buffer, 100, maxval)


class TestOtsu:
    """Test automatic thresholding"""

    @pytest.fixture
    def bimodal(self):
        rng = np.random.default_rng(7)
        dark = rng.integers(5, 16, size=(20, 40))
        bright = rng.integers(195, 206, size=(20, 40))
        return np.vstack([dark, bright]).astype(np.uint8)

    def test_threshold_between_modes(self, bimodal):
        t = otsu_threshold(bimodal)

        assert 10 < t < 200

    def test_first_maximum_wins(self):
        """Test that ties resolve to the lowest threshold"""
        gray = np.array([[10, 10, 200, 200]], dtype=np.uint8)

        assert otsu_threshold(gray) == 10

    def test_uniform_image(self):
        assert otsu_threshold(np.full((4, 4), 77, dtype=np.uint8)) == 0

    def test_binarizes_image(self, bimodal):
        out, t = otsu(PixelBuffer.from_array(bimodal))

        assert (out.pixels[:20] == 0).all()
        assert (out.pixels[20:] == 255).all()
        assert set(np.unique(out.pixels).tolist()) == {0, 255}


class TestAdaptiveThreshold:
    """Test local mean thresholding"""

    def test_flat_image_with_negative_c(self):
        gray = PixelBuffer.from_array(np.full((6, 6), 100, dtype=np.uint8))

        assert (adaptive_threshold(gray, 3, -1).pixels == 0).all()
        assert (adaptive_threshold(gray, 3, 1).pixels == 255).all()

    def test_bright_spot_detected(self):
        pixels = np.full((9, 9), 50, dtype=np.uint8)
        pixels[4, 4] = 200
        out = adaptive_threshold(PixelBuffer.from_array(pixels), 3, 0)

        assert out.get_pixel(4, 4) == 255
        assert out.get_pixel(0, 0) == 0

    def test_neighbourhood_clipped_at_corner(self):
        """Test that corner means only count pixels inside the image"""
        pixels = np.zeros((4, 4), dtype=np.uint8)
        pixels[0, 0] = 40
        # corner block: 4 pixels, sum 40, mean 10 -> 40 > 10
        out = adaptive_threshold(PixelBuffer.from_array(pixels), 3, 0)

        assert out.get_pixel(0, 0) == 255
        assert out.get_pixel(1, 1) == 0

    def test_even_block_size_bumped(self):
        pixels = np.random.default_rng(1).integers(0, 255, size=(10, 10)).astype(np.uint8)
        buffer = PixelBuffer.from_array(pixels)

        assert adaptive_threshold(buffer, 4, 2).data == adaptive_threshold(buffer, 5, 2).data

    def test_negative_block_size(self, gray_buffer):
        with pytest.raises(InvalidGeometryError):
            adaptive_threshold(gray_buffer, -3, 0)

    def test_zero_block_size_acts_as_one(self, gray_buffer):
        """Test that 0 is even, so it is bumped to a 1x1 neighbourhood"""
        zero = adaptive_threshold(gray_buffer, 0, 1)

        assert zero.data == adaptive_threshold(gray_buffer, 1, 1).data
        # 1x1 mean is the pixel itself: gray > gray - 1 everywhere
        assert (zero.plane(0) == 255).all()
