"""
Tests for Sobel and simplified Canny
"""

import numpy as np

from core.image.buffer import PixelBuffer
from vision.edge_detection import EdgeDetector, canny, sobel


class TestSobel:
    """Test gradient magnitude"""

    def test_flat_image_has_no_gradient(self):
        flat = PixelBuffer.from_array(np.full((8, 8), 120, dtype=np.uint8))

        assert (sobel(flat).pixels == 0).all()

    def test_vertical_step(self):
        pixels = np.zeros((6, 8), dtype=np.uint8)
        pixels[:, 4:] = 100
        out = sobel(PixelBuffer.from_array(pixels))

        # |Gx| = 4 * 100, clipped to 255
        assert out.get_pixel(3, 2) == 255
        assert out.get_pixel(4, 2) == 255
        assert out.get_pixel(1, 2) == 0

    def test_magnitude_truncated(self):
        pixels = np.zeros((5, 5), dtype=np.uint8)
        pixels[:, 3:] = 10
        out = sobel(PixelBuffer.from_array(pixels))

        assert out.get_pixel(2, 2) == 40

    def test_border_ring_zero(self, test_buffer):
        out = sobel(test_buffer)

        assert out.channels == 1
        assert (out.pixels[0] == 0).all()
        assert (out.pixels[:, 0] == 0).all()


class TestCanny:
    """Test smoothing followed by a high threshold"""

    def test_bright_region_kept(self):
        pixels = np.zeros((20, 20), dtype=np.uint8)
        pixels[5:15, 5:15] = 255
        out = canny(PixelBuffer.from_array(pixels))

        assert out.get_pixel(10, 10) == 255
        assert out.get_pixel(1, 1) == 0
        assert set(np.unique(out.pixels).tolist()) <= {0, 255}

    def test_margin_stays_zero(self):
        white = PixelBuffer.from_array(np.full((10, 10), 255, dtype=np.uint8))
        out = canny(white)

        assert (out.pixels[:2] == 0).all()
        assert (out.pixels[:, -2:] == 0).all()
        assert (out.pixels[2:-2, 2:-2] == 255).all()

    def test_smoothing_is_integer_division(self):
        detector = EdgeDetector()
        blurred = detector.smooth(np.full((5, 5), 100, dtype=np.uint8))

        # 159 * 100 / 159
        assert blurred[2, 2] == 100

    def test_low_threshold_ignored(self, test_buffer):
        assert canny(test_buffer, 0, 150).data == canny(test_buffer, 140, 150).data
