"""
Tests for fixed-geometry detections
"""

import numpy as np
import pytest

from core.image.buffer import PixelBuffer
from vision.detections import PlaceholderDetector, plate_region


class TestPlaceholderDetector:
    """Test the placeholder detections"""

    @pytest.fixture
    def detector(self):
        return PlaceholderDetector()

    @pytest.fixture
    def canvas(self):
        return PixelBuffer.create(320, 240, 3)

    def test_detect_faces(self, detector, canvas):
        out, count = detector.detect_faces(canvas)

        assert count == 1
        # box at (80, 60, 160, 120), thickness 3
        assert out.pixels[60, 100].tolist() == [0, 255, 0]
        assert out.pixels[180, 240].tolist() == [0, 255, 0]
        assert out.pixels[120, 160].tolist() == [0, 0, 0]
        # input untouched
        assert not canvas.pixels.any()

    @pytest.mark.parametrize(
        "choice,color",
        [
            (1, [255, 0, 0]),
            (2, [0, 255, 0]),
            (3, [0, 0, 255]),
            (4, [255, 255, 0]),
            (9, [255, 0, 0]),
        ],
    )
    def test_detect_plate_colors(self, detector, canvas, choice, color):
        out, count = detector.detect_plate(canvas, choice)
        x, y, w, h = plate_region(canvas)

        assert count == 1
        assert (x, y, w, h) == (80, 80, 160, 40)
        assert out.pixels[y, x + 20].tolist() == color

    def test_hough_lines(self, detector, canvas):
        out, count = detector.hough_lines(canvas)

        assert count == 2
        assert out.pixels[50, 120].tolist() == [0, 255, 0]
        assert out.pixels[100, 200].tolist() == [0, 255, 0]
        assert out.pixels[75, 120].tolist() == [0, 0, 0]

    def test_template_match(self, detector, canvas):
        out, location = detector.template_match(canvas)

        assert location == (100, 100)
        assert out.pixels[100, 125].tolist() == [255, 255, 0]
        assert out.pixels[150, 150].tolist() == [255, 255, 0]

    def test_edge_overlay_paints_edges(self, detector):
        pixels = np.zeros((40, 40, 3), dtype=np.uint8)
        pixels[10:30, 10:30] = 255
        out = detector.edge_overlay(PixelBuffer.from_array(pixels), 1)

        assert out.pixels[20, 20].tolist() == [0, 255, 0]
        assert out.pixels[2, 2].tolist() == [0, 0, 0]

    def test_edge_overlay_plate(self, detector, canvas):
        out = detector.edge_overlay(canvas, 3)
        x, y, _, _ = plate_region(canvas)

        assert out.pixels[y, x + 20].tolist() == [255, 0, 0]

    def test_edge_overlay_unknown_mode_copies(self, detector, test_buffer):
        out = detector.edge_overlay(test_buffer, 7)

        assert out.data == test_buffer.data
        assert out is not test_buffer

    def test_kmeans_copies_input(self, detector, test_buffer):
        out = detector.kmeans(test_buffer, 4, max_iters=3)

        assert out.data == test_buffer.data
        assert out is not test_buffer

    def test_equalize_hist_copies_input(self, detector, gray_buffer):
        out = detector.equalize_hist(gray_buffer)

        assert out.data == gray_buffer.data
        assert out.channels == 1
        assert out is not gray_buffer
