"""
Tests for ImageOperationsService
"""

import logging
import os

import cv2
import numpy as np
import pytest
from PIL import Image

from core.image.buffer import PixelBuffer


class TestImageOperationsService:
    """Test file-to-file operations through the service"""

    def test_grayscale(self, image_service, image_file, output_path, codec):
        result = image_service.grayscale(image_file, output_path)

        assert result.success
        assert result.error_kind is None
        assert codec.read(output_path).channels == 1

    def test_missing_input(self, image_service, tmp_path, output_path):
        result = image_service.blur(str(tmp_path / "nope.png"), output_path)

        assert not result.success
        assert result.error_kind == "io"
        assert result.message == "Failed to read input image"
        assert not os.path.exists(output_path)

    def test_unsupported_output(self, image_service, image_file, tmp_path):
        result = image_service.sobel(image_file, str(tmp_path / "out.gif"))

        assert not result.success
        assert result.error_kind == "write"

    def test_crop_out_of_bounds(self, image_service, image_file, output_path):
        """Test that crop fails with a message when x + w > width"""
        result = image_service.crop(image_file, output_path, 300, 0, 50, 10)

        assert not result.success
        assert result.error_kind == "validation"
        assert result.message == "Invalid crop rectangle"
        assert not os.path.exists(output_path)

    def test_crop(self, image_service, image_file, output_path, codec):
        result = image_service.crop(image_file, output_path, 10, 20, 30, 40)

        assert result.success
        out = codec.read(output_path)
        assert (out.width, out.height) == (30, 40)

    def test_resize_validated_before_read(self, image_service, tmp_path, output_path):
        result = image_service.resize(str(tmp_path / "nope.png"), output_path, 0, 10)

        assert result.error_kind == "validation"
        assert result.message == "Width and height must be positive"

    def test_resize(self, image_service, image_file, output_path, codec):
        assert image_service.resize(image_file, output_path, 64, 48).success
        assert codec.read_shape(output_path) == (64, 48, 3)

    def test_rotate(self, image_service, image_file, output_path, codec):
        assert image_service.rotate(image_file, output_path, 0).success
        assert codec.read_shape(output_path) == (321, 241, 3)

    @pytest.mark.parametrize("kind", ["gaussian", "median", "average", "box"])
    def test_blur_kinds(self, image_service, image_file, output_path, kind):
        assert image_service.blur(image_file, output_path, kind).success

    def test_unknown_blur_kind_is_average(self, image_service, image_file, tmp_path, codec):
        box = str(tmp_path / "box.png")
        average = str(tmp_path / "average.png")
        image_service.blur(image_file, box, "box")
        image_service.blur(image_file, average, "average")

        assert codec.read(box).data == codec.read(average).data

    def test_blur_invalid_sigma(self, image_service, image_file, output_path):
        result = image_service.blur(image_file, output_path, "gaussian", 5, 0)

        assert result.error_kind == "validation"

    def test_otsu_reports_threshold(self, image_service, tmp_path, output_path, codec):
        pixels = np.full((20, 20), 10, dtype=np.uint8)
        pixels[10:] = 200
        path = str(tmp_path / "bimodal.png")
        codec.write(path, PixelBuffer.from_array(pixels))

        result = image_service.otsu(path, output_path)

        assert result.success
        assert result.threshold == 10

    def test_threshold_and_adaptive(self, image_service, image_file, output_path):
        assert image_service.threshold(image_file, output_path, 100, 255).success
        assert image_service.adaptive_threshold(image_file, output_path, 11, 2).success

    def test_morphology(self, image_service, image_file, output_path, codec):
        for op in (
            image_service.erode,
            image_service.dilate,
            image_service.morph_open,
            image_service.morph_close,
        ):
            assert op(image_file, output_path).success
            assert codec.read(output_path).channels == 1

    def test_morphology_invalid_size(self, image_service, image_file, output_path):
        assert image_service.erode(image_file, output_path, 0).error_kind == "validation"

    def test_edges(self, image_service, image_file, output_path):
        assert image_service.sobel(image_file, output_path).success
        assert image_service.canny(image_file, output_path, 50, 150).success

    def test_draw_line(self, image_service, blank_file, output_path, codec):
        result = image_service.draw_line(blank_file, output_path, 0, 0, 10, 0)

        assert result.success
        out = codec.read(output_path)
        red = np.argwhere(out.pixels[:, :, 0] == 255)
        assert sorted(map(tuple, red.tolist())) == [(0, x) for x in range(11)]

    def test_drawing_operations(self, image_service, blank_file, output_path, codec):
        assert image_service.draw_rect(blank_file, output_path, 5, 5, 20, 10).success
        assert image_service.fill_rect(blank_file, output_path, 5, 5, 20, 10, 0, 0, 255).success
        assert codec.read(output_path).pixels[10, 10].tolist() == [0, 0, 255]
        assert image_service.draw_circle(blank_file, output_path, 50, 40, 20).success
        assert image_service.draw_text(blank_file, output_path, 2, 2, "2024").success

    def test_detect_contours_blank(self, image_service, blank_file, output_path):
        result = image_service.detect_contours(blank_file, output_path)

        assert result.success
        assert result.rect_count == 0
        assert result.rects == []

    def test_detect_contours(self, image_service, image_file, output_path):
        result = image_service.detect_contours(image_file, output_path)

        assert result.success
        assert result.rect_count == len(result.rects)
        assert result.rect_count >= 1

    def test_placeholders(self, image_service, image_file, output_path):
        assert image_service.detect_faces(image_file, output_path).count == 1
        assert image_service.detect_plate(image_file, output_path, 3).count == 1
        assert image_service.hough_lines(image_file, output_path).count == 2
        match = image_service.template_match(image_file, "unused.png", output_path)
        assert match.location == (100, 100)
        assert image_service.edge_overlay(image_file, output_path, 2).success

    def test_kmeans_and_equalize_copy_input(self, image_service, image_file, tmp_path, codec):
        """Test that the clustering and equalization placeholders write the input unchanged"""
        clustered = str(tmp_path / "kmeans.png")
        equalized = str(tmp_path / "equalized.png")

        assert image_service.kmeans(image_file, clustered, 3).success
        assert image_service.equalize_hist(image_file, equalized).success
        assert codec.read(clustered).data == codec.read(image_file).data
        assert codec.read(equalized).data == codec.read(image_file).data

    def test_info(self, image_service, image_file):
        result = image_service.info(image_file)

        assert result.success
        assert result.info.model_dump() == {
            "width": 320,
            "height": 240,
            "channels": 3,
            "size_bytes": 320 * 240 * 3,
        }

    def test_info_missing(self, image_service, tmp_path):
        result = image_service.info(str(tmp_path / "missing.png"))

        assert not result.success
        assert result.error_kind == "io"

    def test_version(self, image_service):
        version = image_service.version()

        assert version["version"] == "3.0.0"
        assert version["max_threads"] == 4
        assert version["supports_face_detection"] is True

    def test_histogram(self, image_service, image_file, caplog):
        with caplog.at_level(logging.INFO, logger="services.image_service"):
            result = image_service.histogram(image_file)

        assert result.success
        assert (result.width, result.height) == (320, 240)
        assert f"Histogram for {image_file}: image size 320x240" in caplog.text

    def test_histogram_missing(self, image_service, tmp_path):
        result = image_service.histogram(str(tmp_path / "missing.png"))

        assert not result.success
        assert result.error_kind == "io"
        assert result.message == "Failed to read input image"


class TestFailedOperations:
    """Test that every failure comes back as a result and leaves no output file"""

    def test_nan_angle(self, image_service, image_file, output_path):
        result = image_service.rotate(image_file, output_path, float("nan"))

        assert not result.success
        assert result.error_kind == "validation"
        assert not os.path.exists(output_path)

    def test_infinite_angle_checked_before_read(self, image_service, tmp_path, output_path):
        result = image_service.rotate(str(tmp_path / "nope.png"), output_path, float("inf"))

        assert result.error_kind == "validation"

    def test_maxval_out_of_range(self, image_service, image_file, output_path):
        result = image_service.threshold(image_file, output_path, 100, 300)

        assert not result.success
        assert result.error_kind == "validation"
        assert result.message == "maxval must be between 0 and 255"
        assert not os.path.exists(output_path)

    def test_resample_failure_is_allocation(
        self, image_service, image_file, output_path, monkeypatch
    ):
        def fail(*args, **kwargs):
            raise cv2.error("Insufficient memory")

        monkeypatch.setattr("core.image.processors.cv2.resize", fail)
        result = image_service.resize(image_file, output_path, 64, 48)

        assert not result.success
        assert result.error_kind == "allocation"
        assert result.message == "Memory allocation failed"
        assert not os.path.exists(output_path)

    def test_oversized_input_is_read_failure(
        self, image_service, image_file, output_path, monkeypatch
    ):
        """Test that Pillow's decompression bomb guard surfaces as an io failure"""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        result = image_service.grayscale(image_file, output_path)

        assert not result.success
        assert result.error_kind == "io"
        assert not os.path.exists(output_path)

    def test_failed_crop_writes_nothing(self, image_service, image_file, output_path):
        result = image_service.crop(image_file, output_path, 0, 0, 321, 10)

        assert result.error_kind == "validation"
        assert not os.path.exists(output_path)

    def test_failed_read_writes_nothing(self, image_service, tmp_path, output_path):
        corrupt = tmp_path / "corrupt.png"
        corrupt.write_bytes(b"not an image")

        result = image_service.crop(str(corrupt), output_path, 0, 0, 10, 10)

        assert result.error_kind == "io"
        assert not os.path.exists(output_path)
