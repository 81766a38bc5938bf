"""
Pytest configuration and fixtures for Raster Vision Engine tests
"""

import cv2
import numpy as np
import pytest

from core.image.buffer import PixelBuffer
from core.image.codec import ImageCodec
from core.parallel import RowParallelExecutor
from services.image_service import ImageOperationsService


@pytest.fixture
def test_image():
    """Create an RGB test image with a bright square and a grey disc"""
    image = np.zeros((240, 320, 3), dtype=np.uint8)
    cv2.rectangle(image, (60, 60), (160, 160), (255, 255, 255), -1)
    cv2.circle(image, (240, 160), 40, (128, 128, 128), -1)
    return image


@pytest.fixture
def test_buffer(test_image):
    """test_image wrapped as a PixelBuffer"""
    return PixelBuffer.from_array(test_image.copy())


@pytest.fixture
def gray_buffer():
    """Single-channel 32x32 horizontal gradient"""
    gradient = np.tile(np.arange(0, 256, 8, dtype=np.uint8), (32, 1))
    return PixelBuffer.from_array(gradient)


@pytest.fixture
def executor():
    """Row-parallel executor with the default worker count"""
    return RowParallelExecutor()


@pytest.fixture
def codec():
    return ImageCodec()


@pytest.fixture
def image_service(executor):
    """Create ImageOperationsService instance for testing"""
    return ImageOperationsService(executor=executor)


@pytest.fixture
def image_file(tmp_path, codec, test_buffer):
    """test_image saved as PNG; returns the path"""
    path = tmp_path / "input.png"
    codec.write(str(path), test_buffer)
    return str(path)


@pytest.fixture
def blank_file(tmp_path, codec):
    """All-black 100x80 RGB PNG; returns the path"""
    path = tmp_path / "blank.png"
    codec.write(str(path), PixelBuffer.create(100, 80, 3))
    return str(path)


@pytest.fixture
def output_path(tmp_path):
    return str(tmp_path / "output.png")
