"""
Morphological operators on the grayscale plane.

Erode takes the minimum and dilate the maximum of a square structuring
element. Only pixels whose full neighbourhood lies inside the image are
computed; the margin of width size // 2 is left at 0.
"""

import logging

import numpy as np

from core.constants import MorphologyConstants
from core.exceptions import InvalidGeometryError
from core.image.buffer import PixelBuffer
from core.image.converters import luma_plane

logger = logging.getLogger(__name__)


def check_size(size: int) -> None:
    """Raise InvalidGeometryError unless the structuring element size is positive."""
    if size < 1:
        raise InvalidGeometryError("Structuring element size must be positive")


def _apply(buffer: PixelBuffer, size: int, reducer) -> PixelBuffer:
    check_size(size)
    gray = luma_plane(buffer)
    height, width = gray.shape
    half = size // 2
    out = np.zeros((height, width), dtype=np.uint8)

    out_h = height - 2 * half
    out_w = width - 2 * half
    if out_h <= 0 or out_w <= 0:
        return PixelBuffer.from_array(out)

    acc = gray[0:out_h, 0:out_w].copy()
    for dy in range(2 * half + 1):
        for dx in range(2 * half + 1):
            reducer(acc, gray[dy : dy + out_h, dx : dx + out_w], out=acc)

    out[half : height - half, half : width - half] = acc
    return PixelBuffer.from_array(out)


def erode(buffer: PixelBuffer, size: int = MorphologyConstants.DEFAULT_SIZE) -> PixelBuffer:
    """Minimum over a size x size neighbourhood."""
    return _apply(buffer, size, np.minimum)


def dilate(buffer: PixelBuffer, size: int = MorphologyConstants.DEFAULT_SIZE) -> PixelBuffer:
    """Maximum over a size x size neighbourhood."""
    return _apply(buffer, size, np.maximum)


def morph_open(buffer: PixelBuffer, size: int = MorphologyConstants.DEFAULT_SIZE) -> PixelBuffer:
    """Erode then dilate. Removes foreground specks smaller than the element."""
    return dilate(erode(buffer, size), size)


def morph_close(buffer: PixelBuffer, size: int = MorphologyConstants.DEFAULT_SIZE) -> PixelBuffer:
    """Dilate then erode. Fills background holes smaller than the element."""
    return erode(dilate(buffer, size), size)
