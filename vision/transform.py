"""
Geometric transforms: crop, rotate and resize.

Geometry is validated before anything is allocated; invalid requests raise
InvalidGeometryError.
"""

import logging
import math

import numpy as np

from core.exceptions import InvalidGeometryError
from core.image.buffer import PixelBuffer
from core.image.processors import resample

logger = logging.getLogger(__name__)


def crop(buffer: PixelBuffer, x: int, y: int, width: int, height: int) -> PixelBuffer:
    """
    Copy the width x height rectangle whose top-left corner is (x, y).

    Raises:
        InvalidGeometryError: If the rectangle is empty or leaves the image
    """
    if (
        x < 0
        or y < 0
        or width <= 0
        or height <= 0
        or x + width > buffer.width
        or y + height > buffer.height
    ):
        raise InvalidGeometryError("Invalid crop rectangle")

    return PixelBuffer.from_array(buffer.pixels[y : y + height, x : x + width].copy())


def rotated_bounds(width: int, height: int, cos_a: np.float32, sin_a: np.float32):
    """
    Bounding box of the rotated image corners.

    Returns:
        (new_width, new_height, offset_x, offset_y)
    """
    corners = ((0, 0), (width, 0), (0, height), (width, height))
    xs = []
    ys = []
    for cx, cy in corners:
        fx = np.float32(cx)
        fy = np.float32(cy)
        xs.append(int(fx * cos_a - fy * sin_a))
        ys.append(int(fx * sin_a + fy * cos_a))
    return (
        max(xs) - min(xs) + 1,
        max(ys) - min(ys) + 1,
        -min(xs),
        -min(ys),
    )


def check_angle(angle: float) -> None:
    """Raise InvalidGeometryError unless angle converts to a finite float32 radian value."""
    if not math.isfinite(angle) or abs(angle) * math.pi / 180.0 > np.finfo(np.float32).max:
        raise InvalidGeometryError("Rotation angle must be finite")


def rotate(buffer: PixelBuffer, angle: float) -> PixelBuffer:
    """
    Rotate by angle degrees around the origin, expanding the canvas.

    Rotation math runs in float32 and every coordinate is truncated toward
    zero. Each destination pixel is mapped back into the source; pixels
    that land outside it stay 0. A 0 degree rotation therefore returns an
    image one row and one column larger than the source.
    """
    check_angle(angle)
    rad = np.float32(angle * math.pi / 180.0)
    cos_a = np.float32(math.cos(rad))
    sin_a = np.float32(math.sin(rad))

    new_width, new_height, offset_x, offset_y = rotated_bounds(
        buffer.width, buffer.height, cos_a, sin_a
    )
    out = PixelBuffer.create(new_width, new_height, buffer.channels)

    dx = (np.arange(new_width) - offset_x).astype(np.float32)[np.newaxis, :]
    dy = (np.arange(new_height) - offset_y).astype(np.float32)[:, np.newaxis]
    src_x = (dx * cos_a + dy * sin_a).astype(np.int64)
    src_y = (-dx * sin_a + dy * cos_a).astype(np.int64)

    valid = (src_x >= 0) & (src_x < buffer.width) & (src_y >= 0) & (src_y < buffer.height)
    out.pixels[valid] = buffer.pixels[src_y[valid], src_x[valid]]

    logger.debug(f"Rotated {buffer} by {angle} degrees into {out}")
    return out


def check_size(width: int, height: int) -> None:
    """Raise InvalidGeometryError unless both dimensions are positive."""
    if width <= 0 or height <= 0:
        raise InvalidGeometryError("Width and height must be positive")


def resize(buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """Resample to width x height, keeping the channel count."""
    check_size(width, height)
    return resample(buffer, width, height)
