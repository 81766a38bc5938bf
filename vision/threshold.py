"""
Thresholding strategies: global, Otsu and adaptive mean.

Every strategy works on the luma plane and produces a single-channel buffer.
"""

import logging
from typing import Tuple

import numpy as np

from core.exceptions import InvalidGeometryError
from core.image.buffer import PixelBuffer
from core.image.converters import luma_plane

logger = logging.getLogger(__name__)


def check_maxval(maxval: int) -> None:
    """Raise InvalidGeometryError unless maxval fits in a byte."""
    if not 0 <= maxval <= 255:
        raise InvalidGeometryError("maxval must be between 0 and 255")


def threshold(buffer: PixelBuffer, thresh: int, maxval: int = 255) -> PixelBuffer:
    """maxval where gray > thresh, else 0."""
    check_maxval(maxval)
    gray = luma_plane(buffer)
    out = np.where(gray > thresh, np.uint8(maxval), np.uint8(0)).astype(np.uint8)
    return PixelBuffer.from_array(out)


def otsu_threshold(gray: np.ndarray) -> int:
    """
    Pick the threshold maximizing between-class variance.

    The scan runs t = 0..255 ascending. Thresholds with an empty background
    class are skipped and the scan stops once the foreground class empties.
    Only a strictly greater variance replaces the best, so the first maximum
    wins ties.

    Args:
        gray: (H, W) uint8 plane

    Returns:
        Threshold in 0..255 (0 when every pixel has the same value)
    """
    hist = np.bincount(gray.ravel(), minlength=256).astype(np.float64)
    total = float(gray.size)
    sum_all = float(np.dot(np.arange(256), hist))

    sum_b = 0.0
    weight_b = 0.0
    best_var = 0.0
    best_t = 0

    for t in range(256):
        weight_b += hist[t]
        if weight_b == 0:
            continue
        weight_f = total - weight_b
        if weight_f == 0:
            break

        sum_b += t * hist[t]
        mean_b = sum_b / weight_b
        mean_f = (sum_all - sum_b) / weight_f
        between = weight_b * weight_f * (mean_b - mean_f) ** 2
        if between > best_var:
            best_var = between
            best_t = t

    return best_t


def otsu(buffer: PixelBuffer) -> Tuple[PixelBuffer, int]:
    """Binarize at the Otsu threshold; returns the image and the threshold."""
    gray = luma_plane(buffer)
    t = otsu_threshold(gray)
    logger.debug(f"Otsu threshold for {buffer}: {t}")
    out = np.where(gray > t, np.uint8(255), np.uint8(0)).astype(np.uint8)
    return PixelBuffer.from_array(out), t


def check_block_size(block_size: int) -> None:
    """Raise InvalidGeometryError for a negative block size; 0 is bumped to 1."""
    if block_size < 0:
        raise InvalidGeometryError("Block size must not be negative")


def adaptive_threshold(buffer: PixelBuffer, block_size: int, c: int) -> PixelBuffer:
    """
    Local mean threshold.

    Each pixel is compared with the integer mean of its block_size x
    block_size neighbourhood (clipped to the image) minus c. Even block
    sizes are bumped to the next odd size.
    """
    check_block_size(block_size)
    if block_size % 2 == 0:
        block_size += 1
    half = block_size // 2

    gray = luma_plane(buffer)
    height, width = gray.shape

    # Summed-area table with a zero row/column in front
    integral = np.zeros((height + 1, width + 1), dtype=np.int64)
    integral[1:, 1:] = gray.astype(np.int64).cumsum(axis=0).cumsum(axis=1)

    ys = np.arange(height)
    xs = np.arange(width)
    y0 = np.clip(ys - half, 0, height - 1)
    y1 = np.clip(ys + half, 0, height - 1) + 1
    x0 = np.clip(xs - half, 0, width - 1)
    x1 = np.clip(xs + half, 0, width - 1) + 1

    sums = (
        integral[y1][:, x1]
        - integral[y0][:, x1]
        - integral[y1][:, x0]
        + integral[y0][:, x0]
    )
    counts = np.outer(y1 - y0, x1 - x0)
    limits = sums // counts - c

    out = np.where(gray.astype(np.int64) > limits, np.uint8(255), np.uint8(0)).astype(np.uint8)
    return PixelBuffer.from_array(out)
