"""
Edge detection algorithms: Sobel gradient magnitude and a simplified Canny.
"""

import logging
from typing import Optional

import numpy as np

from core.constants import EdgeConstants, FilterConstants
from core.image.buffer import PixelBuffer
from core.image.converters import luma_plane
from vision.filters import window_sum

logger = logging.getLogger(__name__)


class EdgeDetector:
    """Edge detection processor."""

    def __init__(self):
        self._sobel_gx = np.array(EdgeConstants.SOBEL_GX, dtype=np.float32)
        self._sobel_gy = np.array(EdgeConstants.SOBEL_GY, dtype=np.float32)
        self._canny_weights = np.array(FilterConstants.CANNY_BLUR_WEIGHTS, dtype=np.float32)

    def sobel(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Gradient magnitude with the 3x3 Sobel operators.

        The magnitude is truncated to an integer and clipped to 255; the
        1-pixel border ring stays 0.
        """
        gray = luma_plane(buffer)
        height, width = gray.shape
        out = np.zeros((height, width), dtype=np.uint8)
        if height < 3 or width < 3:
            return PixelBuffer.from_array(out)

        grad_x = window_sum(gray, self._sobel_gx)
        grad_y = window_sum(gray, self._sobel_gy)
        magnitude = np.sqrt(grad_x * grad_x + grad_y * grad_y)
        out[1:-1, 1:-1] = np.minimum(magnitude.astype(np.int32), 255).astype(np.uint8)
        return PixelBuffer.from_array(out)

    def smooth(self, gray: np.ndarray) -> np.ndarray:
        """
        Integer 5x5 smoothing used as the first Canny stage.

        Weighted sums are divided by 159 and truncated. The 2-pixel margin
        stays 0.
        """
        height, width = gray.shape
        blurred = np.zeros((height, width), dtype=np.uint8)
        margin = FilterConstants.BLUR_WINDOW // 2
        if height <= 2 * margin or width <= 2 * margin:
            return blurred

        sums = window_sum(gray, self._canny_weights).astype(np.int64)
        divisor = int(FilterConstants.CANNY_BLUR_DIVISOR)
        blurred[margin:-margin, margin:-margin] = np.minimum(sums // divisor, 255)
        return blurred

    def canny(
        self,
        buffer: PixelBuffer,
        low: float = EdgeConstants.CANNY_LOW_THRESHOLD_DEFAULT,
        high: float = EdgeConstants.CANNY_HIGH_THRESHOLD_DEFAULT,
    ) -> PixelBuffer:
        """
        Simplified Canny: smooth, then keep pixels brighter than high.

        There is no gradient, non-maximum suppression or hysteresis stage;
        low is accepted and ignored.
        """
        blurred = self.smooth(luma_plane(buffer))
        edges = np.where(blurred > high, np.uint8(255), np.uint8(0)).astype(np.uint8)
        logger.debug(f"Canny on {buffer}: {int(np.count_nonzero(edges))} edge pixels (high={high})")
        return PixelBuffer.from_array(edges)


_detector: Optional[EdgeDetector] = None


def _get_detector() -> EdgeDetector:
    global _detector
    if _detector is None:
        _detector = EdgeDetector()
    return _detector


def sobel(buffer: PixelBuffer) -> PixelBuffer:
    return _get_detector().sobel(buffer)


def canny(
    buffer: PixelBuffer,
    low: float = EdgeConstants.CANNY_LOW_THRESHOLD_DEFAULT,
    high: float = EdgeConstants.CANNY_HIGH_THRESHOLD_DEFAULT,
) -> PixelBuffer:
    return _get_detector().canny(buffer, low, high)
