"""
Image resampling.

Handles size changes of whole buffers. The interpolation itself is
delegated to OpenCV.
"""

import logging

import cv2
import numpy as np

from core.exceptions import AllocationError
from core.image.buffer import PixelBuffer

logger = logging.getLogger(__name__)


def resample(buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """
    Resample buffer to a new size, keeping its channel count.

    Args:
        buffer: Source buffer
        width: Target width in pixels (> 0)
        height: Target height in pixels (> 0)

    Returns:
        New PixelBuffer of size width x height
    """
    interpolation = (
        cv2.INTER_AREA if width <= buffer.width and height <= buffer.height else cv2.INTER_LINEAR
    )
    try:
        resized = cv2.resize(buffer.pixels, (width, height), interpolation=interpolation)
    except cv2.error as e:
        logger.error(f"Resampling {buffer} to {width}x{height} failed: {e}")
        raise AllocationError() from e

    # OpenCV drops the channel axis for single-channel input
    if resized.ndim == 2:
        resized = resized[:, :, np.newaxis]

    logger.debug(f"Resampled {buffer} to {width}x{height}")
    return PixelBuffer.from_array(resized)
