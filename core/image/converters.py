"""
Image format conversion utilities.

Handles conversions between:
- PIL Images (as decoded by the codec)
- PixelBuffer (RGB/RGBA/gray interleaved uint8)
- Grayscale/color conversions (luma)
"""

import logging

import numpy as np
from PIL import Image

from core.constants import ImageConstants
from core.image.buffer import PixelBuffer

logger = logging.getLogger(__name__)

# PIL modes that map directly onto a supported channel layout
_DIRECT_MODES = {"L": 1, "RGB": 3, "RGBA": 4}
_WIDE_GRAY_MODES = ("I", "I;16", "I;16B", "I;16L", "F")


class ImageConverters:
    """Utilities for converting between image representations."""

    @staticmethod
    def normalize_mode(image: Image.Image) -> Image.Image:
        """
        Convert a PIL image to L, RGB or RGBA.

        Grey+alpha and palette images with transparency become RGBA, high
        bit-depth grey becomes L, everything else becomes RGB.
        """
        mode = image.mode
        if mode in _DIRECT_MODES:
            return image
        if mode == "LA" or (mode == "P" and "transparency" in image.info):
            return image.convert("RGBA")
        if mode == "1":
            return image.convert("L")
        if mode in _WIDE_GRAY_MODES:
            array = np.asarray(image, dtype=np.float64)
            peak = array.max() if array.size else 0
            if peak > 255:
                array = array * (255.0 / peak)
            return Image.fromarray(np.clip(array, 0, 255).astype(np.uint8))
        return image.convert("RGB")

    @staticmethod
    def pil_to_buffer(image: Image.Image) -> PixelBuffer:
        """
        Convert PIL Image to PixelBuffer.

        Args:
            image: PIL Image in any mode

        Returns:
            PixelBuffer with 1, 3 or 4 channels
        """
        image = ImageConverters.normalize_mode(image)
        array = np.asarray(image, dtype=np.uint8)
        return PixelBuffer.from_array(array.copy())

    @staticmethod
    def buffer_to_pil(buffer: PixelBuffer, drop_alpha: bool = False) -> Image.Image:
        """
        Convert PixelBuffer to PIL Image.

        Args:
            buffer: Source buffer
            drop_alpha: If True, 4-channel buffers are written as RGB

        Returns:
            PIL Image in L, RGB or RGBA mode
        """
        # fromarray infers L/RGB/RGBA from the array shape
        if buffer.channels == 1:
            return Image.fromarray(np.ascontiguousarray(buffer.plane(0)))
        if buffer.channels == 4 and drop_alpha:
            return Image.fromarray(np.ascontiguousarray(buffer.pixels[:, :, :3]))
        return Image.fromarray(buffer.pixels)

    @staticmethod
    def luma(r: int, g: int, b: int) -> int:
        """Truncated BT.601 luma of a single color."""
        return int(
            ImageConstants.LUMA_R * r + ImageConstants.LUMA_G * g + ImageConstants.LUMA_B * b
        )

    @staticmethod
    def luma_plane(buffer: PixelBuffer) -> np.ndarray:
        """
        Grayscale plane of a buffer as a (H, W) uint8 array.

        Single-channel buffers are returned as-is (no copy).
        """
        if buffer.channels == 1:
            return buffer.plane(0)
        rgb = buffer.pixels[:, :, :3].astype(np.float64)
        gray = (
            ImageConstants.LUMA_R * rgb[:, :, 0]
            + ImageConstants.LUMA_G * rgb[:, :, 1]
            + ImageConstants.LUMA_B * rgb[:, :, 2]
        )
        # Truncation toward zero, values are never negative
        return gray.astype(np.uint8)

    @staticmethod
    def ensure_grayscale(buffer: PixelBuffer) -> PixelBuffer:
        """
        Ensure buffer is grayscale (luma conversion if needed).

        Args:
            buffer: Input buffer (1, 3 or 4 channels)

        Returns:
            Single-channel buffer; a 1-channel input is passed through unchanged
        """
        if buffer.channels == 1:
            return buffer
        return PixelBuffer.from_array(ImageConverters.luma_plane(buffer))


# Convenience aliases
luma = ImageConverters.luma
luma_plane = ImageConverters.luma_plane
ensure_grayscale = ImageConverters.ensure_grayscale
