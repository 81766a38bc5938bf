"""
Image primitives - modular architecture.

This package provides the pixel-level building blocks:
- buffer: PixelBuffer, the in-memory image type
- converters: PIL <-> PixelBuffer conversions and luma grayscale
- codec: file decoding/encoding
- processors: resampling
"""

from core.image.buffer import PixelBuffer
from core.image.codec import ImageCodec
from core.image.converters import ImageConverters
from core.image.processors import resample

__all__ = ["PixelBuffer", "ImageCodec", "ImageConverters", "resample"]
