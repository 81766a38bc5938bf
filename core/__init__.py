"""
Core modules for the Raster Vision Engine
"""

from .exceptions import (
    AllocationError,
    ImageProcessingError,
    ImageReadError,
    ImageWriteError,
    InvalidGeometryError,
)
from .image.buffer import PixelBuffer
from .parallel import RowParallelExecutor

__all__ = [
    "PixelBuffer",
    "RowParallelExecutor",
    "ImageProcessingError",
    "ImageReadError",
    "ImageWriteError",
    "AllocationError",
    "InvalidGeometryError",
]
