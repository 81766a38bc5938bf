"""
Pixel buffer - the in-memory image type shared by every component.

A PixelBuffer owns a contiguous uint8 array laid out row-major with the
channels of each pixel interleaved, exactly like the bytes returned by the
codec. The numpy view has shape (height, width, channels).
"""

import logging
from dataclasses import dataclass

import numpy as np

from core.constants import ImageConstants
from core.exceptions import AllocationError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PixelBuffer:
    """Width/height/channel-count plus the pixel array."""

    width: int
    height: int
    channels: int
    pixels: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid buffer size: {self.width}x{self.height}")
        if self.channels not in ImageConstants.SUPPORTED_CHANNELS:
            raise ValueError(f"Unsupported channel count: {self.channels}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {self.pixels.dtype}")
        if self.pixels.shape != (self.height, self.width, self.channels):
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.height}x{self.width}x{self.channels}"
            )

    @classmethod
    def create(cls, width: int, height: int, channels: int) -> "PixelBuffer":
        """
        Allocate a zero-initialized buffer.

        Args:
            width: Width in pixels
            height: Height in pixels
            channels: Channel count (1, 3 or 4)

        Returns:
            New PixelBuffer with every byte set to 0

        Raises:
            AllocationError: If the pixel storage cannot be allocated
        """
        try:
            pixels = np.zeros((height, width, channels), dtype=np.uint8)
        except MemoryError as e:
            logger.error(f"Failed to allocate {width}x{height}x{channels} buffer: {e}")
            raise AllocationError() from e
        return cls(width=width, height=height, channels=channels, pixels=pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap a (H, W) or (H, W, C) uint8 array without copying."""
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        height, width, channels = array.shape
        return cls(
            width=width,
            height=height,
            channels=channels,
            pixels=np.ascontiguousarray(array, dtype=np.uint8),
        )

    @classmethod
    def from_bytes(cls, width: int, height: int, channels: int, data: bytes) -> "PixelBuffer":
        """Build a buffer from raw interleaved bytes."""
        expected = width * height * channels
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes, got {len(data)}")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, channels).copy()
        return cls(width=width, height=height, channels=channels, pixels=pixels)

    def copy(self) -> "PixelBuffer":
        """Deep copy of the buffer."""
        try:
            pixels = self.pixels.copy()
        except MemoryError as e:
            raise AllocationError() from e
        return PixelBuffer(
            width=self.width, height=self.height, channels=self.channels, pixels=pixels
        )

    @property
    def data(self) -> bytes:
        """Raw row-major interleaved bytes."""
        return self.pixels.tobytes()

    @property
    def size_bytes(self) -> int:
        return self.width * self.height * self.channels

    def _check_bounds(self, x: int, y: int, c: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= c < self.channels):
            raise IndexError(
                f"Pixel ({x}, {y}, {c}) outside {self.width}x{self.height}x{self.channels}"
            )

    def get_pixel(self, x: int, y: int, c: int = 0) -> int:
        self._check_bounds(x, y, c)
        return int(self.pixels[y, x, c])

    def set_pixel(self, x: int, y: int, c: int, value: int) -> None:
        self._check_bounds(x, y, c)
        self.pixels[y, x, c] = value

    def plane(self, c: int = 0) -> np.ndarray:
        """2D view of a single channel."""
        return self.pixels[:, :, c]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}x{self.channels})"
