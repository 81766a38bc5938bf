"""
Kernel generation and smoothing filters.

Gaussian and average blur share one 5x5 convolution path; the median filter
uses a 3x3 window. Both run band-parallel through a RowParallelExecutor.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from core.constants import FilterConstants
from core.enums import BlurKind
from core.exceptions import InvalidGeometryError
from core.image.buffer import PixelBuffer
from core.parallel import RowParallelExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Kernel:
    """Square convolution kernel with weights normalized to sum 1."""

    size: int
    sigma: float
    weights: np.ndarray = field(repr=False)

    def __post_init__(self):
        if self.weights.shape != (self.size, self.size):
            raise ValueError(f"Kernel weights must be {self.size}x{self.size}")
        self.weights.setflags(write=False)

    def fit_to_window(self, window: int) -> np.ndarray:
        """
        Lay the weights into a window x window footprint, row-major.

        The flattened weights fill the first size * size cells of the
        window in order; cells past the end stay 0 and weights past
        window * window are dropped. Only a kernel of exactly the window
        size lands centred. The 3x3 average kernel covers the whole first
        row and the first four cells of the second.
        """
        cells = window * window
        flat = self.weights.astype(np.float32).ravel()[:cells]
        fitted = np.zeros(cells, dtype=np.float32)
        fitted[: flat.size] = flat
        return fitted.reshape(window, window)


def check_kernel_params(size: int, sigma: float) -> None:
    """Raise InvalidGeometryError unless size and sigma are positive."""
    if size < 1 or sigma <= 0:
        raise InvalidGeometryError("Kernel size and sigma must be positive")


def gaussian_kernel(size: int, sigma: float) -> Kernel:
    """
    Build a normalized Gaussian kernel.

    weights[y, x] = exp(-(dx^2 + dy^2) / (2 sigma^2)), dx/dy measured from
    the kernel centre, then divided by the total.
    """
    if size < 1:
        raise ValueError(f"Kernel size must be positive, got {size}")
    if sigma <= 0:
        raise ValueError(f"Sigma must be positive, got {sigma}")

    center = size // 2
    offsets = np.arange(size) - center
    dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
    two_sigma_sq = np.float32(2) * np.float32(sigma) * np.float32(sigma)
    exponent = (-(dx * dx + dy * dy)).astype(np.float32) / two_sigma_sq
    weights = np.exp(exponent.astype(np.float64)).astype(np.float32)
    # Running float32 total in row-major order
    total = np.add.accumulate(weights.ravel(), dtype=np.float32)[-1]
    weights = weights / total
    return Kernel(size=size, sigma=sigma, weights=weights)


def average_kernel(size: int = FilterConstants.AVERAGE_KERNEL_SIZE) -> Kernel:
    """Uniform box kernel (3x3 cells of 1/9 by default)."""
    weights = np.full((size, size), np.float32(1.0) / np.float32(size * size), dtype=np.float32)
    return Kernel(size=size, sigma=0.0, weights=weights)


def window_sum(plane: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """
    Weighted sum of every full window of a 2D or 3D array.

    Args:
        plane: (H, W) or (H, W, C) array
        weights: (k, k) weights

    Returns:
        float32 array of shape (H - k + 1, W - k + 1[, C]); element [i, j]
        is the sum for the window whose top-left corner is (j, i)
    """
    k = weights.shape[0]
    out_h = plane.shape[0] - k + 1
    out_w = plane.shape[1] - k + 1
    source = plane.astype(np.float32)
    acc = np.zeros((out_h, out_w) + plane.shape[2:], dtype=np.float32)
    for ky in range(k):
        for kx in range(k):
            weight = weights[ky, kx]
            if weight == 0:
                continue
            acc += source[ky : ky + out_h, kx : kx + out_w] * np.float32(weight)
    return acc


def _convolve_band(
    src: PixelBuffer, dst: PixelBuffer, y_start: int, y_end: int, weights: np.ndarray
) -> None:
    """Convolve interior rows of one band with a 5x5 window."""
    radius = FilterConstants.BLUR_WINDOW // 2
    y0 = max(y_start, radius)
    y1 = min(y_end, src.height - radius)
    if y1 <= y0 or src.width <= 2 * radius:
        return

    rows = src.pixels[y0 - radius : y1 + radius]
    acc = window_sum(rows, weights)
    dst.pixels[y0:y1, radius : src.width - radius] = np.clip(acc, 0, 255).astype(np.uint8)


def _median_band(
    src: PixelBuffer, dst: PixelBuffer, y_start: int, y_end: int, _extra: None
) -> None:
    """3x3 median of interior rows of one band, per channel."""
    radius = FilterConstants.MEDIAN_WINDOW // 2
    y0 = max(y_start, radius)
    y1 = min(y_end, src.height - radius)
    if y1 <= y0 or src.width <= 2 * radius:
        return

    out_h = y1 - y0
    out_w = src.width - 2 * radius
    window = FilterConstants.MEDIAN_WINDOW
    stack = np.stack(
        [
            src.pixels[y0 - radius + ky : y0 - radius + ky + out_h, kx : kx + out_w]
            for ky in range(window)
            for kx in range(window)
        ]
    )
    stack.sort(axis=0)
    dst.pixels[y0:y1, radius : src.width - radius] = stack[(window * window) // 2]


def copy_border(src: PixelBuffer, dst: PixelBuffer) -> None:
    """Copy the outermost 1-pixel ring of src into dst verbatim."""
    dst.pixels[0, :] = src.pixels[0, :]
    dst.pixels[-1, :] = src.pixels[-1, :]
    dst.pixels[:, 0] = src.pixels[:, 0]
    dst.pixels[:, -1] = src.pixels[:, -1]


def convolve(
    buffer: PixelBuffer, kernel: Kernel, executor: RowParallelExecutor
) -> PixelBuffer:
    """
    Run a kernel through the fixed 5x5 window over every channel.

    Only pixels at least 2 away from each edge are convolved; everything
    else is left at 0.
    """
    out = PixelBuffer.create(buffer.width, buffer.height, buffer.channels)
    weights = kernel.fit_to_window(FilterConstants.BLUR_WINDOW)
    executor.run(buffer, out, _convolve_band, weights)
    return out


def median_filter(buffer: PixelBuffer, executor: RowParallelExecutor) -> PixelBuffer:
    """3x3 median of every interior pixel; the 1-pixel ring is left at 0."""
    out = PixelBuffer.create(buffer.width, buffer.height, buffer.channels)
    executor.run(buffer, out, _median_band)
    return out


def blur(
    buffer: PixelBuffer,
    executor: RowParallelExecutor,
    kind: BlurKind = BlurKind.GAUSSIAN,
    size: int = FilterConstants.DEFAULT_KERNEL_SIZE,
    sigma: float = FilterConstants.DEFAULT_SIGMA,
    kernel: Optional[Kernel] = None,
) -> PixelBuffer:
    """
    Blur a buffer.

    Args:
        buffer: Source buffer
        executor: Executor for the band-parallel pass
        kind: GAUSSIAN, MEDIAN or AVERAGE
        size: Gaussian kernel size
        sigma: Gaussian sigma
        kernel: Explicit kernel, overrides kind/size/sigma for the convolution path

    Returns:
        Blurred buffer. The outermost ring is copied from the source; the
        convolution path additionally leaves the second ring at 0.
    """
    if kind == BlurKind.MEDIAN and kernel is None:
        out = median_filter(buffer, executor)
    else:
        if kernel is None:
            kernel = gaussian_kernel(size, sigma) if kind == BlurKind.GAUSSIAN else average_kernel()
        out = convolve(buffer, kernel, executor)

    copy_border(buffer, out)
    logger.debug(f"Blurred {buffer} with {kind.value}")
    return out
