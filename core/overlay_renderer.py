"""
Overlay rendering utilities for detection results.

Provides consistent visualization of contour boxes, placeholder detections
and edge maps on top of a copy of the source buffer.
"""

from typing import Iterable, Optional

import numpy as np

from core import raster
from core.image.buffer import PixelBuffer
from core.image.converters import luma
from core.raster import Color
from schemas import Rect


class OverlayRenderer:
    """
    Renders detection results as overlays on buffers.

    Provides consistent styling for bounding boxes, labels and edge pixels.
    """

    # Default colors (RGB format)
    COLOR_SUCCESS = (0, 255, 0)  # Green
    COLOR_FAILURE = (255, 0, 0)  # Red
    COLOR_INFO = (255, 255, 0)  # Yellow
    COLOR_LABEL = (255, 255, 255)  # White

    def __init__(self, thickness: int = 2, label_scale: int = 2):
        """
        Initialize overlay renderer.

        Args:
            thickness: Default line thickness for boxes
            label_scale: Default bitmap font scale for labels
        """
        self.thickness = thickness
        self.label_scale = label_scale

    def draw_bounding_box(
        self,
        buffer: PixelBuffer,
        x: int,
        y: int,
        width: int,
        height: int,
        color: Color = COLOR_SUCCESS,
        thickness: Optional[int] = None,
    ) -> PixelBuffer:
        """
        Draw a bounding box on the buffer.

        Args:
            buffer: Target buffer (modified in place)
            x: Top-left x coordinate
            y: Top-left y coordinate
            width: Box width
            height: Box height
            color: Box color in RGB format
            thickness: Line thickness (None = use default)

        Returns:
            The same buffer, for chaining
        """
        thickness = thickness or self.thickness
        raster.draw_rectangle(buffer, x, y, width, height, color, thickness)
        return buffer

    def draw_line(
        self,
        buffer: PixelBuffer,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        color: Color = COLOR_SUCCESS,
        thickness: Optional[int] = None,
    ) -> PixelBuffer:
        """Draw a line segment with the default styling."""
        raster.draw_line(buffer, x1, y1, x2, y2, color, thickness or self.thickness)
        return buffer

    def draw_label(
        self,
        buffer: PixelBuffer,
        text: str,
        x: int,
        y: int,
        color: Color = COLOR_LABEL,
        scale: Optional[int] = None,
    ) -> PixelBuffer:
        """Draw a text label; only digits have glyphs."""
        raster.draw_text(buffer, x, y, text, color, scale or self.label_scale)
        return buffer

    def draw_rects(
        self,
        buffer: PixelBuffer,
        rects: Iterable[Rect],
        color: Color = COLOR_SUCCESS,
        thickness: Optional[int] = None,
    ) -> PixelBuffer:
        """Draw the outline of every rect."""
        for rect in rects:
            self.draw_bounding_box(
                buffer, rect.x, rect.y, rect.width, rect.height, color, thickness
            )
        return buffer

    def draw_edge_pixels(
        self, buffer: PixelBuffer, edges: np.ndarray, color: Color = COLOR_SUCCESS
    ) -> PixelBuffer:
        """
        Paint every non-zero pixel of an edge map.

        Args:
            buffer: Target buffer with the same size as the edge map
            edges: (H, W) edge map
            color: Edge color in RGB format

        Returns:
            The same buffer, for chaining
        """
        mask = edges > 0
        if buffer.channels >= 3:
            buffer.pixels[mask, :3] = color
        else:
            buffer.pixels[mask, 0] = luma(*color)
        return buffer
