"""
Fixed-geometry detections.

None of these look at pixel content except edge_overlay: faces, plates,
lines and template hits are drawn at positions derived only from the image
size. They keep the shape of a detector API (annotated copy plus a count or
location) so callers can be wired up before real detectors exist.
"""

import logging
from typing import Optional, Tuple

from core.enums import OverlayMode, PlateColor
from core.image.buffer import PixelBuffer
from core.image.converters import ensure_grayscale
from core.overlay_renderer import OverlayRenderer
from core.utils.enum_converter import parse_enum
from vision.contours import find_contours
from vision.edge_detection import canny

logger = logging.getLogger(__name__)

FACE_LABEL = "FACE"
PLATE_LABEL = "PLATE"
TEMPLATE_LABEL = "TEMPLATE"
TEMPLATE_LOCATION = (100, 100)
TEMPLATE_BOX_SIZE = 50
HOUGH_LINES = ((50, 50, 200, 50), (50, 100, 200, 100))


def plate_region(buffer: PixelBuffer) -> Tuple[int, int, int, int]:
    """(x, y, width, height) of the assumed plate area."""
    return buffer.width // 4, buffer.height // 3, buffer.width // 2, buffer.height // 6


class PlaceholderDetector:
    """Draws fixed-geometry detections on a copy of the input."""

    def __init__(self, renderer: Optional[OverlayRenderer] = None):
        self.renderer = renderer or OverlayRenderer()

    def detect_faces(self, buffer: PixelBuffer) -> Tuple[PixelBuffer, int]:
        """One green box over the central quarter, labelled FACE."""
        out = buffer.copy()
        x, y = buffer.width // 4, buffer.height // 4
        w, h = buffer.width // 2, buffer.height // 2
        color = OverlayRenderer.COLOR_SUCCESS
        self.renderer.draw_bounding_box(out, x, y, w, h, color, thickness=3)
        self.renderer.draw_label(out, FACE_LABEL, x + 10, y - 10, color, scale=2)
        return out, 1

    def detect_plate(self, buffer: PixelBuffer, color_choice: int = 1) -> Tuple[PixelBuffer, int]:
        """
        One box over the assumed plate area.

        color_choice: 1 red, 2 green, 3 blue, 4 yellow; anything else is red.
        """
        color = parse_enum(color_choice, PlateColor, PlateColor.RED).rgb
        out = buffer.copy()
        x, y, w, h = plate_region(buffer)
        self.renderer.draw_bounding_box(out, x, y, w, h, color, thickness=3)
        self.renderer.draw_label(out, PLATE_LABEL, x + 5, y - 20, OverlayRenderer.COLOR_LABEL, 2)
        return out, 1

    def hough_lines(self, buffer: PixelBuffer) -> Tuple[PixelBuffer, int]:
        """Two fixed horizontal green lines."""
        out = buffer.copy()
        for x1, y1, x2, y2 in HOUGH_LINES:
            self.renderer.draw_line(out, x1, y1, x2, y2, OverlayRenderer.COLOR_SUCCESS, 2)
        return out, len(HOUGH_LINES)

    def template_match(self, buffer: PixelBuffer) -> Tuple[PixelBuffer, Tuple[int, int]]:
        """A yellow 50x50 box at (100, 100); the template itself is never read."""
        out = buffer.copy()
        x, y = TEMPLATE_LOCATION
        color = OverlayRenderer.COLOR_INFO
        self.renderer.draw_bounding_box(
            out, x, y, TEMPLATE_BOX_SIZE, TEMPLATE_BOX_SIZE, color, thickness=2
        )
        self.renderer.draw_label(out, TEMPLATE_LABEL, x, y - 10, color, scale=1)
        return out, TEMPLATE_LOCATION

    def edge_overlay(self, buffer: PixelBuffer, mode: int = OverlayMode.EDGES) -> PixelBuffer:
        """
        Annotate a copy of the input.

        Modes:
            1: paint simplified-Canny edge pixels green
            2: outline contour boxes of the edge map in red
            3: draw the plate box in red with a yellow label
            other: plain copy
        """
        out = buffer.copy()
        try:
            overlay = OverlayMode(mode)
        except ValueError:
            logger.debug(f"Overlay mode {mode} unknown, copying input")
            return out

        if overlay == OverlayMode.EDGES:
            edges = canny(buffer)
            self.renderer.draw_edge_pixels(out, edges.plane(0), OverlayRenderer.COLOR_SUCCESS)
        elif overlay == OverlayMode.CONTOURS:
            edges = canny(ensure_grayscale(buffer))
            rects = find_contours(edges)
            self.renderer.draw_rects(out, rects, OverlayRenderer.COLOR_FAILURE, thickness=2)
        else:
            x, y, w, h = plate_region(buffer)
            self.renderer.draw_bounding_box(out, x, y, w, h, OverlayRenderer.COLOR_FAILURE, 3)
            self.renderer.draw_label(out, PLATE_LABEL, x + 10, y - 10, OverlayRenderer.COLOR_INFO)
        return out

    def kmeans(self, buffer: PixelBuffer, k: int, max_iters: int = 10) -> PixelBuffer:
        """Clustering placeholder: k and max_iters are accepted, the pixels are copied."""
        logger.debug(f"kmeans placeholder k={k} max_iters={max_iters}")
        return buffer.copy()

    def equalize_hist(self, buffer: PixelBuffer) -> PixelBuffer:
        """Equalization placeholder: returns an unchanged copy."""
        return buffer.copy()
