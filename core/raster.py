"""
Rasterization primitives: pixels, lines, circles, rectangles and bitmap text.

All primitives draw in place and clip silently at the buffer edges. Colors
are given as R, G, B; buffers with three or more channels receive them in
channels 0-2 (alpha is left alone), single-channel buffers receive the luma
of the color.
"""

import logging
from typing import Tuple

from core.constants import RasterConstants
from core.image.buffer import PixelBuffer
from core.image.converters import luma

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# 5 rows per digit. Only bits 7, 6 and 5 of each row byte are drawn.
DIGIT_FONT = (
    (0x7C, 0x82, 0x82, 0x82, 0x7C),  # 0
    (0x00, 0x42, 0xFE, 0x02, 0x00),  # 1
    (0x46, 0x8A, 0x92, 0xA2, 0x42),  # 2
    (0x44, 0x82, 0x92, 0x92, 0x6C),  # 3
    (0x18, 0x28, 0x48, 0xFE, 0x08),  # 4
    (0xF4, 0x92, 0x92, 0x92, 0x8C),  # 5
    (0x3C, 0x52, 0x92, 0x92, 0x8C),  # 6
    (0x80, 0x86, 0x98, 0xA0, 0xC0),  # 7
    (0x6C, 0x92, 0x92, 0x92, 0x6C),  # 8
    (0x64, 0x92, 0x92, 0x92, 0x7C),  # 9
)


def _fill_region(buffer: PixelBuffer, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
    """Paint the half-open box [x0, x1) x [y0, y1), clipped to the buffer."""
    x0 = max(x0, 0)
    y0 = max(y0, 0)
    x1 = min(x1, buffer.width)
    y1 = min(y1, buffer.height)
    if x0 >= x1 or y0 >= y1:
        return

    if buffer.channels >= 3:
        buffer.pixels[y0:y1, x0:x1, :3] = color
    else:
        buffer.pixels[y0:y1, x0:x1, 0] = luma(*color)


def draw_pixel(buffer: PixelBuffer, x: int, y: int, color: Color) -> None:
    """Set one pixel; out-of-bounds coordinates are ignored."""
    _fill_region(buffer, x, y, x + 1, y + 1, color)


def _stamp(buffer: PixelBuffer, x: int, y: int, thickness: int, color: Color) -> None:
    """Square brush covering +-(thickness / 2, truncated toward zero) around (x, y)."""
    half = int(thickness / 2)
    _fill_region(buffer, x - half, y - half, x + half + 1, y + half + 1, color)


def draw_line(
    buffer: PixelBuffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color = RasterConstants.DEFAULT_COLOR,
    thickness: int = RasterConstants.DEFAULT_THICKNESS,
) -> None:
    """Bresenham line from (x1, y1) to (x2, y2), both ends included."""
    dx = abs(x2 - x1)
    dy = -abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx + dy

    while True:
        _stamp(buffer, x1, y1, thickness, color)
        if x1 == x2 and y1 == y2:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x1 += sx
        if e2 <= dx:
            err += dx
            y1 += sy


def draw_circle(
    buffer: PixelBuffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color = RasterConstants.DEFAULT_COLOR,
    thickness: int = RasterConstants.DEFAULT_THICKNESS,
) -> None:
    """Midpoint circle outline with 8-way symmetry."""
    x = radius
    y = 0
    err = 0

    while x >= y:
        for px, py in (
            (cx + x, cy + y),
            (cx + y, cy + x),
            (cx - y, cy + x),
            (cx - x, cy + y),
            (cx - x, cy - y),
            (cx - y, cy - x),
            (cx + y, cy - x),
            (cx + x, cy - y),
        ):
            _stamp(buffer, px, py, thickness, color)

        y += 1
        err += 1 + 2 * y
        if 2 * (err - x) + 1 > 0:
            x -= 1
            err += 1 - 2 * x


def draw_rectangle(
    buffer: PixelBuffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color = RasterConstants.DEFAULT_COLOR,
    thickness: int = RasterConstants.DEFAULT_THICKNESS,
) -> None:
    """Rectangle outline; corners at (x, y) and (x + width, y + height)."""
    draw_line(buffer, x, y, x + width, y, color, thickness)
    draw_line(buffer, x, y + height, x + width, y + height, color, thickness)
    draw_line(buffer, x, y, x, y + height, color, thickness)
    draw_line(buffer, x + width, y, x + width, y + height, color, thickness)


def fill_rectangle(
    buffer: PixelBuffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color = RasterConstants.DEFAULT_COLOR,
) -> None:
    """Fill x <= px < x + width, y <= py < y + height."""
    _fill_region(buffer, x, y, x + width, y + height, color)


def draw_char(
    buffer: PixelBuffer,
    x: int,
    y: int,
    char: str,
    color: Color = RasterConstants.DEFAULT_TEXT_COLOR,
    scale: int = RasterConstants.DEFAULT_TEXT_SCALE,
) -> bool:
    """
    Draw a single digit glyph with its top-left corner at (x, y).

    Returns:
        False if the character has no glyph (nothing is drawn)
    """
    if len(char) != 1 or not ("0" <= char <= "9"):
        return False

    glyph = DIGIT_FONT[ord(char) - ord("0")]
    for row in range(RasterConstants.GLYPH_ROWS):
        bits = glyph[row]
        for col in range(RasterConstants.GLYPH_COLS):
            if bits & (1 << (7 - col)):
                px = x + col * scale
                py = y + row * scale
                _fill_region(buffer, px, py, px + scale, py + scale, color)
    return True


def draw_text(
    buffer: PixelBuffer,
    x: int,
    y: int,
    text: str,
    color: Color = RasterConstants.DEFAULT_TEXT_COLOR,
    scale: int = RasterConstants.DEFAULT_TEXT_SCALE,
) -> None:
    """
    Draw text with the digit font.

    Every character except newline advances the cursor, including the ones
    without a glyph, which are skipped.
    """
    origin_x = x
    for char in text:
        if char == "\n":
            y += RasterConstants.LINE_ADVANCE * scale
            x = origin_x
            continue
        if not draw_char(buffer, x, y, char, color, scale):
            logger.debug(f"No glyph for {char!r}, skipped")
        x += RasterConstants.GLYPH_ADVANCE * scale
