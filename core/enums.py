"""
Enumerations used across the engine.
"""

from enum import Enum, IntEnum


class BlurKind(str, Enum):
    """Blur variants. Anything unrecognized is treated as AVERAGE."""

    GAUSSIAN = "gaussian"
    MEDIAN = "median"
    AVERAGE = "average"


class MorphOp(str, Enum):
    """Morphological operations"""

    ERODE = "erode"
    DILATE = "dilate"
    OPEN = "open"
    CLOSE = "close"


class OverlayMode(IntEnum):
    """Modes of the edge overlay operation"""

    EDGES = 1
    CONTOURS = 2
    PLATE = 3


class PlateColor(IntEnum):
    """Color choices of the plate placeholder"""

    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4

    @property
    def rgb(self):
        return _PLATE_RGB[self]


_PLATE_RGB = {
    PlateColor.RED: (255, 0, 0),
    PlateColor.GREEN: (0, 255, 0),
    PlateColor.BLUE: (0, 0, 255),
    PlateColor.YELLOW: (255, 255, 0),
}
