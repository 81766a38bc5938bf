"""
Constants and configuration values for the Raster Vision Engine.
Centralizes all magic numbers used by the processing core.
"""


# Image Buffer / Codec Constants
class ImageConstants:
    """Constants related to pixel buffers and image persistence."""

    # Supported channel layouts (gray, RGB, RGBA)
    SUPPORTED_CHANNELS = (1, 3, 4)

    # Codec
    JPEG_EXTENSIONS = (".jpg", ".jpeg")
    JPEG_QUALITY = 95

    # Luma weights (ITU-R BT.601)
    LUMA_R = 0.299
    LUMA_G = 0.587
    LUMA_B = 0.114


# Parallel execution
class ExecutorConstants:
    """Constants for the row-parallel executor."""

    # Fixed on purpose: independent of image size and CPU count
    NUM_WORKERS = 4
    THREAD_NAME_PREFIX = "row-band"


# Filtering
class FilterConstants:
    """Constants for blur and median filtering."""

    BLUR_WINDOW = 5  # every blur kind runs through a 5x5 footprint
    DEFAULT_KERNEL_SIZE = 5
    DEFAULT_SIGMA = 1.5
    AVERAGE_KERNEL_SIZE = 3
    MEDIAN_WINDOW = 3

    # Fixed integer weights for the simplified Canny smoothing stage
    CANNY_BLUR_WEIGHTS = (
        (2, 4, 5, 4, 2),
        (4, 9, 12, 9, 4),
        (5, 12, 15, 12, 5),
        (4, 9, 12, 9, 4),
        (2, 4, 5, 4, 2),
    )
    CANNY_BLUR_DIVISOR = 159.0


# Edge detection
class EdgeConstants:
    """Constants for gradient and edge operations."""

    CANNY_LOW_THRESHOLD_DEFAULT = 50
    CANNY_HIGH_THRESHOLD_DEFAULT = 150

    SOBEL_GX = ((-1, 0, 1), (-2, 0, 2), (-1, 0, 1))
    SOBEL_GY = ((-1, -2, -1), (0, 0, 0), (1, 2, 1))


# Morphology
class MorphologyConstants:
    """Constants for morphological operations."""

    DEFAULT_SIZE = 3


# Contour detection
class ContourConstants:
    """Constants for connected-component extraction."""

    MIN_BOX_SIZE = 20  # boxes must be strictly larger than this on both axes
    MAX_CONTOURS = 100
    DEFAULT_COLOR = (0, 255, 0)
    DEFAULT_THICKNESS = 2


# Rasterization
class RasterConstants:
    """Constants for drawing primitives and the bitmap font."""

    DEFAULT_COLOR = (255, 0, 0)
    DEFAULT_TEXT_COLOR = (255, 255, 255)
    DEFAULT_THICKNESS = 1
    DEFAULT_TEXT_SCALE = 2

    GLYPH_ROWS = 5
    GLYPH_COLS = 3
    GLYPH_ADVANCE = 4  # horizontal advance per character, in scale units
    LINE_ADVANCE = 6  # vertical advance per newline, in scale units


# Library identity
class VersionConstants:
    """Version information reported by the engine."""

    VERSION = "3.0.0"
    NAME = "Raster Vision Engine"
