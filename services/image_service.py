"""
Image Operations Service - one method per public operation.

Every file-to-file operation follows the same shape: decode the input,
run the processing step, encode the output. Failures never raise out of
this service; they come back as an OperationResult with success=False.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from core import raster
from core.constants import (
    ContourConstants,
    EdgeConstants,
    ExecutorConstants,
    FilterConstants,
    MorphologyConstants,
    RasterConstants,
    VersionConstants,
)
from core.enums import BlurKind, MorphOp
from core.exceptions import AllocationError, ImageProcessingError
from core.image.buffer import PixelBuffer
from core.image.codec import ImageCodec
from core.image.converters import ensure_grayscale
from core.overlay_renderer import OverlayRenderer
from core.parallel import RowParallelExecutor
from core.utils.decorators import timer
from core.utils.enum_converter import parse_enum
from schemas import (
    ContourResult,
    DetectionResult,
    HistogramResult,
    ImageInfo,
    InfoResult,
    OperationResult,
    ThresholdResult,
)
from vision import filters, morphology, threshold, transform
from vision.contours import find_contours
from vision.detections import PlaceholderDetector
from vision.edge_detection import EdgeDetector

logger = logging.getLogger(__name__)

# A processing step returns the buffer to write plus extra result fields
ProcessFunc = Callable[[PixelBuffer], Tuple[PixelBuffer, Dict[str, Any]]]

_MORPH_OPS = {
    MorphOp.ERODE: morphology.erode,
    MorphOp.DILATE: morphology.dilate,
    MorphOp.OPEN: morphology.morph_open,
    MorphOp.CLOSE: morphology.morph_close,
}


class ImageOperationsService:
    """
    Service for file-to-file image operations.

    The executor is owned by the caller and shared by every blur call made
    through this service.
    """

    def __init__(
        self,
        executor: RowParallelExecutor,
        codec: Optional[ImageCodec] = None,
        renderer: Optional[OverlayRenderer] = None,
    ):
        """
        Initialize image operations service.

        Args:
            executor: Row-parallel executor used by blur and median
            codec: Image codec (default: ImageCodec())
            renderer: Overlay renderer for detection output
        """
        self.executor = executor
        self.codec = codec or ImageCodec()
        self.overlay_renderer = renderer or OverlayRenderer()
        self.edge_detector = EdgeDetector()
        self.placeholder_detector = PlaceholderDetector(self.overlay_renderer)

    def _execute(
        self,
        operation: str,
        input_path: str,
        output_path: str,
        process: ProcessFunc,
        result_cls: Type[OperationResult] = OperationResult,
        validate: Optional[Callable[[], None]] = None,
    ) -> OperationResult:
        """
        Template method for file-to-file operations.

        This method encapsulates common logic:
        - Up-front parameter validation (before the input is read)
        - Decoding and encoding through the codec
        - Timing
        - Conversion of failures into a failed result

        Args:
            operation: Operation name for logging
            input_path: Image to read
            output_path: Image to write
            process: Processing step (receives the decoded buffer)
            result_cls: Result model to build
            validate: Optional check run before anything is read

        Returns:
            result_cls instance; nothing is written when success is False
        """
        extra: Dict[str, Any] = {}
        try:
            with timer() as t:
                if validate is not None:
                    validate()
                source = self.codec.read(input_path)
                output, extra = process(source)
                self.codec.write(output_path, output)
        except ImageProcessingError as e:
            logger.error(f"{operation} failed for {input_path}: {e.message}")
            return result_cls(
                success=False, message=e.message, error_kind=e.kind, processing_time_ms=t["ms"]
            )
        except MemoryError:
            error = AllocationError()
            logger.error(f"{operation} failed for {input_path}: {error.message}")
            return result_cls(
                success=False,
                message=error.message,
                error_kind=error.kind,
                processing_time_ms=t["ms"],
            )

        logger.debug(f"{operation}: {input_path} -> {output_path} in {t['ms']}ms")
        return result_cls(success=True, processing_time_ms=t["ms"], **extra)

    # Transforms

    def grayscale(self, input_path: str, output_path: str) -> OperationResult:
        """Convert to single-channel luma."""
        return self._execute(
            "grayscale", input_path, output_path, lambda src: (ensure_grayscale(src), {})
        )

    def resize(self, input_path: str, output_path: str, width: int, height: int) -> OperationResult:
        """Resample to width x height."""
        return self._execute(
            "resize",
            input_path,
            output_path,
            lambda src: (transform.resize(src, width, height), {}),
            validate=lambda: transform.check_size(width, height),
        )

    def crop(
        self, input_path: str, output_path: str, x: int, y: int, width: int, height: int
    ) -> OperationResult:
        """Cut out the rectangle at (x, y)."""
        return self._execute(
            "crop",
            input_path,
            output_path,
            lambda src: (transform.crop(src, x, y, width, height), {}),
        )

    def rotate(self, input_path: str, output_path: str, angle: float) -> OperationResult:
        """Rotate by angle degrees, expanding the canvas."""
        return self._execute(
            "rotate",
            input_path,
            output_path,
            lambda src: (transform.rotate(src, angle), {}),
            validate=lambda: transform.check_angle(angle),
        )

    # Filters

    def blur(
        self,
        input_path: str,
        output_path: str,
        kind: str = BlurKind.GAUSSIAN.value,
        size: int = FilterConstants.DEFAULT_KERNEL_SIZE,
        sigma: float = FilterConstants.DEFAULT_SIGMA,
    ) -> OperationResult:
        """
        Blur with a gaussian, median or average filter.

        Unknown kinds fall back to the average filter.
        """
        blur_kind = parse_enum(kind, BlurKind, BlurKind.AVERAGE)
        if blur_kind.value != kind:
            logger.warning(f"Unknown blur kind {kind!r}, using average")

        def process(src: PixelBuffer):
            return filters.blur(src, self.executor, blur_kind, size, sigma), {}

        def validate():
            if blur_kind == BlurKind.GAUSSIAN:
                filters.check_kernel_params(size, sigma)

        return self._execute("blur", input_path, output_path, process, validate=validate)

    def sobel(self, input_path: str, output_path: str) -> OperationResult:
        """Sobel gradient magnitude."""
        return self._execute(
            "sobel", input_path, output_path, lambda src: (self.edge_detector.sobel(src), {})
        )

    def canny(
        self,
        input_path: str,
        output_path: str,
        low: float = EdgeConstants.CANNY_LOW_THRESHOLD_DEFAULT,
        high: float = EdgeConstants.CANNY_HIGH_THRESHOLD_DEFAULT,
    ) -> OperationResult:
        """Simplified Canny edge map."""
        return self._execute(
            "canny",
            input_path,
            output_path,
            lambda src: (self.edge_detector.canny(src, low, high), {}),
        )

    # Thresholds

    def threshold(
        self, input_path: str, output_path: str, thresh: int, maxval: int = 255
    ) -> OperationResult:
        """Fixed global threshold."""
        return self._execute(
            "threshold",
            input_path,
            output_path,
            lambda src: (threshold.threshold(src, thresh, maxval), {}),
            validate=lambda: threshold.check_maxval(maxval),
        )

    def otsu(self, input_path: str, output_path: str) -> ThresholdResult:
        """Otsu threshold; the chosen threshold is reported in the result."""

        def process(src: PixelBuffer):
            out, t = threshold.otsu(src)
            return out, {"threshold": t}

        return self._execute("otsu", input_path, output_path, process, ThresholdResult)

    def adaptive_threshold(
        self, input_path: str, output_path: str, block_size: int, c: int
    ) -> OperationResult:
        """Local mean threshold."""
        return self._execute(
            "adaptive_threshold",
            input_path,
            output_path,
            lambda src: (threshold.adaptive_threshold(src, block_size, c), {}),
            validate=lambda: threshold.check_block_size(block_size),
        )

    # Morphology

    def morphology(
        self,
        op: MorphOp,
        input_path: str,
        output_path: str,
        size: int = MorphologyConstants.DEFAULT_SIZE,
    ) -> OperationResult:
        """Run one morphological operator."""
        func = _MORPH_OPS[op]
        return self._execute(
            op.value,
            input_path,
            output_path,
            lambda src: (func(src, size), {}),
            validate=lambda: morphology.check_size(size),
        )

    def erode(
        self, input_path: str, output_path: str, size: int = MorphologyConstants.DEFAULT_SIZE
    ) -> OperationResult:
        return self.morphology(MorphOp.ERODE, input_path, output_path, size)

    def dilate(
        self, input_path: str, output_path: str, size: int = MorphologyConstants.DEFAULT_SIZE
    ) -> OperationResult:
        return self.morphology(MorphOp.DILATE, input_path, output_path, size)

    def morph_open(
        self, input_path: str, output_path: str, size: int = MorphologyConstants.DEFAULT_SIZE
    ) -> OperationResult:
        return self.morphology(MorphOp.OPEN, input_path, output_path, size)

    def morph_close(
        self, input_path: str, output_path: str, size: int = MorphologyConstants.DEFAULT_SIZE
    ) -> OperationResult:
        return self.morphology(MorphOp.CLOSE, input_path, output_path, size)

    # Drawing

    def _draw(self, operation: str, input_path: str, output_path: str, draw) -> OperationResult:
        def process(src: PixelBuffer):
            out = src.copy()
            draw(out)
            return out, {}

        return self._execute(operation, input_path, output_path, process)

    def draw_line(
        self,
        input_path: str,
        output_path: str,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        r: int = 255,
        g: int = 0,
        b: int = 0,
        thickness: int = RasterConstants.DEFAULT_THICKNESS,
    ) -> OperationResult:
        return self._draw(
            "draw_line",
            input_path,
            output_path,
            lambda out: raster.draw_line(out, x1, y1, x2, y2, (r, g, b), thickness),
        )

    def draw_rect(
        self,
        input_path: str,
        output_path: str,
        x: int,
        y: int,
        width: int,
        height: int,
        r: int = 255,
        g: int = 0,
        b: int = 0,
        thickness: int = RasterConstants.DEFAULT_THICKNESS,
    ) -> OperationResult:
        return self._draw(
            "draw_rect",
            input_path,
            output_path,
            lambda out: raster.draw_rectangle(out, x, y, width, height, (r, g, b), thickness),
        )

    def fill_rect(
        self,
        input_path: str,
        output_path: str,
        x: int,
        y: int,
        width: int,
        height: int,
        r: int = 255,
        g: int = 0,
        b: int = 0,
    ) -> OperationResult:
        return self._draw(
            "fill_rect",
            input_path,
            output_path,
            lambda out: raster.fill_rectangle(out, x, y, width, height, (r, g, b)),
        )

    def draw_circle(
        self,
        input_path: str,
        output_path: str,
        cx: int,
        cy: int,
        radius: int,
        r: int = 255,
        g: int = 0,
        b: int = 0,
        thickness: int = RasterConstants.DEFAULT_THICKNESS,
    ) -> OperationResult:
        return self._draw(
            "draw_circle",
            input_path,
            output_path,
            lambda out: raster.draw_circle(out, cx, cy, radius, (r, g, b), thickness),
        )

    def draw_text(
        self,
        input_path: str,
        output_path: str,
        x: int,
        y: int,
        text: str,
        r: int = 255,
        g: int = 255,
        b: int = 255,
        scale: int = RasterConstants.DEFAULT_TEXT_SCALE,
    ) -> OperationResult:
        """Draw text; only digits and newlines have an effect beyond advancing."""
        return self._draw(
            "draw_text",
            input_path,
            output_path,
            lambda out: raster.draw_text(out, x, y, text, (r, g, b), scale),
        )

    # Detection

    def detect_contours(
        self,
        input_path: str,
        output_path: str,
        r: int = ContourConstants.DEFAULT_COLOR[0],
        g: int = ContourConstants.DEFAULT_COLOR[1],
        b: int = ContourConstants.DEFAULT_COLOR[2],
        thickness: int = ContourConstants.DEFAULT_THICKNESS,
    ) -> ContourResult:
        """
        Outline connected components of the simplified Canny edge map.

        The boxes are drawn on a copy of the input and reported in the result.
        """

        def process(src: PixelBuffer):
            edges = self.edge_detector.canny(ensure_grayscale(src))
            rects = find_contours(edges)
            out = self.overlay_renderer.draw_rects(src.copy(), rects, (r, g, b), thickness)
            return out, {"rect_count": len(rects), "rects": rects}

        return self._execute("detect_contours", input_path, output_path, process, ContourResult)

    def detect_faces(self, input_path: str, output_path: str) -> DetectionResult:
        def process(src: PixelBuffer):
            out, count = self.placeholder_detector.detect_faces(src)
            return out, {"count": count}

        return self._execute("detect_faces", input_path, output_path, process, DetectionResult)

    def detect_plate(
        self, input_path: str, output_path: str, color_choice: int = 1
    ) -> DetectionResult:
        def process(src: PixelBuffer):
            out, count = self.placeholder_detector.detect_plate(src, color_choice)
            return out, {"count": count}

        return self._execute("detect_plate", input_path, output_path, process, DetectionResult)

    def hough_lines(self, input_path: str, output_path: str) -> DetectionResult:
        def process(src: PixelBuffer):
            out, count = self.placeholder_detector.hough_lines(src)
            return out, {"count": count}

        return self._execute("hough_lines", input_path, output_path, process, DetectionResult)

    def template_match(
        self, input_path: str, template_path: str, output_path: str
    ) -> DetectionResult:
        """Placeholder template match; template_path is accepted but never read."""

        def process(src: PixelBuffer):
            out, location = self.placeholder_detector.template_match(src)
            return out, {"count": 1, "location": location}

        return self._execute("template_match", input_path, output_path, process, DetectionResult)

    def edge_overlay(self, input_path: str, output_path: str, mode: int = 1) -> OperationResult:
        return self._execute(
            "edge_overlay",
            input_path,
            output_path,
            lambda src: (self.placeholder_detector.edge_overlay(src, mode), {}),
        )

    def kmeans(
        self, input_path: str, output_path: str, k: int, max_iters: int = 10
    ) -> OperationResult:
        return self._execute(
            "kmeans",
            input_path,
            output_path,
            lambda src: (self.placeholder_detector.kmeans(src, k, max_iters), {}),
        )

    def equalize_hist(self, input_path: str, output_path: str) -> OperationResult:
        return self._execute(
            "equalize_hist",
            input_path,
            output_path,
            lambda src: (self.placeholder_detector.equalize_hist(src), {}),
        )

    # Queries

    def info(self, path: str) -> InfoResult:
        """Decode an image and report its dimensions."""
        with timer() as t:
            try:
                buffer = self.codec.read(path)
            except ImageProcessingError as e:
                logger.error(f"info failed for {path}: {e.message}")
                return InfoResult(success=False, message=e.message, error_kind=e.kind)

        return InfoResult(
            success=True,
            processing_time_ms=t["ms"],
            info=ImageInfo(
                width=buffer.width,
                height=buffer.height,
                channels=buffer.channels,
                size_bytes=buffer.size_bytes,
            ),
        )

    def histogram(self, path: str) -> HistogramResult:
        """Placeholder histogram: decodes the image and reports only its size."""
        with timer() as t:
            try:
                buffer = self.codec.read(path)
            except ImageProcessingError as e:
                logger.error(f"histogram failed for {path}: {e.message}")
                return HistogramResult(success=False, message=e.message, error_kind=e.kind)

        logger.info(f"Histogram for {path}: image size {buffer.width}x{buffer.height}")
        return HistogramResult(
            success=True,
            processing_time_ms=t["ms"],
            width=buffer.width,
            height=buffer.height,
        )

    @staticmethod
    def version() -> Dict[str, Any]:
        """Library identity and worker count."""
        return {
            "version": VersionConstants.VERSION,
            "name": VersionConstants.NAME,
            "max_threads": ExecutorConstants.NUM_WORKERS,
            "supports_face_detection": True,
        }
