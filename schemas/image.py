"""
Image operation API models.

This module contains request models for every public operation:
- transforms (resize, crop, rotate)
- filters and thresholds
- morphology
- drawing primitives
- contour detection and placeholder detections
"""

from pydantic import Field

from core.constants import (
    ContourConstants,
    EdgeConstants,
    FilterConstants,
    MorphologyConstants,
    RasterConstants,
)

from .base import BaseOperationRequest, ColorMixin


class ResizeRequest(BaseOperationRequest):
    """Request to resample an image to a new size"""

    width: int = Field(..., description="Target width (must be positive)")
    height: int = Field(..., description="Target height (must be positive)")


class CropRequest(BaseOperationRequest):
    """Request to crop a rectangle out of an image"""

    x: int
    y: int
    width: int
    height: int


class RotateRequest(BaseOperationRequest):
    """Request to rotate an image by an arbitrary angle"""

    angle: float = Field(..., description="Rotation angle in degrees")


class BlurRequest(BaseOperationRequest):
    """Request to blur an image"""

    kind: str = Field(
        default="gaussian",
        description="gaussian, median or average (unknown kinds use average)",
    )
    size: int = Field(
        default=FilterConstants.DEFAULT_KERNEL_SIZE, ge=1, description="Gaussian kernel size"
    )
    sigma: float = Field(default=FilterConstants.DEFAULT_SIGMA, gt=0, description="Gaussian sigma")


class CannyRequest(BaseOperationRequest):
    """Request for the simplified edge map"""

    low: float = Field(
        default=EdgeConstants.CANNY_LOW_THRESHOLD_DEFAULT,
        description="Low threshold (accepted, not used)",
    )
    high: float = Field(default=EdgeConstants.CANNY_HIGH_THRESHOLD_DEFAULT)


class ThresholdRequest(BaseOperationRequest):
    """Request for a fixed global threshold"""

    thresh: int
    maxval: int = Field(default=255, ge=0, le=255)


class AdaptiveThresholdRequest(BaseOperationRequest):
    """Request for a local mean threshold"""

    block_size: int = Field(
        ..., ge=0, description="Neighbourhood size (even sizes, 0 included, are bumped)"
    )
    c: int = Field(default=0, description="Constant subtracted from the local mean")


class MorphologyRequest(BaseOperationRequest):
    """Request for erode/dilate/open/close"""

    size: int = Field(
        default=MorphologyConstants.DEFAULT_SIZE, ge=1, description="Structuring element size"
    )


class LineRequest(BaseOperationRequest, ColorMixin):
    """Request to draw a line"""

    x1: int
    y1: int
    x2: int
    y2: int
    thickness: int = Field(default=RasterConstants.DEFAULT_THICKNESS, ge=1)


class RectRequest(BaseOperationRequest, ColorMixin):
    """Request to draw a rectangle outline"""

    x: int
    y: int
    width: int
    height: int
    thickness: int = Field(default=RasterConstants.DEFAULT_THICKNESS, ge=1)


class FillRectRequest(BaseOperationRequest, ColorMixin):
    """Request to fill a rectangle"""

    x: int
    y: int
    width: int
    height: int


class CircleRequest(BaseOperationRequest, ColorMixin):
    """Request to draw a circle outline"""

    cx: int
    cy: int
    radius: int = Field(..., ge=0)
    thickness: int = Field(default=RasterConstants.DEFAULT_THICKNESS, ge=1)


class TextRequest(BaseOperationRequest, ColorMixin):
    """Request to draw digit text"""

    x: int
    y: int
    text: str
    r: int = Field(default=255, ge=0, le=255)
    g: int = Field(default=255, ge=0, le=255)
    b: int = Field(default=255, ge=0, le=255)
    scale: int = Field(default=RasterConstants.DEFAULT_TEXT_SCALE, ge=1)


class ContourRequest(BaseOperationRequest, ColorMixin):
    """Request to detect contours and outline them"""

    r: int = Field(default=ContourConstants.DEFAULT_COLOR[0], ge=0, le=255)
    g: int = Field(default=ContourConstants.DEFAULT_COLOR[1], ge=0, le=255)
    b: int = Field(default=ContourConstants.DEFAULT_COLOR[2], ge=0, le=255)
    thickness: int = Field(default=ContourConstants.DEFAULT_THICKNESS, ge=1)


class PlateRequest(BaseOperationRequest):
    """Request for the plate placeholder"""

    color_choice: int = Field(default=1, description="1 red, 2 green, 3 blue, 4 yellow")


class TemplateMatchRequest(BaseOperationRequest):
    """Request for the template placeholder"""

    template_path: str = Field(..., min_length=1)


class OverlayRequest(BaseOperationRequest):
    """Request for an edge/contour/plate overlay"""

    mode: int = Field(default=1, description="1 edges, 2 contours, 3 plate")


class KMeansRequest(BaseOperationRequest):
    """Request for the clustering placeholder"""

    k: int = Field(..., description="Cluster count (accepted, unused)")
    max_iters: int = Field(default=10, description="Iteration cap (accepted, unused)")
