"""
Common data structures shared by every layer.

This module contains:
- Rect: bounding box produced by connected-component extraction
- ImageInfo: basic facts about a decoded image
- OperationResult and its operation-specific variants
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class Rect(BaseModel):
    """
    Axis-aligned bounding box of a connected component.

    Confidence is always 1.0; there is no scoring model behind it.
    """

    x: int = Field(..., ge=0, description="X coordinate of the top-left corner")
    y: int = Field(..., ge=0, description="Y coordinate of the top-left corner")
    width: int = Field(..., ge=0, description="Width (max_x - min_x)")
    height: int = Field(..., ge=0, description="Height (max_y - min_y)")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class ImageInfo(BaseModel):
    """Dimensions of a decoded image"""

    width: int
    height: int
    channels: int
    size_bytes: int


class OperationResult(BaseModel):
    """
    Outcome of one public operation.

    Failures never raise across the service boundary; they come back as
    success=False with a message and an error kind
    (io, write, allocation, validation).
    """

    success: bool
    message: Optional[str] = None
    error_kind: Optional[str] = None
    processing_time_ms: int = 0


class ThresholdResult(OperationResult):
    """Result of an automatic threshold operation"""

    threshold: Optional[int] = None


class ContourResult(OperationResult):
    """Result of contour detection"""

    rect_count: int = 0
    rects: List[Rect] = Field(default_factory=list)


class DetectionResult(OperationResult):
    """Result of a fixed-geometry placeholder detection"""

    count: int = 0
    location: Optional[Tuple[int, int]] = None


class InfoResult(OperationResult):
    """Result of an info query"""

    info: Optional[ImageInfo] = None


class HistogramResult(OperationResult):
    """Result of the histogram query"""

    width: int = 0
    height: int = 0
