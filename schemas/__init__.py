"""
Schemas Package

This package contains all Pydantic schemas for data validation and
serialization, organized by concern. They are shared across every layer:
- API (routers, dependencies)
- Services (operation orchestration)
- Core and vision (Rect is produced by contour extraction)
"""

# Base schemas
from .base import BaseOperationRequest, ColorMixin

# Common models (core data structures)
from .common import (
    ContourResult,
    DetectionResult,
    HistogramResult,
    ImageInfo,
    InfoResult,
    OperationResult,
    Rect,
    ThresholdResult,
)

# Operation request models
from .image import (
    AdaptiveThresholdRequest,
    BlurRequest,
    CannyRequest,
    CircleRequest,
    ContourRequest,
    CropRequest,
    FillRectRequest,
    KMeansRequest,
    LineRequest,
    MorphologyRequest,
    OverlayRequest,
    PlateRequest,
    RectRequest,
    ResizeRequest,
    RotateRequest,
    TemplateMatchRequest,
    TextRequest,
    ThresholdRequest,
)

__all__ = [
    # Base schemas
    "BaseOperationRequest",
    "ColorMixin",
    # Common models
    "Rect",
    "ImageInfo",
    "OperationResult",
    "ThresholdResult",
    "ContourResult",
    "DetectionResult",
    "InfoResult",
    "HistogramResult",
    # Request models
    "ResizeRequest",
    "CropRequest",
    "RotateRequest",
    "BlurRequest",
    "CannyRequest",
    "ThresholdRequest",
    "AdaptiveThresholdRequest",
    "MorphologyRequest",
    "LineRequest",
    "RectRequest",
    "FillRectRequest",
    "CircleRequest",
    "TextRequest",
    "ContourRequest",
    "PlateRequest",
    "TemplateMatchRequest",
    "OverlayRequest",
    "KMeansRequest",
]
