"""
Image API Router - file-to-file image operations

Every endpoint follows the same pattern:
1. Validate the request body (pydantic)
2. Call the matching service method
3. Return the result model; failures keep the model but get a 4xx/5xx status
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_image_service
from api.exceptions import safe_endpoint, status_for_error
from schemas import (
    AdaptiveThresholdRequest,
    BaseOperationRequest,
    BlurRequest,
    CannyRequest,
    CircleRequest,
    ContourRequest,
    ContourResult,
    CropRequest,
    DetectionResult,
    HistogramResult,
    FillRectRequest,
    InfoResult,
    KMeansRequest,
    LineRequest,
    MorphologyRequest,
    OperationResult,
    OverlayRequest,
    PlateRequest,
    RectRequest,
    ResizeRequest,
    RotateRequest,
    TemplateMatchRequest,
    TextRequest,
    ThresholdRequest,
    ThresholdResult,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def to_response(result: OperationResult) -> Union[OperationResult, JSONResponse]:
    """
    Pass successful results through; wrap failures with an error status.

    Args:
        result: Result returned by the service

    Returns:
        The result itself, or a JSONResponse carrying it with the status
        derived from its error kind
    """
    if result.success:
        return result
    return JSONResponse(
        status_code=status_for_error(result.error_kind), content=result.model_dump()
    )


# Transforms


@router.post("/grayscale")
@safe_endpoint
async def grayscale(
    request: BaseOperationRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    """Convert an image to single-channel luma."""
    return to_response(image_service.grayscale(request.input_path, request.output_path))


@router.post("/resize")
@safe_endpoint
async def resize(request: ResizeRequest, image_service=Depends(get_image_service)) -> OperationResult:
    """Resample an image to a new size."""
    return to_response(
        image_service.resize(request.input_path, request.output_path, request.width, request.height)
    )


@router.post("/crop")
@safe_endpoint
async def crop(request: CropRequest, image_service=Depends(get_image_service)) -> OperationResult:
    """Cut a rectangle out of an image."""
    return to_response(
        image_service.crop(
            request.input_path,
            request.output_path,
            request.x,
            request.y,
            request.width,
            request.height,
        )
    )


@router.post("/rotate")
@safe_endpoint
async def rotate(request: RotateRequest, image_service=Depends(get_image_service)) -> OperationResult:
    """Rotate an image, expanding the canvas to fit."""
    return to_response(image_service.rotate(request.input_path, request.output_path, request.angle))


# Filters


@router.post("/blur")
@safe_endpoint
async def blur(request: BlurRequest, image_service=Depends(get_image_service)) -> OperationResult:
    """Gaussian, median or average blur."""
    return to_response(
        image_service.blur(
            request.input_path, request.output_path, request.kind, request.size, request.sigma
        )
    )


@router.post("/sobel")
@safe_endpoint
async def sobel(
    request: BaseOperationRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(image_service.sobel(request.input_path, request.output_path))


@router.post("/canny")
@safe_endpoint
async def canny(request: CannyRequest, image_service=Depends(get_image_service)) -> OperationResult:
    return to_response(
        image_service.canny(request.input_path, request.output_path, request.low, request.high)
    )


# Thresholds


@router.post("/threshold")
@safe_endpoint
async def threshold(
    request: ThresholdRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.threshold(
            request.input_path, request.output_path, request.thresh, request.maxval
        )
    )


@router.post("/otsu")
@safe_endpoint
async def otsu(
    request: BaseOperationRequest, image_service=Depends(get_image_service)
) -> ThresholdResult:
    """Otsu threshold; the chosen threshold is part of the response."""
    return to_response(image_service.otsu(request.input_path, request.output_path))


@router.post("/adaptive-threshold")
@safe_endpoint
async def adaptive_threshold(
    request: AdaptiveThresholdRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.adaptive_threshold(
            request.input_path, request.output_path, request.block_size, request.c
        )
    )


# Morphology


@router.post("/erode")
@safe_endpoint
async def erode(
    request: MorphologyRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(image_service.erode(request.input_path, request.output_path, request.size))


@router.post("/dilate")
@safe_endpoint
async def dilate(
    request: MorphologyRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(image_service.dilate(request.input_path, request.output_path, request.size))


@router.post("/open")
@safe_endpoint
async def morph_open(
    request: MorphologyRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.morph_open(request.input_path, request.output_path, request.size)
    )


@router.post("/close")
@safe_endpoint
async def morph_close(
    request: MorphologyRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.morph_close(request.input_path, request.output_path, request.size)
    )


# Drawing


@router.post("/draw-line")
@safe_endpoint
async def draw_line(request: LineRequest, image_service=Depends(get_image_service)) -> OperationResult:
    return to_response(
        image_service.draw_line(
            request.input_path,
            request.output_path,
            request.x1,
            request.y1,
            request.x2,
            request.y2,
            *request.color,
            thickness=request.thickness,
        )
    )


@router.post("/draw-rect")
@safe_endpoint
async def draw_rect(request: RectRequest, image_service=Depends(get_image_service)) -> OperationResult:
    return to_response(
        image_service.draw_rect(
            request.input_path,
            request.output_path,
            request.x,
            request.y,
            request.width,
            request.height,
            *request.color,
            thickness=request.thickness,
        )
    )


@router.post("/fill-rect")
@safe_endpoint
async def fill_rect(
    request: FillRectRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.fill_rect(
            request.input_path,
            request.output_path,
            request.x,
            request.y,
            request.width,
            request.height,
            *request.color,
        )
    )


@router.post("/draw-circle")
@safe_endpoint
async def draw_circle(
    request: CircleRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.draw_circle(
            request.input_path,
            request.output_path,
            request.cx,
            request.cy,
            request.radius,
            *request.color,
            thickness=request.thickness,
        )
    )


@router.post("/draw-text")
@safe_endpoint
async def draw_text(request: TextRequest, image_service=Depends(get_image_service)) -> OperationResult:
    """Draw digit text; other characters only advance the cursor."""
    return to_response(
        image_service.draw_text(
            request.input_path,
            request.output_path,
            request.x,
            request.y,
            request.text,
            *request.color,
            scale=request.scale,
        )
    )


# Detection


@router.post("/detect-contours")
@safe_endpoint
async def detect_contours(
    request: ContourRequest, image_service=Depends(get_image_service)
) -> ContourResult:
    """Outline connected components of the edge map."""
    result = image_service.detect_contours(
        request.input_path, request.output_path, *request.color, thickness=request.thickness
    )
    if result.success:
        logger.info(f"Detected {result.rect_count} contours in {request.input_path}")
    return to_response(result)


@router.post("/detect-faces")
@safe_endpoint
async def detect_faces(
    request: BaseOperationRequest, image_service=Depends(get_image_service)
) -> DetectionResult:
    return to_response(image_service.detect_faces(request.input_path, request.output_path))


@router.post("/detect-plate")
@safe_endpoint
async def detect_plate(
    request: PlateRequest, image_service=Depends(get_image_service)
) -> DetectionResult:
    return to_response(
        image_service.detect_plate(request.input_path, request.output_path, request.color_choice)
    )


@router.post("/hough-lines")
@safe_endpoint
async def hough_lines(
    request: BaseOperationRequest, image_service=Depends(get_image_service)
) -> DetectionResult:
    return to_response(image_service.hough_lines(request.input_path, request.output_path))


@router.post("/template-match")
@safe_endpoint
async def template_match(
    request: TemplateMatchRequest, image_service=Depends(get_image_service)
) -> DetectionResult:
    return to_response(
        image_service.template_match(
            request.input_path, request.template_path, request.output_path
        )
    )


@router.post("/edge-overlay")
@safe_endpoint
async def edge_overlay(
    request: OverlayRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(
        image_service.edge_overlay(request.input_path, request.output_path, request.mode)
    )


@router.post("/kmeans")
@safe_endpoint
async def kmeans(request: KMeansRequest, image_service=Depends(get_image_service)) -> OperationResult:
    return to_response(
        image_service.kmeans(request.input_path, request.output_path, request.k, request.max_iters)
    )


@router.post("/equalize-hist")
@safe_endpoint
async def equalize_hist(
    request: BaseOperationRequest, image_service=Depends(get_image_service)
) -> OperationResult:
    return to_response(image_service.equalize_hist(request.input_path, request.output_path))


# Queries


@router.get("/info")
@safe_endpoint
async def info(
    path: str = Query(..., min_length=1, description="Image path"),
    image_service=Depends(get_image_service),
) -> InfoResult:
    """Width, height, channel count and byte size of an image."""
    return to_response(image_service.info(path))


@router.get("/histogram")
@safe_endpoint
async def histogram(
    path: str = Query(..., min_length=1, description="Image path"),
    image_service=Depends(get_image_service),
) -> HistogramResult:
    """Width and height of an image; no bin counts are computed."""
    return to_response(image_service.histogram(path))
