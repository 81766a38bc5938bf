"""
Shared FastAPI dependencies for the Raster Vision Engine API.
"""

import logging
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request

from core.parallel import RowParallelExecutor
from services.image_service import ImageOperationsService

logger = logging.getLogger(__name__)


def get_executor(request: Request) -> RowParallelExecutor:
    """
    Get the row-parallel executor from app state.

    Raises:
        HTTPException: If the executor was not initialized
    """
    try:
        return request.app.state.executor
    except AttributeError as e:
        logger.error(f"Executor not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Executor not initialized"
        )


def get_image_service(
    request: Request, executor: RowParallelExecutor = Depends(get_executor)
) -> ImageOperationsService:
    """
    Get the image operations service.

    The service stored in app state is reused; otherwise one is built around
    the shared executor.
    """
    service = getattr(request.app.state, "image_service", None)
    if service is None:
        service = ImageOperationsService(executor=executor)
        request.app.state.image_service = service
    return service


def get_config(request: Request) -> Dict[str, Any]:
    """Get application configuration."""
    try:
        return request.app.state.config
    except AttributeError:
        logger.warning("Config not found in app state, using defaults")
        return {}
