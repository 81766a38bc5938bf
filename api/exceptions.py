"""
API exception handling.

Processing failures are normally reported inside the result model; these
helpers cover whatever escapes an endpoint anyway.
"""

import functools
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import ImageProcessingError

logger = logging.getLogger(__name__)

# error_kind -> HTTP status
ERROR_STATUS_CODES = {
    "io": 404,
    "validation": 400,
    "write": 500,
    "allocation": 500,
}


def status_for_error(kind: str) -> int:
    """HTTP status for an error kind; unknown kinds map to 500."""
    return ERROR_STATUS_CODES.get(kind, 500)


def safe_endpoint(func):
    """
    Decorator for endpoints.

    HTTPException and ImageProcessingError pass through to their handlers;
    anything else is logged and turned into a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, ImageProcessingError):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {e}")

    return wrapper


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON handlers for processing errors to the app."""

    @app.exception_handler(ImageProcessingError)
    async def image_processing_error_handler(request: Request, exc: ImageProcessingError):
        logger.warning(f"{request.url.path}: {exc.kind} error: {exc.message}")
        return JSONResponse(
            status_code=status_for_error(exc.kind),
            content={"success": False, "message": exc.message, "error_kind": exc.kind},
        )
