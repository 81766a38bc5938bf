"""
System API Router - Health, version, configuration and status
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends, Request

from api.dependencies import get_config, get_executor
from api.exceptions import safe_endpoint
from api.models import HealthStatus, SystemStatus, VersionInfo
from services.image_service import ImageOperationsService

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/health")
async def health_check(request: Request) -> HealthStatus:
    """Simple health check"""
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        services={
            "executor": getattr(request.app.state, "executor", None) is not None,
            "image_service": getattr(request.app.state, "image_service", None) is not None,
        },
    )


@router.get("/version")
async def get_version() -> VersionInfo:
    """Engine name, version and worker count"""
    return VersionInfo(**ImageOperationsService.version())


@router.get("/config")
@safe_endpoint
async def get_current_config(config=Depends(get_config)) -> dict:
    """Get current configuration"""
    return config


@router.get("/status")
@safe_endpoint
async def get_status(executor=Depends(get_executor)) -> SystemStatus:
    """Get process status"""
    # Get memory usage
    process = psutil.Process()
    memory_info = process.memory_info()

    # Get system memory
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        worker_threads=executor.num_workers,
    )
