"""
Pydantic models for system API responses.

Operation requests and results live in the schemas package; this module
only holds what the system endpoints report.
"""

from typing import Dict

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Liveness report"""

    status: str = "healthy"
    timestamp: str
    services: Dict[str, bool] = Field(default_factory=dict)


class VersionInfo(BaseModel):
    """Engine identity"""

    version: str
    name: str
    max_threads: int
    supports_face_detection: bool = True


class SystemStatus(BaseModel):
    """Process status and memory usage"""

    status: str
    uptime: float = Field(..., description="Seconds since the API module was loaded")
    memory_usage: Dict[str, float]
    worker_threads: int
