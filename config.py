"""
Configuration for the Raster Vision Engine API.

Values come from defaults overridden by RASTER_* environment variables.
Algorithm constants are not configurable; they live in core.constants.
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "RASTER_"


class APIConfig(BaseModel):
    """HTTP server configuration"""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class SystemConfig(BaseModel):
    """Process-wide settings"""

    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseModel):
    """Complete application settings"""

    environment: str = "development"
    api: APIConfig = Field(default_factory=APIConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dict (stored in app state)."""
        return self.model_dump()


def _env(name: str, default: Any = None) -> Any:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Build settings from defaults and RASTER_* environment variables."""
    api = APIConfig(
        host=_env("HOST", "0.0.0.0"),
        port=int(_env("PORT", 8000)),
        cors_enabled=_env_bool("CORS_ENABLED", True),
        cors_origins=[o.strip() for o in _env("CORS_ORIGINS", "*").split(",") if o.strip()],
    )
    system = SystemConfig(
        log_level=_env("LOG_LEVEL", "INFO"),
        debug=_env_bool("DEBUG", False),
    )
    return Settings(environment=_env("ENVIRONMENT", "development"), api=api, system=system)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
