"""
Base request schemas.

Every operation reads one image path and writes another, and most drawing
operations take an RGB color, so those fields live here once.
"""

from typing import Tuple

from pydantic import BaseModel, Field


class BaseOperationRequest(BaseModel):
    """Source and destination paths common to every operation."""

    input_path: str = Field(..., min_length=1, description="Path of the image to read")
    output_path: str = Field(
        ..., min_length=1, description="Path to write; format follows the extension"
    )


class ColorMixin(BaseModel):
    """RGB color, 0-255 per channel."""

    r: int = Field(default=255, ge=0, le=255, description="Red")
    g: int = Field(default=0, ge=0, le=255, description="Green")
    b: int = Field(default=0, ge=0, le=255, description="Blue")

    @property
    def color(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)
