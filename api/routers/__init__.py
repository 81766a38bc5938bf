"""
API Routers for the Raster Vision Engine
"""

from . import image, system

__all__ = ["image", "system"]
