"""
Utility modules for core functionality.

Modules:
- decorators: timing context manager and duration logging
- enum_converter: Enum parsing and conversion
"""

from .decorators import log_duration, timer
from .enum_converter import parse_enum

__all__ = [
    "timer",
    "log_duration",
    "parse_enum",
]
