"""
Enum parsing utilities.

Maps raw request values onto enums, falling back to a default for
unrecognized input.
"""

import logging
from typing import Any, Type, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def parse_enum(value: Any, enum_class: Type[T], default: T) -> T:
    """
    Parse value to enum with fallback to default.

    Unrecognized values are not an error: they silently map to the default,
    which is how the engine degrades for unknown blur kinds, overlay modes
    and plate colors.

    Args:
        value: Value to parse (string, int, enum, or None)
        enum_class: Enum class to parse to
        default: Default enum value if parsing fails

    Returns:
        Parsed enum value or default

    Example:
        >>> parse_enum("median", BlurKind, BlurKind.AVERAGE)
        <BlurKind.MEDIAN: 'median'>
        >>> parse_enum("box", BlurKind, BlurKind.AVERAGE)
        <BlurKind.AVERAGE: 'average'>
    """
    # Already an enum instance
    if isinstance(value, enum_class):
        return value

    # None or missing value
    if value is None:
        return default

    try:
        return enum_class(value)
    except ValueError:
        logger.debug(f"Unrecognized {enum_class.__name__} value {value!r}, using {default!r}")
        return default
