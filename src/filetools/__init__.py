"""Public interface for filetools."""

from .byte_size import ByteUnit, InvalidFormatError, format_byte_count, parse_byte_count
from .timestamps import (
    DATE_PATTERNS,
    DatePattern,
    extract_timestamps,
    first_timestamp,
    get_timestamp,
    timestamps_from_path,
)

__version__ = "0.1.0"
__all__ = [
    "ByteUnit",
    "DATE_PATTERNS",
    "DatePattern",
    "InvalidFormatError",
    "extract_timestamps",
    "first_timestamp",
    "format_byte_count",
    "get_timestamp",
    "parse_byte_count",
    "timestamps_from_path",
    "__version__",
]
