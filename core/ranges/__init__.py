"""Range request parsing and response building."""

from core.ranges.parser import parse_ranges, read_range_options
from core.ranges.responder import multipart_boundary, respond, validate_ranges

__all__ = [
    "multipart_boundary",
    "parse_ranges",
    "read_range_options",
    "respond",
    "validate_ranges",
]
