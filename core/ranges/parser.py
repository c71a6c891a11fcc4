"""Parsing of the HTTP `Range` request header.

Only the closed form is accepted:

    Range: bytes=<start>-<end>[, <start>-<end>]*

Suffix (`-500`) and open-ended (`500-`) specs are rejected, and ranges are
returned in header order without merging, since that order decides the
multipart part order.
"""

from __future__ import annotations

import re

from core.errors import (
    MalformedHeaderError,
    MalformedRangeError,
    UnsupportedUnitError,
)
from core.schemas import MAX_OFFSET, ByteRange, RangeRequestOptions

RANGE_UNIT = "bytes"
RANGE_SEPARATOR = ", "

_HEADER_RE = re.compile(r"(.+)=(.+)")
_SPEC_RE = re.compile(r"([0-9]+)-([0-9]+)")


def _parse_offset(digits: str, token: str) -> int:
    value = int(digits, 10)
    if value > MAX_OFFSET:
        raise MalformedRangeError(
            f'The value "{token}" overflows the maximum byte offset.',
            context={"token": token},
        )
    return value


def parse_range_spec(token: str) -> ByteRange:
    """Parse a single `<start>-<end>` token."""
    match = _SPEC_RE.fullmatch(token)
    if not match:
        raise MalformedRangeError(
            f'The value "{token}" is not a valid "Range" value.',
            context={"token": token},
        )
    start = _parse_offset(match.group(1), token)
    end = _parse_offset(match.group(2), token)
    return ByteRange(start=start, end=end)


def parse_ranges(header_text: str) -> list[ByteRange]:
    """Turn a raw `Range` header value into an ordered list of ranges.

    Args:
        header_text: The header value, e.g. ``"bytes=0-99, 200-299"``.

    Returns:
        The ranges in the order they appeared in the header.

    Raises:
        MalformedHeaderError: The value is not `<unit>=<ranges>`.
        UnsupportedUnitError: The unit is not exactly `bytes`.
        MalformedRangeError: Any token is not `<digits>-<digits>`; the whole
            parse is abandoned on the first bad token.
    """
    match = _HEADER_RE.fullmatch(header_text)
    if not match:
        raise MalformedHeaderError(
            f'The value "{header_text}" is not a valid "Range" value.',
            context={"header": header_text},
        )

    unit, ranges_text = match.group(1), match.group(2)
    if unit != RANGE_UNIT:
        raise UnsupportedUnitError(
            f'The value "{unit}" is not a valid "Range Type" value '
            f'("{RANGE_UNIT}").',
            context={"unit": unit},
        )

    return [
        parse_range_spec(token)
        for token in ranges_text.split(RANGE_SEPARATOR)
    ]


def read_range_options(header_value: str | None) -> RangeRequestOptions:
    """Build request options from an optional `Range` header value."""
    if not header_value:
        return RangeRequestOptions()
    return RangeRequestOptions(ranges=parse_ranges(header_value))
