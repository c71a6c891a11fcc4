import pytest

from core.errors import (
    MalformedHeaderError,
    MalformedRangeError,
    RangeHeaderError,
    UnsupportedUnitError,
)
from core.ranges.parser import parse_range_spec, parse_ranges, read_range_options
from core.schemas import MAX_OFFSET, ByteRange


def test_parse_single_range():
    assert parse_ranges("bytes=0-99") == [ByteRange(start=0, end=99)]


def test_parse_multiple_ranges_keeps_order():
    ranges = parse_ranges("bytes=10-20, 30-40")
    assert [(r.start, r.end) for r in ranges] == [(10, 20), (30, 40)]


def test_parse_unordered_and_overlapping_ranges_untouched():
    ranges = parse_ranges("bytes=500-600, 0-10, 5-15")
    assert [(r.start, r.end) for r in ranges] == [(500, 600), (0, 10), (5, 15)]


def test_inverted_range_is_parsed_as_is():
    assert parse_ranges("bytes=20-10") == [ByteRange(start=20, end=10)]


def test_unsupported_unit():
    with pytest.raises(UnsupportedUnitError):
        parse_ranges("foo=0-10")


def test_unit_is_case_sensitive():
    with pytest.raises(UnsupportedUnitError):
        parse_ranges("Bytes=0-10")


@pytest.mark.parametrize("header", ["10-20", "bytes", "bytes=", "=0-10", ""])
def test_malformed_header(header):
    with pytest.raises(MalformedHeaderError):
        parse_ranges(header)


@pytest.mark.parametrize(
    "header",
    [
        "bytes=abc-10",
        "bytes=-500",
        "bytes=500-",
        "bytes=0-10,20-30",  # separator must be ", "
        "bytes=0-10, ",
        "bytes= 0-10",
        "bytes=0-10x",
    ],
)
def test_malformed_range(header):
    with pytest.raises(MalformedRangeError):
        parse_ranges(header)


def test_bad_token_aborts_whole_parse():
    with pytest.raises(MalformedRangeError) as exc_info:
        parse_ranges("bytes=0-10, nope, 20-30")
    assert exc_info.value.context == {"token": "nope"}


def test_overflowing_offset_rejected():
    with pytest.raises(MalformedRangeError):
        parse_range_spec(f"0-{MAX_OFFSET + 1}")
    assert parse_range_spec(f"0-{MAX_OFFSET}").end == MAX_OFFSET


def test_header_errors_share_base_class():
    for header in ("foo=0-1", "nope", "bytes=x-y"):
        with pytest.raises(RangeHeaderError):
            parse_ranges(header)


def test_error_messages_name_offending_value():
    with pytest.raises(UnsupportedUnitError, match='"foo"'):
        parse_ranges("foo=0-10")
    with pytest.raises(MalformedRangeError, match='"abc-10"'):
        parse_ranges("bytes=abc-10")


def test_read_range_options_without_header():
    assert read_range_options(None).ranges is None
    assert read_range_options("").ranges is None


def test_read_range_options_with_header():
    options = read_range_options("bytes=0-1, 4-5")
    assert options.is_partial
    assert options.is_multipart
    assert len(options.ranges) == 2


def test_single_range_is_not_multipart():
    options = read_range_options("bytes=0-1")
    assert options.is_partial
    assert not options.is_multipart
