"""Builds full, single-range and multipart/byteranges file responses."""

from __future__ import annotations

import mimetypes
from collections.abc import Generator, Sequence
from pathlib import Path
from uuid import uuid4

from fastapi.responses import StreamingResponse

from config import Settings, settings as default_settings
from core.errors import RangeNotSatisfiableError, StreamFailureError
from core.ranges.parser import RANGE_UNIT
from core.schemas import ByteRange, RangeRequestOptions
from core.utils.filesystem import open_binary
from core.utils.logger import logger
from core.utils.streaming import stream_file_window, stream_open_file

PARTIAL_CONTENT = 206


def multipart_boundary(settings: Settings) -> str:
    """Boundary for one multipart response.

    The configured token is shared by every response unless random
    boundaries are enabled, in which case each call returns a fresh one.
    """
    if settings.random_boundary:
        return uuid4().hex
    return settings.multipart_boundary


def validate_ranges(ranges: Sequence[ByteRange], total_size: int) -> None:
    """Reject ranges that are inverted or reach past the end of the file."""
    for byte_range in ranges:
        if byte_range.start > byte_range.end or byte_range.end >= total_size:
            raise RangeNotSatisfiableError(
                f'The range "{byte_range.start}-{byte_range.end}" cannot be '
                f"satisfied for a resource of {total_size} bytes.",
                context={
                    "start": byte_range.start,
                    "end": byte_range.end,
                    "total": total_size,
                },
            )


def _guess_media_type(file_path: Path) -> str:
    media_type, _ = mimetypes.guess_type(file_path.name)
    return media_type or "application/octet-stream"


def multipart_body(
    file_path: Path,
    ranges: Sequence[ByteRange],
    total_size: int,
    boundary: str,
    chunk_size: int,
    closing_boundary: bool = False,
) -> Generator[bytes, None, None]:
    """Yield the multipart/byteranges body, one part per range in order.

    Each part is a `\\n--<boundary>\\n` separator, a `Content-Range` line
    followed by a blank line, then the raw bytes of the window. The
    terminating `--<boundary>--` is only written when `closing_boundary`
    is set. A read failure in any part aborts the whole body.
    """
    try:
        for byte_range in ranges:
            yield f"\n--{boundary}\n".encode("latin-1")
            yield (
                f"Content-Range: {byte_range.content_range(total_size)}\n\n"
            ).encode("latin-1")
            yield from stream_file_window(
                file_path, byte_range.start, byte_range.end, chunk_size
            )
        if closing_boundary:
            yield f"\n--{boundary}--\n".encode("latin-1")
    except OSError as exc:
        logger.error(f"[Range] Multipart stream failed for {file_path}: {exc}")
        raise StreamFailureError(str(exc), original_error=exc) from exc


async def respond(
    file_path: Path,
    total_size: int,
    options: RangeRequestOptions,
    settings: Settings | None = None,
) -> StreamingResponse:
    """Stream a file, or the requested windows of it.

    Args:
        file_path: Resolved path of the file to serve.
        total_size: Size of the file in bytes, as reported by stat.
        options: Parsed request options; `ranges=None` serves the full body.
        settings: Server settings, defaults to the module-level settings.

    Returns:
        A 200 full-body response, a 206 single-range response, or a 206
        multipart/byteranges response. All of them advertise
        `Accept-Ranges: bytes`.

    Raises:
        StreamFailureError: The file could not be opened (full body and
            single range only; multipart parts open lazily while streaming).
        RangeNotSatisfiableError: A range does not fit the file and strict
            range validation is enabled.
    """
    settings = settings or default_settings
    headers = {"Accept-Ranges": RANGE_UNIT}
    media_type = _guess_media_type(file_path)
    ranges = options.ranges

    if options.is_partial and settings.strict_ranges:
        validate_ranges(ranges, total_size)

    if not options.is_partial:
        file_obj = await open_binary(file_path)
        headers["Content-Length"] = str(total_size)
        logger.info(f"[Range] 200 {file_path.name} ({total_size} bytes)")
        return StreamingResponse(
            stream_open_file(file_obj, chunk_size=settings.chunk_size),
            headers=headers,
            media_type=media_type,
        )

    if not options.is_multipart:
        byte_range = ranges[0]
        file_obj = await open_binary(file_path)
        headers["Content-Range"] = byte_range.content_range(total_size)
        headers["Content-Length"] = str(byte_range.available_length(total_size))
        logger.info(
            f"[Range] 206 {file_path.name} {headers['Content-Range']}"
        )
        return StreamingResponse(
            stream_open_file(
                file_obj,
                byte_range.start,
                byte_range.end,
                chunk_size=settings.chunk_size,
            ),
            status_code=PARTIAL_CONTENT,
            headers=headers,
            media_type=media_type,
        )

    boundary = multipart_boundary(settings)
    logger.info(
        f"[Range] 206 {file_path.name} multipart ({len(ranges)} parts, "
        f"boundary={boundary})"
    )
    return StreamingResponse(
        multipart_body(
            file_path,
            ranges,
            total_size,
            boundary,
            settings.chunk_size,
            closing_boundary=settings.multipart_closing_boundary,
        ),
        status_code=PARTIAL_CONTENT,
        headers=headers,
        media_type=f"multipart/byteranges; boundary={boundary}",
    )
