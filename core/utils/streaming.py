"""Utilities for streaming file content with Range support."""

from collections.abc import Generator
from pathlib import Path
from typing import BinaryIO

from config import DEFAULT_CHUNK_SIZE
from core.errors import StreamFailureError
from core.utils.logger import logger


def range_generator(
    file_obj: BinaryIO,
    start: int,
    end: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Generator[bytes, None, None]:
    """Yield file chunks for an inclusive byte window.

    Args:
        file_obj: Opened file object (binary mode).
        start: Start byte position.
        end: End byte position (inclusive), or None to read to EOF.
        chunk_size: Chunk size in bytes.

    Yields:
        Bytes chunks. Stops early at EOF, so a window past the end of the
        file yields a short (possibly empty) read.
    """
    file_obj.seek(start)
    bytes_to_read = None if end is None else end - start + 1

    while bytes_to_read is None or bytes_to_read > 0:
        read_size = (
            chunk_size if bytes_to_read is None else min(chunk_size, bytes_to_read)
        )
        data = file_obj.read(read_size)

        if not data:
            break

        yield data
        if bytes_to_read is not None:
            bytes_to_read -= len(data)


def stream_open_file(
    file_obj: BinaryIO,
    start: int = 0,
    end: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Generator[bytes, None, None]:
    """Stream a window of an already opened file, closing it when done.

    Read errors are logged and re-raised as `StreamFailureError`; by then the
    response headers are gone, so the connection is simply aborted.
    """
    try:
        yield from range_generator(file_obj, start, end, chunk_size)
    except OSError as exc:
        logger.error(f"[Stream] Read failed for {file_obj.name}: {exc}")
        raise StreamFailureError(str(exc), original_error=exc) from exc
    finally:
        file_obj.close()


def stream_file_window(
    path: Path,
    start: int,
    end: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Generator[bytes, None, None]:
    """Open `path` lazily and yield the inclusive window `[start, end]`."""
    with open(path, "rb") as f:
        yield from range_generator(f, start, end, chunk_size)
