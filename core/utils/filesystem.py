"""Path resolution and async metadata/open helpers for the serving root.

Blocking filesystem calls go through `asyncio.to_thread` so the event loop
only suspends at I/O boundaries.
"""

import asyncio
import stat
import unicodedata
from pathlib import Path
from typing import BinaryIO

from core.errors import PathTraversalError, StatFailureError, StreamFailureError


def resolve_path(root: Path | str, file_name: str) -> Path:
    """Resolve a requested file name against the serving root.

    Args:
        root: The serving root directory.
        file_name: The raw name taken from the request path.

    Returns:
        Absolute path of the requested file.

    Raises:
        PathTraversalError: If the name resolves outside of `root`.
        StatFailureError: If the name is not a valid path (e.g. embedded NUL).
    """
    root_path = Path(root).expanduser().resolve()
    file_name = unicodedata.normalize("NFC", file_name)
    try:
        candidate = (root_path / file_name).resolve()
    except ValueError as exc:
        raise StatFailureError(
            str(exc), original_error=exc, context={"file_name": file_name}
        ) from exc

    if candidate != root_path and root_path not in candidate.parents:
        raise PathTraversalError(
            f'The path "{file_name}" resolves outside the serving root.',
            context={"file_name": file_name},
        )
    return candidate


async def get_total_size(path: Path) -> int:
    """Return the size in bytes of the file at `path`.

    Raises:
        StatFailureError: If the file is missing, unreadable or a directory.
    """
    try:
        stats = await asyncio.to_thread(path.stat)
    except (OSError, ValueError) as exc:
        raise StatFailureError(
            str(exc), original_error=exc, context={"path": str(path)}
        ) from exc

    if not stat.S_ISREG(stats.st_mode):
        raise StatFailureError(
            f'The path "{path}" is not a regular file.',
            context={"path": str(path)},
        )
    return stats.st_size


async def open_binary(path: Path) -> BinaryIO:
    """Open `path` for binary reading off the event loop.

    Raises:
        StreamFailureError: If the file cannot be opened.
    """
    try:
        return await asyncio.to_thread(open, path, "rb")
    except (OSError, ValueError) as exc:
        raise StreamFailureError(
            str(exc), original_error=exc, context={"path": str(path)}
        ) from exc
