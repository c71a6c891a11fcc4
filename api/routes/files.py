"""API routes for serving static files with byte-range support."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header
from fastapi.responses import StreamingResponse

from api.deps import get_settings
from config import Settings
from core.ranges.parser import read_range_options
from core.ranges.responder import respond
from core.utils.filesystem import get_total_size, resolve_path
from core.utils.logger import logger

router = APIRouter()


@router.get("/{file_name}", response_model=None)
async def serve_file(
    file_name: str,
    settings: Annotated[Settings, Depends(get_settings)],
    range_header: Annotated[str | None, Header(alias="range")] = None,
) -> StreamingResponse:
    """Streams a file from the serving root, honouring the Range header.

    Args:
        file_name: Name of the file, resolved against the serving root.
        settings: Server settings for the running app.
        range_header: Raw `Range` header value, if any.

    Returns:
        A full, single-range or multipart/byteranges StreamingResponse.

    Raises:
        RangeServerError: Any parse, stat or open failure; turned into an
            HTTP error response by the app's exception handler.
    """
    file_path = resolve_path(settings.serve_root, file_name)
    # Parsing is synchronous and independent of the stat; only the stat
    # suspends.
    options = read_range_options(range_header)
    total_size = await get_total_size(file_path)

    logger.debug(
        f"[Files] {file_name}: size={total_size} ranges={options.ranges}"
    )
    return await respond(file_path, total_size, options, settings)
