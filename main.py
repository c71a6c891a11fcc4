"""Command-line entrypoint for the byte-range file server.

Serves every file under the configured serving root at `GET /<file_name>`,
with single and multi-range (multipart/byteranges) partial content support.
Host, port and the serving root come from the environment or `.env` (see
`config.Settings`).

Usage:
    uv run python main.py
"""

from __future__ import annotations

import uvicorn

from api.server import app
from config import settings


def main() -> None:
    """Run the server under uvicorn with the configured listener."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
