"""FastAPI server configuration for the byte-range file server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from api.routes import files
from config import Settings, settings as default_settings
from core.errors import RangeServerError
from core.utils.logger import bind_context, clear_context, logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    app_settings: Settings = app.state.settings
    logger.info(
        f"startup: serving {app_settings.serve_root} on "
        f"{app_settings.host}:{app_settings.port}"
    )
    if not app_settings.serve_root.is_dir():
        logger.warning(
            f"Serving root {app_settings.serve_root} does not exist yet"
        )

    yield

    logger.info("shutdown")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Byte-Range File Server",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = app_settings

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        trace_id = request.headers.get("x-trace-id", str(uuid4()))
        bind_context(trace_id=trace_id, component="api")
        try:
            return await call_next(request)
        finally:
            clear_context()

    @app.exception_handler(RangeServerError)
    async def range_server_error_handler(
        request: Request, exc: RangeServerError
    ) -> PlainTextResponse:
        """Report the raw error message, as a 500 unless precise codes are on."""
        status_code = (
            exc.status_code if app_settings.precise_status_codes else 500
        )
        logger.error(
            f"[{type(exc).__name__}] {request.method} {request.url.path} "
            f"-> {status_code}: {exc}"
        )
        return PlainTextResponse(str(exc), status_code=status_code)

    app.include_router(files.router)

    return app


app = create_app()
