"""Logging configuration and per-request context binding."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger

from config import settings

trace_id_ctx: ContextVar[str | None] = ContextVar("trace_id", default=None)
component_ctx: ContextVar[str | None] = ContextVar("component", default=None)

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<8}</level> | "
    "trace=<cyan>{extra[trace_id]}</cyan> "
    "comp=<cyan>{extra[component]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Routes uvicorn's stdlib log records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk past logging internals so the record points at the caller.
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _attach_request_context(record) -> None:
    record["extra"].setdefault("trace_id", trace_id_ctx.get())
    record["extra"].setdefault("component", component_ctx.get())


def setup_logger(
    level: str | None = None,
    log_dir: Path | None = None,
    to_file: bool | None = None,
) -> None:
    """Configure Loguru sinks for the server.

    A colour console sink always; a rotated JSON file sink under `log_dir`
    when file logging is on. uvicorn's own loggers are redirected here so
    access and error lines carry the request trace id too.
    """
    level = level or settings.log_level
    log_dir = log_dir or settings.log_dir
    to_file = settings.log_to_file if to_file is None else to_file

    logger.remove()
    logger.configure(patcher=_attach_request_context)
    logger.add(
        sys.stderr,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
        format=_CONSOLE_FORMAT,
    )

    if to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / "server.log"),
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            serialize=True,
            enqueue=True,
            backtrace=True,
            diagnose=False,
        )

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [InterceptHandler()]
        uvicorn_logger.propagate = False


def bind_context(
    *, trace_id: str | None = None, component: str | None = None
) -> None:
    """Bind the trace id and component for the current request."""
    if trace_id is not None:
        trace_id_ctx.set(trace_id)
    if component is not None:
        component_ctx.set(component)


def clear_context() -> None:
    trace_id_ctx.set(None)
    component_ctx.set(None)


setup_logger()
