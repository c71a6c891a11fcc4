"""Configuration settings for the byte-range file server."""

from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BOUNDARY = "3d6b6a416f9b5"
DEFAULT_CHUNK_SIZE = 64 * 1024

# RFC 2046 bchars, without the space (which would need quoting in the
# Content-Type parameter).
BOUNDARY_PATTERN = r"^[0-9A-Za-z'()+_,\-./:=?]{1,70}$"


class Settings(BaseSettings):
    """Serving root, listener, multipart policy and logging options."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    #  Listener
    serve_dir: Path = Field(default=Path("data"), description="Serving root")
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3000, description="Bind port")

    #  Streaming
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)

    #  Multipart framing
    multipart_boundary: str = Field(
        default=DEFAULT_BOUNDARY,
        pattern=BOUNDARY_PATTERN,
        description="Boundary token shared by every multipart response",
    )
    random_boundary: bool = Field(
        default=False,
        description="Generate a fresh boundary per response instead",
    )
    multipart_closing_boundary: bool = Field(
        default=False,
        description="Emit the terminating --boundary-- after the last part",
    )

    #  Strictness
    strict_ranges: bool = Field(
        default=False,
        description="Reject ranges with start > end or end >= file size",
    )
    precise_status_codes: bool = Field(
        default=False,
        description="Map errors to 403/404/416 instead of a uniform 500",
    )

    #  Logging
    log_level: Literal[
        "TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"
    ] = "INFO"
    log_dir: Path = Field(default=Path("logs"))
    log_to_file: bool = True

    @computed_field
    @property
    def serve_root(self) -> Path:
        """Absolute serving root that resolved paths must stay inside."""
        return self.serve_dir.expanduser().resolve()


settings = Settings()
