"""Pydantic models describing byte-range requests."""

from pydantic import BaseModel, ConfigDict, Field

# Largest offset a 64-bit platform can seek to.
MAX_OFFSET = 2**63 - 1


class ByteRange(BaseModel):
    """An inclusive `[start, end]` window of byte offsets into a file.

    `start <= end` and `end < total` are deliberately not enforced here;
    see `core.ranges.responder.validate_ranges` for the strict check.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, le=MAX_OFFSET)
    end: int = Field(..., ge=0, le=MAX_OFFSET)

    def content_range(self, total: int, unit: str = "bytes") -> str:
        """Render the `Content-Range` value for this window."""
        return f"{unit} {self.start}-{self.end}/{total}"

    def available_length(self, total: int) -> int:
        """Number of bytes a read of this window actually yields."""
        stop = min(self.end, total - 1)
        return max(0, stop - self.start + 1)


class RangeRequestOptions(BaseModel):
    """Per-request options; `ranges=None` means serve the full body."""

    model_config = ConfigDict(frozen=True)

    ranges: list[ByteRange] | None = None

    @property
    def is_partial(self) -> bool:
        return self.ranges is not None

    @property
    def is_multipart(self) -> bool:
        return self.ranges is not None and len(self.ranges) != 1
