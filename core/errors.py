"""Custom Exception Hierarchy for the byte-range file server.

Every failure a request can hit derives from `RangeServerError`. By default
they all surface as HTTP 500 with the message as the body; `status_code` is
only consulted when precise status codes are enabled.
"""


class RangeServerError(Exception):
    """Base exception for all file server errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        context: dict | None = None,
    ):
        super().__init__(message)
        self.original_error = original_error
        self.context = context or {}


class RangeHeaderError(RangeServerError):
    """Raised when the Range header cannot be turned into byte ranges."""

    status_code = 416


class MalformedHeaderError(RangeHeaderError):
    """Raised when the header is not of the form `<unit>=<ranges>`."""


class UnsupportedUnitError(RangeHeaderError):
    """Raised when the range unit is anything other than `bytes`."""


class MalformedRangeError(RangeHeaderError):
    """Raised when a range token is not `<digits>-<digits>`."""


class RangeNotSatisfiableError(RangeServerError):
    """Raised in strict mode when a range does not fit the file."""

    status_code = 416


class PathTraversalError(RangeServerError):
    """Raised when a requested name resolves outside the serving root."""

    status_code = 403


class StatFailureError(RangeServerError):
    """Raised when file metadata cannot be read."""

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if isinstance(self.original_error, FileNotFoundError):
            return 404
        return 500


class StreamFailureError(RangeServerError):
    """Raised when file bytes cannot be opened or read."""
