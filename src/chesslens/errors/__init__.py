"""Error types raised across chesslens.

Every error carries its diagnostic data as attributes so callers can branch on
the kind and inspect the status, field, or underlying message directly.
"""

from __future__ import annotations

from pathlib import Path

HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR = 500


class ChesslensError(Exception):
    """Base class for chesslens errors."""


class RemoteError(ChesslensError):
    """The remote service answered with a non-success status."""

    def __init__(self, status: int, url: str) -> None:
        self.status = status
        self.url = url
        super().__init__(f"Remote service returned status {status} for {url}")

    @classmethod
    def for_status(cls, status: int, url: str) -> RemoteError:
        """Pick the retryable subclass for rate limits and server errors."""
        if status == HTTP_STATUS_TOO_MANY_REQUESTS or status >= HTTP_STATUS_SERVER_ERROR:
            return RetryableRemoteError(status, url)
        return cls(status, url)


class RetryableRemoteError(RemoteError):
    """Rate-limited or server-side failure that may succeed on retry."""


class TransportError(ChesslensError):
    """The request got no HTTP answer, even after retrying."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        self.message = message
        super().__init__(f"Request to {url} failed: {message}")


class MalformedResponseError(ChesslensError):
    """An expected field is absent or has the wrong shape."""

    def __init__(self, field: str, source: str, detail: str = "") -> None:
        self.field = field
        self.source = source
        self.detail = detail
        message = f"Malformed {source} payload: field '{field}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class CacheIOError(ChesslensError):
    """Reading or writing a cache entry failed."""

    def __init__(self, key: str, path: Path, operation: str) -> None:
        self.key = key
        self.path = path
        self.operation = operation
        super().__init__(f"Cache {operation} failed for {key} at {path}")


class ConversionError(ChesslensError):
    """A game record could not be turned into a board."""


class MissingFieldError(ConversionError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Game record has no usable '{field}' field")


class InvalidEncodingError(ConversionError):
    def __init__(self, encoding: str, message: str) -> None:
        self.encoding = encoding
        self.message = message
        super().__init__(f"Invalid position encoding {encoding!r}: {message}")


class AnalysisError(ChesslensError):
    """An analyzer could not produce its report."""

    def __init__(self, analyzer_name: str, message: str) -> None:
        self.analyzer_name = analyzer_name
        self.message = message
        super().__init__(f"{analyzer_name} failed: {message}")


__all__ = [
    "AnalysisError",
    "CacheIOError",
    "ChesslensError",
    "ConversionError",
    "InvalidEncodingError",
    "MalformedResponseError",
    "MissingFieldError",
    "RemoteError",
    "RetryableRemoteError",
    "TransportError",
]
