"""Error kinds raised inside the client.

Every one of them is caught by the controller at its point of origin and
turned into a single toast; none is meant to reach the top level.
"""

from __future__ import annotations


class ShortenerError(Exception):
    """Base class; `message` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ShortenerError):
    """Empty or malformed input; never reaches the network."""


class ApiError(ShortenerError):
    """The service answered with a non-2xx status (or an unusable body)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ApiError):
    """HTTP 404 for a short code."""

    def __init__(self, message: str = "Short code not found or has expired") -> None:
        super().__init__(message, status_code=404)


class NetworkError(ShortenerError):
    """No response was obtained at all."""


class ClipboardError(ShortenerError):
    pass


class FormatError(ShortenerError):
    """A timestamp could not be parsed."""
