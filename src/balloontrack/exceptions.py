"""Custom exceptions for balloontrack."""

from __future__ import annotations


class BalloonTrackError(Exception):
    """Base exception for all balloontrack errors."""


class BalloonTrackConnectionError(BalloonTrackError):
    """Raised when a data source cannot be reached."""


class BalloonTrackTimeoutError(BalloonTrackError):
    """Raised when a request to a data source times out."""


class BalloonTrackAPIError(BalloonTrackError):
    """Raised when a data source returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class BalloonTrackValidationError(BalloonTrackError):
    """Raised when response data cannot be decoded or fails model validation."""


class BalloonTrackConfigError(BalloonTrackError):
    """Raised when configuration values are missing or invalid."""


class DegenerateVectorError(BalloonTrackError, ValueError):
    """Raised when an angle is requested for a zero-length direction vector."""
