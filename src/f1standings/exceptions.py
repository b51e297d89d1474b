"""Custom exceptions for the season standings service."""

from __future__ import annotations


class OpenF1Error(Exception):
    """Base exception for all errors raised while talking to the OpenF1 API."""


class TransientNetworkError(OpenF1Error):
    """Raised for network-level failures that are worth retrying."""


class OpenF1ConnectionError(TransientNetworkError):
    """Raised when the client cannot connect to the API."""


class OpenF1TimeoutError(TransientNetworkError):
    """Raised when a request to the API times out."""


class OpenF1APIError(OpenF1Error):
    """Raised when the API returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class RateLimitedError(OpenF1APIError):
    """Raised on HTTP 429, and when the retry budget runs out on 429s."""

    def __init__(self, message: str = "Too Many Requests") -> None:
        super().__init__(status_code=429, message=message)


class PermanentHTTPError(OpenF1APIError):
    """Raised for any non-2xx response other than 429."""


class OpenF1ValidationError(OpenF1Error):
    """Raised when API response data fails model validation."""


class MissingCompetitorRecord(Exception):
    """A result references a driver number absent from the session roster."""

    def __init__(self, session_key: int | None, driver_number: int | None) -> None:
        self.session_key = session_key
        self.driver_number = driver_number
        super().__init__(
            f"Driver #{driver_number} not in roster of session {session_key}",
        )


class SeasonDataError(Exception):
    """Raised when the season session list cannot be loaded."""
