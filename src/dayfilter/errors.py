"""
Exception types for dayfilter.

Fetch errors are raised by the JSON fetcher and swallowed (and logged) by the
business day resolver, which degrades to weekend-only detection.
"""

from typing import Optional


class DayFilterError(Exception):
    """Base class for all dayfilter errors."""
    pass


class ConfigurationError(DayFilterError):
    """Raised when a setting has an invalid value."""
    pass


class FetchError(DayFilterError):
    """Base class for failures while fetching a JSON document."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """Raised when the HTTP request itself fails (DNS, connection, bad URL)."""
    pass


class DecodeError(FetchError):
    """
    Raised when a response body is not valid JSON for the requested shape.

    The message embeds the requested URL and the raw body so upstream API
    drift can be diagnosed from the log line alone.
    """

    def __init__(
        self,
        url: str,
        body: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None
    ):
        message = f"Not a valid JSON response from {url} . CONTENT: {body}"
        super().__init__(message, url)
        self.body = body
        self.status_code = status_code
        self.reason = reason


class LookbackExhaustedError(DayFilterError):
    """Raised when no business day is found within the lookback limit."""

    def __init__(self, max_lookback_days: int):
        super().__init__(
            f"No business day found in the last {max_lookback_days} days"
        )
        self.max_lookback_days = max_lookback_days
