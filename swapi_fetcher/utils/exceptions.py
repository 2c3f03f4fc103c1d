"""
Custom exceptions for the SWAPI fetcher.
"""

from typing import Optional


class SwapiFetcherError(Exception):
    """Base exception for SWAPI fetcher errors."""
    pass


class SwapiAPIError(SwapiFetcherError):
    """Non-success response from the API."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None, response_body: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.response_body = response_body
        super().__init__(message)


class NetworkTimeoutError(SwapiFetcherError):
    """Network request timed out."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url
        self.timeout = timeout
        message = f"Request timed out after {timeout}s" if timeout else "Request timed out"
        super().__init__(message)


class NetworkError(SwapiFetcherError):
    """Transport level failure (connection refused, DNS, reset...)."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class ResponseDecodeError(SwapiFetcherError):
    """Response body is not valid JSON or not shaped like a page."""

    def __init__(self, reason: str, url: Optional[str] = None):
        self.url = url
        self.reason = reason
        message = "Failed to decode response"
        if url:
            message += f" from {url}"
        super().__init__(f"{message}: {reason}")


class SinkWriteError(SwapiFetcherError):
    """Error writing a single item to the output sink."""

    def __init__(self, item: str, reason: Optional[str] = None):
        self.item = item
        message = f"Failed to write item: {item!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


class BufferFullError(SwapiFetcherError):
    """Insert attempted on a buffer already at capacity."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Buffer is full (capacity={capacity})")


class ConfigError(SwapiFetcherError):
    """Invalid configuration."""
    pass


class CoordinatorStateError(SwapiFetcherError):
    """Lifecycle method called in the wrong state."""
    pass
