"""
Utility modules for the SWAPI fetcher.
"""

from swapi_fetcher.utils.logging_config import get_logger, set_level, setup_file_logging
from swapi_fetcher.utils.cancellation import CancellationToken
from swapi_fetcher.utils.exceptions import (
    SwapiFetcherError,
    SwapiAPIError,
    NetworkTimeoutError,
    NetworkError,
    ResponseDecodeError,
    SinkWriteError,
    BufferFullError,
    ConfigError,
    CoordinatorStateError,
)

__all__ = [
    "get_logger",
    "set_level",
    "setup_file_logging",
    "CancellationToken",
    "SwapiFetcherError",
    "SwapiAPIError",
    "NetworkTimeoutError",
    "NetworkError",
    "ResponseDecodeError",
    "SinkWriteError",
    "BufferFullError",
    "ConfigError",
    "CoordinatorStateError",
]
