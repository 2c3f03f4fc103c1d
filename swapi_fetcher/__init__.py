"""
SWAPI Fetcher

Walks a paginated HTTP collection (the SWAPI people endpoint by default),
batches the retrieved names in memory and prints them in batches.

Usage:
    # From command line
    python -m swapi_fetcher.main

    # Programmatic usage
    from swapi_fetcher import FetcherCoordinator
    coordinator = FetcherCoordinator()
    coordinator.start()
    coordinator.wait()
    stats = coordinator.stop()

Architecture:
    PeopleFetcher (thread) -- HandoffChannel (rendezvous) --> BufferWorker (thread)
                                                                   ↓
                                                      ItemBuffer → LineSink (stdout)

Flush triggers:
    buffer full, flush timer, final flush on cancellation
"""

from swapi_fetcher.config import get_config, set_config, load_config, Config
from swapi_fetcher.coordination import FetcherCoordinator
from swapi_fetcher.workers import (
    PeopleFetcher,
    BufferWorker,
    Page,
    FetchStats,
    FlushStats,
)
from swapi_fetcher.persistence import (
    ItemBuffer,
    HandoffChannel,
    ChannelClosed,
    LineSink,
)
from swapi_fetcher.utils import CancellationToken

__version__ = "0.1.0"

__all__ = [
    # Config
    "get_config",
    "set_config",
    "load_config",
    "Config",

    # Coordination
    "FetcherCoordinator",

    # Workers
    "PeopleFetcher",
    "BufferWorker",
    "Page",
    "FetchStats",
    "FlushStats",

    # Persistence
    "ItemBuffer",
    "HandoffChannel",
    "ChannelClosed",
    "LineSink",

    # Utils
    "CancellationToken",
]
