"""
Workers module - the two pipeline stages.

Exports:
    - PeopleFetcher: Walks the paginated API and emits names
    - BufferWorker: Batches names and flushes them to the output sink
    - Page, FetchStats, FlushStats
"""

from swapi_fetcher.workers.people_fetcher import PeopleFetcher, Page, FetchStats
from swapi_fetcher.workers.buffer_worker import BufferWorker, FlushStats

__all__ = [
    "PeopleFetcher",
    "Page",
    "FetchStats",
    "BufferWorker",
    "FlushStats",
]
