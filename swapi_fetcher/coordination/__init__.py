"""
Coordination module for the SWAPI fetcher.
"""

from swapi_fetcher.coordination.coordinator import FetcherCoordinator

__all__ = [
    "FetcherCoordinator",
]
