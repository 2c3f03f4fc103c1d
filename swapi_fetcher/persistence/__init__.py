"""
Persistence module for the SWAPI fetcher.
"""

from swapi_fetcher.persistence.item_buffer import ItemBuffer
from swapi_fetcher.persistence.handoff_channel import HandoffChannel, ChannelClosed
from swapi_fetcher.persistence.line_sink import LineSink

__all__ = [
    "ItemBuffer",
    "HandoffChannel",
    "ChannelClosed",
    "LineSink",
]
