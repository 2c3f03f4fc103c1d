"""
Buffer Worker
Receives names from the fetcher, batches them and flushes the batch to the
output sink when the buffer is full, when the flush timer fires, and once
more on cancellation.
"""

import threading
import time
from dataclasses import dataclass
from queue import Empty
from typing import Optional

from swapi_fetcher.config import get_config, Config
from swapi_fetcher.utils.cancellation import CancellationToken
from swapi_fetcher.persistence.handoff_channel import HandoffChannel, ChannelClosed
from swapi_fetcher.persistence.item_buffer import ItemBuffer
from swapi_fetcher.persistence.line_sink import LineSink
from swapi_fetcher.utils.logging_config import get_logger

logger = get_logger("buffer_worker")


@dataclass
class FlushStats:
    items_received: int = 0
    flushes: int = 0
    items_flushed: int = 0
    write_failures: int = 0


class BufferWorker:
    """
    Buffering stage of the pipeline. Owns its ItemBuffer exclusively.
    """

    def __init__(
        self,
        channel: HandoffChannel,
        token: CancellationToken,
        sink: Optional[LineSink] = None,
        config: Optional[Config] = None,
        buffer: Optional[ItemBuffer] = None,
        clock=time.monotonic,
    ):
        """
        Args:
            channel: Rendezvous channel from the fetcher
            token: Shared cancellation token
            sink: Output sink (stdout if None)
            config: Config object (uses global config if None)
            buffer: Buffer to fill (built from config.buffer.capacity if None)
            clock: Monotonic time source
        """
        self._config = config or get_config()
        self._channel = channel
        self._token = token
        self._sink = sink or LineSink()
        self._buffer = buffer or ItemBuffer(capacity=self._config.buffer.capacity)
        self._interval = self._config.buffer.flush_interval
        self._clock = clock
        self.done = threading.Event()
        self.stats = FlushStats()

    @property
    def buffer(self) -> ItemBuffer:
        return self._buffer

    def insert(self, name: str) -> None:
        """Add a name, flushing first if the buffer is already full."""
        self.stats.items_received += 1
        if self._buffer.is_full():
            self.flush()
        self._buffer.put(name)

    def flush(self) -> int:
        """
        Write out and clear the buffer. No-op when empty.

        Returns:
            Number of items written
        """
        if self._buffer.empty():
            return 0

        names = self._buffer.swap()
        failures_before = self._sink.write_failures
        written = self._sink.write_items(names)

        self.stats.flushes += 1
        self.stats.items_flushed += written
        self.stats.write_failures += self._sink.write_failures - failures_before
        return written

    def run(self) -> FlushStats:
        """
        Event loop: cancellation, item arrival and the flush timer.

        Sets self.done after the final flush.
        """
        next_tick = self._clock() + self._interval

        try:
            while not self._token.is_cancelled:
                remaining = next_tick - self._clock()
                if remaining <= 0:
                    self.flush()
                    next_tick = self._clock() + self._interval
                    continue

                try:
                    name = self._channel.receive(timeout=remaining)
                except Empty:
                    continue
                except ChannelClosed:
                    break

                self.insert(name)

            self.flush()
            logger.info(
                f"Buffer worker stopped. Total: {self.stats.items_flushed} items "
                f"in {self.stats.flushes} flushes"
            )
            return self.stats
        finally:
            self.done.set()
