"""
Line-oriented output sink.

Writes each flushed item as one line to a text stream (stdout by default).
Writes are best-effort: a failure on one item is logged and the rest of the
batch is still attempted.
"""

import sys
from typing import Iterable, Optional, TextIO

from swapi_fetcher.utils.logging_config import get_logger
from swapi_fetcher.utils.exceptions import SinkWriteError

logger = get_logger("line_sink")


class LineSink:
    """
    Writes batches of item names to a text stream, one per line.

    Usage:
        sink = LineSink()              # stdout
        sink = LineSink(io.StringIO()) # capture
        written = sink.write_items(["Luke", "Leia"])
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Target text stream. If None, sys.stdout is looked up at
                    write time so redirection and capture are honoured.
        """
        self._stream = stream
        self._items_written = 0
        self._write_failures = 0
        self._batches_written = 0

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write_items(self, items: Iterable[str]) -> int:
        """
        Write a batch of items in order.

        Args:
            items: Item names to write

        Returns:
            Number of items successfully written
        """
        stream = self.stream
        written = 0

        for item in items:
            try:
                stream.write(f"{item}\n")
                written += 1
            except (OSError, ValueError) as e:
                self._write_failures += 1
                logger.error(str(SinkWriteError(item, str(e))))

        try:
            stream.flush()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to flush output stream: {e}")

        self._items_written += written
        self._batches_written += 1
        logger.debug(f"Wrote {written} items to output")
        return written

    @property
    def items_written(self) -> int:
        """Total number of items written."""
        return self._items_written

    @property
    def write_failures(self) -> int:
        """Total number of items that failed to write."""
        return self._write_failures

    @property
    def batches_written(self) -> int:
        """Total number of write_items() calls."""
        return self._batches_written
