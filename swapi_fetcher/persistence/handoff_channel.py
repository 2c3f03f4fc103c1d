"""
Zero-capacity (rendezvous) channel between the fetcher and buffering stages.

A send only returns once a receiver has taken the item, so the fetcher can
never get ahead of the buffer worker.
"""

import threading
from queue import Empty
from typing import Any, Optional


class ChannelClosed(Exception):
    """Raised by receive() once the channel has been closed."""
    pass


class HandoffChannel:
    """
    Thread-safe rendezvous channel.

    Usage:
        channel = HandoffChannel()

        # Producer thread
        if not channel.send("Luke"):
            return  # closed, item was not delivered

        # Consumer thread
        try:
            name = channel.receive(timeout=0.25)
        except Empty:
            ...  # nothing arrived in time
        except ChannelClosed:
            ...  # shutting down
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._item: Any = None
        self._has_item = False
        self._taken = 0
        self._closed = False

    def send(self, item: Any) -> bool:
        """
        Hand an item to the receiver, blocking until it is taken.

        Returns:
            True once the item was received, False if the channel closed first
        """
        with self._cond:
            # Wait for any previous offer to clear
            while self._has_item and not self._closed:
                self._cond.wait()
            if self._closed:
                return False

            self._item = item
            self._has_item = True
            ticket = self._taken + 1
            self._cond.notify_all()

            while self._taken < ticket and not self._closed:
                self._cond.wait()

            if self._taken >= ticket:
                return True

            # Closed before anyone took it: withdraw the offer
            self._item = None
            self._has_item = False
            return False

    def receive(self, timeout: Optional[float] = None) -> Any:
        """
        Take the next item, blocking until one is offered.

        Args:
            timeout: Maximum seconds to wait (None = wait forever)

        Raises:
            queue.Empty: if no item was offered before the timeout
            ChannelClosed: if the channel is closed
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._has_item or self._closed, timeout=timeout
            )
            if self._closed:
                raise ChannelClosed()
            if not ready:
                raise Empty

            item = self._item
            self._item = None
            self._has_item = False
            self._taken += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        """Close the channel, waking every blocked sender and receiver."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed
