"""
Bounded item buffer with atomic swap, owned by a single worker thread.
"""

from typing import List

from swapi_fetcher.utils.exceptions import BufferFullError


class ItemBuffer:
    """
    An ordered, bounded buffer of item names.

    Only the buffering worker touches it, so there is no lock. The worker
    checks is_full() before each put() and flushes first when it is.

    Usage:
        buffer = ItemBuffer(capacity=10)

        if buffer.is_full():
            items = buffer.swap()  # Returns list, buffer is now empty
            # Write items...
        buffer.put(name)
    """

    def __init__(self, capacity: int = 10):
        """
        Initialize the buffer.

        Args:
            capacity: Maximum number of items held at once (default 10)
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._items: List[str] = []
        self._capacity = capacity
        self._high_water = 0

    def put(self, item: str) -> None:
        """
        Append an item.

        Raises:
            BufferFullError: if the buffer already holds capacity items
        """
        if len(self._items) >= self._capacity:
            raise BufferFullError(self._capacity)
        self._items.append(item)
        if len(self._items) > self._high_water:
            self._high_water = len(self._items)

    def is_full(self) -> bool:
        """Check if buffer has reached capacity."""
        return len(self._items) >= self._capacity

    def empty(self) -> bool:
        """Check if buffer holds no items."""
        return not self._items

    def swap(self) -> List[str]:
        """
        Detach the current contents and return them in insertion order.
        The buffer is immediately empty and ready for new items.

        Returns:
            List of all items that were in the buffer
        """
        old_items = self._items
        self._items = []
        return old_items

    def snapshot(self) -> List[str]:
        """Return a copy of the current contents without detaching them."""
        return list(self._items)

    @property
    def capacity(self) -> int:
        """Maximum number of items."""
        return self._capacity

    @property
    def high_water(self) -> int:
        """Largest number of items held at any point."""
        return self._high_water

    def __len__(self) -> int:
        """Return current size of buffer."""
        return len(self._items)
