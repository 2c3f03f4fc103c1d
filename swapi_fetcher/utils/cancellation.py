"""
Single-shot cancellation token shared by the fetcher and buffering stages.
"""

import threading
from typing import Callable, List, Optional

from swapi_fetcher.utils.logging_config import get_logger

logger = get_logger("cancellation")


class CancellationToken:
    """
    Cooperative, broadcast cancellation.

    cancel() flips the token once; later calls are no-ops. Callbacks
    registered with on_cancel() run exactly once, on the thread that
    cancelled first (or immediately if already cancelled).
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "stop requested") -> bool:
        """
        Cancel the token.

        Returns:
            True if this call cancelled it, False if it was already cancelled
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        logger.info(f"Cancellation requested: {reason}")
        for callback in callbacks:
            callback()
        return True

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register a callback to run when the token is cancelled."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout expires. Returns is_cancelled."""
        return self._event.wait(timeout=timeout)

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason
