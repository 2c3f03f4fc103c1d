"""
FetcherCoordinator - Wires the fetch and buffering stages to the process lifetime.

Pipeline:
    PeopleFetcher --(HandoffChannel, rendezvous)--> BufferWorker --> LineSink

Shutdown:
    Both stages share one CancellationToken. Cancelling it (stop request or
    end of data) closes the channel, the buffer worker performs its final
    flush and sets its completion event, which stop() waits on.
"""

from threading import Thread
from typing import Optional, Dict, Any

import httpx
import time

from swapi_fetcher.config import Config, get_config
from swapi_fetcher.persistence import HandoffChannel, ItemBuffer, LineSink
from swapi_fetcher.workers import PeopleFetcher, BufferWorker
from swapi_fetcher.utils.cancellation import CancellationToken
from swapi_fetcher.utils.exceptions import CoordinatorStateError
from swapi_fetcher.utils.logging_config import get_logger

logger = get_logger("coordinator")


class FetcherCoordinator:
    """
    Starts and stops the two pipeline stages.

    Usage:
        coordinator = FetcherCoordinator()
        coordinator.start()
        coordinator.wait()           # until stop requested or data exhausted
        stats = coordinator.stop()   # final flush has happened
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        sink: Optional[LineSink] = None,
        client: Optional[httpx.Client] = None,
        start_url: Optional[str] = None,
    ):
        """
        Initialize the coordinator with configuration.

        Args:
            config: Configuration object. If None, uses global config.
            sink: Output sink. If None, writes to stdout.
            client: httpx client for the fetcher. If None, one is built from config.
            start_url: First page URL. If None, uses config.api.start_url.
        """
        self._config = config or get_config()
        self._start_url = start_url or self._config.api.start_url

        self._token = CancellationToken()
        self._channel = HandoffChannel()
        self._token.on_cancel(self._channel.close)

        self._sink = sink or LineSink()
        self._buffer = ItemBuffer(capacity=self._config.buffer.capacity)

        self._fetcher = PeopleFetcher(
            channel=self._channel,
            token=self._token,
            config=self._config,
            client=client,
        )
        self._buffer_worker = BufferWorker(
            channel=self._channel,
            token=self._token,
            sink=self._sink,
            config=self._config,
            buffer=self._buffer,
        )

        self._fetcher_thread: Optional[Thread] = None
        self._buffer_thread: Optional[Thread] = None
        self._started_at: Optional[float] = None
        self._stats: Optional[Dict[str, Any]] = None

    def start(self) -> None:
        """Launch the fetcher and buffer worker threads."""
        if self._started_at is not None:
            raise CoordinatorStateError("Coordinator already started")
        if self._token.is_cancelled:
            raise CoordinatorStateError("Coordinator already stopped")

        self._started_at = time.time()

        self._buffer_thread = Thread(
            target=self._buffer_worker.run,
            name="BufferWorker",
        )
        # Daemon: an in-flight request must not hold process exit after stop()
        self._fetcher_thread = Thread(
            target=self._fetcher.run,
            kwargs={"start_url": self._start_url},
            name="PeopleFetcher",
            daemon=True,
        )

        self._buffer_thread.start()
        self._fetcher_thread.start()

        logger.info(
            f"Pipeline started: capacity={self._config.buffer.capacity}, "
            f"flush_interval={self._config.buffer.flush_interval}s, url={self._start_url}"
        )

    def request_stop(self, reason: str = "stop requested") -> bool:
        """
        Cancel the pipeline without waiting. Safe to call from any thread.

        Returns:
            True if this call triggered cancellation
        """
        return self._token.cancel(reason)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until a stop was requested or the fetcher ran out of data.

        Returns:
            True if the pipeline is cancelled, False on timeout
        """
        return self._token.wait(timeout=timeout)

    def stop(self, timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Cancel the pipeline and wait for the final flush.

        Calling stop() again returns the same statistics without flushing twice.

        Args:
            timeout: Maximum seconds to wait for the buffer worker (None = forever)

        Returns:
            Dict with run statistics
        """
        self._token.cancel()

        if self._stats is not None:
            return self._stats

        if self._buffer_thread is None:
            logger.info("Stop called before start, nothing to flush")
            self._fetcher.close()
            self._stats = self._collect_stats()
            return self._stats

        if not self._buffer_worker.done.wait(timeout=timeout):
            logger.warning(f"Buffer worker did not finish within {timeout}s")
            return self._collect_stats()

        self._buffer_thread.join()
        self._stats = self._collect_stats()

        logger.info(f"Pipeline stopped in {self._stats['elapsed_seconds']:.2f}s")
        logger.info(f"Stats: {self._stats}")
        return self._stats

    def _collect_stats(self) -> Dict[str, Any]:
        fetch = self._fetcher.stats
        flush = self._buffer_worker.stats
        elapsed = time.time() - self._started_at if self._started_at else 0.0
        return {
            "pages_fetched": fetch.pages_fetched,
            "items_emitted": fetch.items_emitted,
            "fetch_failures": fetch.failures,
            "items_received": flush.items_received,
            "items_flushed": flush.items_flushed,
            "flushes": flush.flushes,
            "write_failures": flush.write_failures,
            "stop_reason": self._token.reason,
            "elapsed_seconds": elapsed,
        }

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def buffer(self) -> ItemBuffer:
        return self._buffer

    @property
    def is_running(self) -> bool:
        return self._started_at is not None and not self._buffer_worker.done.is_set()
