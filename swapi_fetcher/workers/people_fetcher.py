"""
People Fetcher for SWAPI
Walks the paginated people collection by following the "next" cursor and
hands each person's name to the buffering stage.
"""

import httpx
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from swapi_fetcher.config import get_config, Config
from swapi_fetcher.utils.cancellation import CancellationToken
from swapi_fetcher.persistence.handoff_channel import HandoffChannel
from swapi_fetcher.utils.logging_config import get_logger
from swapi_fetcher.utils.exceptions import (
    SwapiFetcherError,
    SwapiAPIError,
    NetworkTimeoutError,
    NetworkError,
    ResponseDecodeError,
)

logger = get_logger("people_fetcher")


@dataclass
class Page:
    """One decoded page of the collection."""
    names: List[str] = field(default_factory=list)
    next: str = ""

    @property
    def is_last(self) -> bool:
        return not self.next

    @classmethod
    def from_dict(cls, data: Any, url: Optional[str] = None) -> "Page":
        """
        Decode a {"next": ..., "results": [{"name": ...}, ...]} body.

        Raises:
            ResponseDecodeError: if the body is not shaped like a page
        """
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"expected object, got {type(data).__name__}", url=url)

        next_url = data.get("next") or ""
        if not isinstance(next_url, str):
            raise ResponseDecodeError(f"'next' must be a string, got {type(next_url).__name__}", url=url)

        results = data.get("results")
        if results is None:
            results = []
        if not isinstance(results, list):
            raise ResponseDecodeError(f"'results' must be a list, got {type(results).__name__}", url=url)

        names = []
        for result in results:
            if not isinstance(result, dict):
                raise ResponseDecodeError("result entries must be objects", url=url)
            name = result.get("name", "")
            if not isinstance(name, str):
                raise ResponseDecodeError(f"'name' must be a string, got {type(name).__name__}", url=url)
            names.append(name)

        return cls(names=names, next=next_url)


@dataclass
class FetchStats:
    pages_fetched: int = 0
    items_emitted: int = 0
    failures: int = 0


class PeopleFetcher:
    """
    Fetch stage of the pipeline.

    Retries a failing page immediately and forever; stops on an empty page,
    on the last page, or when the cancellation token is set. End of data
    cancels the token so the rest of the pipeline shuts down.
    """

    def __init__(
        self,
        channel: HandoffChannel,
        token: CancellationToken,
        timeout: Optional[float] = None,
        config: Optional[Config] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the people fetcher.

        Args:
            channel: Rendezvous channel to the buffering stage
            token: Shared cancellation token
            timeout: Request timeout in seconds (uses config if None)
            config: Config object (uses global config if None)
            client: Preconfigured httpx client, owned and closed by the caller.
                Built from config (and owned by the fetcher) if None
        """
        self._config = config or get_config()
        self._channel = channel
        self._token = token
        self.stats = FetchStats()

        if timeout is None:
            timeout = self._config.api.timeout
        self._timeout = timeout

        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(
            timeout=httpx.Timeout(timeout, connect=self._config.api.connect_timeout),
            follow_redirects=True,
            headers={
                "User-Agent": self._config.api.user_agent,
                "Accept": "application/json",
            }
        )

    def close(self):
        """Close HTTP client if this fetcher created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def fetch_page(self, url: str) -> Page:
        """
        Fetch and decode a single page.

        Raises:
            SwapiAPIError: non-success status
            NetworkTimeoutError: request timed out
            NetworkError: any other transport failure
            ResponseDecodeError: body is not a page
        """
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SwapiAPIError(
                f"Status code is not success: {e.response.status_code}",
                status_code=e.response.status_code,
                url=url,
                response_body=e.response.text,
            ) from e
        except httpx.TimeoutException as e:
            raise NetworkTimeoutError(url=url, timeout=self._timeout) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch {url}: {e}", url=url) from e

        try:
            data: Dict[str, Any] = response.json()
        except ValueError as e:
            raise ResponseDecodeError(str(e), url=url) from e

        return Page.from_dict(data, url=url)

    def run(self, start_url: Optional[str] = None) -> FetchStats:
        """
        Walk the collection until it is exhausted or the token is cancelled.

        Args:
            start_url: First page URL (uses config if None)

        Returns:
            FetchStats for this run
        """
        url = start_url or self._config.api.start_url

        try:
            while not self._token.is_cancelled:
                logger.info(f"Fetching url {url}")
                try:
                    page = self.fetch_page(url)
                except SwapiFetcherError as e:
                    self.stats.failures += 1
                    logger.error(f"Failed to get response from api: {e}")
                    continue

                self.stats.pages_fetched += 1

                if not page.names:
                    logger.info("Empty page, no more data")
                    self._token.cancel("empty page")
                    return self.stats

                for name in page.names:
                    if not self._channel.send(name):
                        logger.info("Channel closed, dropping remaining items of page")
                        return self.stats
                    self.stats.items_emitted += 1

                if page.is_last:
                    logger.info(f"Last page reached after {self.stats.pages_fetched} pages")
                    self._token.cancel("collection exhausted")
                    return self.stats

                url = page.next

            return self.stats
        finally:
            self.close()
