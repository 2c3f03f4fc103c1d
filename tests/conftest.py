"""
Shared pytest fixtures for SWAPI fetcher tests.

Provides test configurations, in-memory sinks, mock HTTP clients and
reusable fixtures for unit and integration tests.
"""

import io
import threading
import pytest
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx

from swapi_fetcher.config import Config, ApiConfig, BufferConfig, set_config
from swapi_fetcher.persistence import HandoffChannel, ChannelClosed, LineSink
from swapi_fetcher.utils import CancellationToken


BASE_URL = "https://swapi.test/api/people/"


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def test_config() -> Config:
    """Create a test configuration: small buffer, timer that never fires first."""
    return Config(
        api=ApiConfig(
            start_url=BASE_URL,
            timeout=2.0,
            connect_timeout=1.0,
        ),
        buffer=BufferConfig(
            capacity=3,
            flush_interval=30.0,
        ),
    )


@pytest.fixture
def fast_timer_config(test_config) -> Config:
    """Same as test_config but with a short flush interval."""
    test_config.buffer = BufferConfig(capacity=10, flush_interval=0.05)
    return test_config


# =============================================================================
# Pipeline Primitive Fixtures
# =============================================================================

@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


@pytest.fixture
def channel(token) -> HandoffChannel:
    """Create a channel that closes with the token, as the coordinator wires it."""
    channel = HandoffChannel()
    token.on_cancel(channel.close)
    return channel


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def sink(output) -> LineSink:
    return LineSink(output)


class Collector:
    """Background receiver that drains a channel until it is closed."""

    def __init__(self, channel: HandoffChannel):
        self.items: List[Any] = []
        self._channel = channel
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self) -> None:
        while True:
            try:
                self.items.append(self._channel.receive())
            except ChannelClosed:
                return

    def start(self) -> "Collector":
        self._thread.start()
        return self

    def join(self, timeout: float = 5.0) -> None:
        self._thread.join(timeout=timeout)


@pytest.fixture
def collector(channel) -> Collector:
    """Start a background receiver on the channel."""
    return Collector(channel).start()


# =============================================================================
# Mock Data Fixtures
# =============================================================================

def make_page(names: List[str], next_url: Optional[str] = "") -> Dict[str, Any]:
    """Build a SWAPI-shaped page body."""
    return {
        "count": len(names),
        "next": next_url,
        "previous": None,
        "results": [{"name": name, "height": "172"} for name in names],
    }


@pytest.fixture
def two_pages() -> Dict[str, Dict[str, Any]]:
    """Luke and Leia on page 1, Han alone on the last page."""
    page2 = f"{BASE_URL}?page=2"
    return {
        BASE_URL: make_page(["Luke", "Leia"], page2),
        page2: make_page(["Han"], None),
    }


# =============================================================================
# Mock HTTP Client Fixtures
# =============================================================================

def mock_transport_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    """Create a real httpx client backed by an in-process handler."""
    return httpx.Client(transport=httpx.MockTransport(handler), timeout=2.0)


@pytest.fixture
def pages_client(two_pages):
    """httpx client that serves the two_pages fixture by full URL."""
    def handler(request: httpx.Request) -> httpx.Response:
        body = two_pages.get(str(request.url))
        if body is None:
            return httpx.Response(404, json={"detail": "Not found"})
        return httpx.Response(200, json=body)

    client = mock_transport_client(handler)
    yield client
    client.close()


@pytest.fixture
def endless_client():
    """httpx client serving an unbounded sequence of two-item pages."""
    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        return httpx.Response(
            200,
            json=make_page([f"p{page}-a", f"p{page}-b"], f"{BASE_URL}?page={page + 1}"),
        )

    client = mock_transport_client(handler)
    yield client
    client.close()


@pytest.fixture
def mock_httpx_client():
    """Create a MagicMock standing in for httpx.Client."""
    return MagicMock(spec=httpx.Client)


@pytest.fixture
def mock_successful_response(two_pages):
    """Create a mock successful HTTP response for the first page."""
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = two_pages[BASE_URL]
    mock_response.raise_for_status.return_value = None
    return mock_response


# =============================================================================
# Cleanup Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def cleanup_global_state():
    """Reset the global config after each test."""
    yield
    set_config(None)
