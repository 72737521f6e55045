"""Pytest configuration for Kraken client tests."""

import asyncio
import sys
from pathlib import Path
from typing import Callable, List, Optional

import httpx
import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from kraken_client.client.utils import NonceGenerator  # noqa: E402

# base64("super-secret-signing-key")
TEST_API_KEY = "K"
TEST_API_SECRET = "c3VwZXItc2VjcmV0LXNpZ25pbmcta2V5"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self._respond = handler or (lambda request: httpx.Response(200, json={"error": [], "result": {}}))
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)


class FixedClock:
    """Nanosecond clock returning a scripted sequence of readings."""

    def __init__(self, *readings_ns: int):
        self._readings = list(readings_ns)

    def __call__(self) -> int:
        if len(self._readings) > 1:
            return self._readings.pop(0)
        return self._readings[0]


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def fixed_nonce():
    """Nonce generator frozen at 1700000000.123456 s (first value ``1700000000123456``)."""
    return NonceGenerator(clock=FixedClock(1_700_000_000_123_456_000))


@pytest.fixture
def http_clients():
    """Collects the AsyncClients a test builds and closes any left open."""
    clients: List[httpx.AsyncClient] = []
    yield clients
    open_clients = [client for client in clients if not client.is_closed]
    if open_clients:
        # private loop; leaves the current event loop untouched
        loop = asyncio.new_event_loop()
        try:
            for client in open_clients:
                loop.run_until_complete(client.aclose())
        finally:
            loop.close()
