"""
Shared fixtures.
"""

import httpx
import pytest
import pytest_asyncio

from pumpnotifier.feed.client import PumpFunClient
from pumpnotifier.monitor.rate import ExchangeRateCache
from pumpnotifier.monitor.state import MonitorState

from tests.helpers import FakeSink, FakeUpstream


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def sink():
    return FakeSink()


@pytest_asyncio.fixture
async def feed(upstream):
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(upstream.handler),
        base_url="https://feed.test",
    )
    client = PumpFunClient(
        base_url="https://feed.test", retry_delay=0, http_client=http_client
    )
    yield client
    await http_client.aclose()


@pytest.fixture
def rate(feed):
    return ExchangeRateCache(feed)


@pytest.fixture
def state(rate):
    return MonitorState(rate=rate)


@pytest.fixture
def set_rate(upstream, rate):
    async def _set(value: float):
        upstream.sol_price = {"solPrice": value}
        assert await rate.refresh()

    return _set
