"""Integration tests against the live Binance REST API."""

import os
import time

import pytest

from p2precon.clients import OrderFeed
from p2precon.connectors.binance import BinanceP2PConnector
from p2precon.core import SkewOutcome
from p2precon.models import Credentials

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_P2PRECON_NETWORK_TESTS") != "1",
    reason="Requires network access to test the Binance REST API",
)


class TestServerTimeIntegration:
    """Public server-time endpoint, direct and through the relay."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("relay_url", [None, "https://cors-proxy.fringe.zone/"])
    async def test_fetch_health(self, relay_url):
        async with BinanceP2PConnector(relay_url=relay_url) as connector:
            health = await connector.fetch_health()

        assert health["status"] == "ok"
        assert abs(health["server_time"] - int(time.time() * 1000)) < 5 * 60_000

    @pytest.mark.asyncio
    async def test_clock_check_direct(self):
        async with BinanceP2PConnector(relay_url=None) as connector:
            check = await connector.check_clock_skew()

        assert check.outcome in (SkewOutcome.WITHIN_TOLERANCE, SkewOutcome.DRIFTED)
        assert check.server_time is not None


@pytest.mark.skipif(
    not (os.environ.get("BINANCE_API_KEY") and os.environ.get("BINANCE_SECRET_KEY")),
    reason="Requires BINANCE_API_KEY and BINANCE_SECRET_KEY",
)
class TestOrderHistoryIntegration:
    """Signed order-history fetch with real credentials."""

    @pytest.mark.asyncio
    async def test_connect_first_page(self):
        credentials = Credentials(
            api_key=os.environ["BINANCE_API_KEY"], secret_key=os.environ["BINANCE_SECRET_KEY"]
        )
        async with OrderFeed(BinanceP2PConnector(relay_url=None), rows_per_page=10) as feed:
            assert await feed.connect(credentials)

            assert feed.state.current_page == 1
            assert len(feed.state.orders) <= 10
