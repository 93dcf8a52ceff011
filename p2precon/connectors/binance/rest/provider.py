"""Binance P2P REST connector.

Architecture:
    Endpoint specs and adapters are looked up in the endpoint registry and
    executed by RestRunner over an aiohttp transport whose base URL already
    includes the relay prefix. The connector adds the signed-request
    workflow: timestamp, advisory clock check, signing and a single GET.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from time import perf_counter
from typing import Any

from p2precon.connectors.binance.clock import ClockSkewGuard, SkewCheck
from p2precon.connectors.binance.config import (
    BASE_URL,
    MAX_ROWS_PER_PAGE,
    RECV_WINDOW_MS,
    RELAY_URL,
    get_base_url,
)
from p2precon.connectors.binance.normalizer import NormalizedBatch, OrderNormalizer
from p2precon.core.exceptions import P2PError, ValidationError
from p2precon.models import Credentials, PageRequest
from p2precon.runtime.rest import RestRunner, RESTTransport

from .endpoints import get_endpoint_adapter, get_endpoint_spec

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class BinanceP2PConnector:
    """Signed client for the Binance C2C order-history endpoint.

    Every fetch performs exactly one HTTP attempt; retry policy belongs to
    the caller.
    """

    def __init__(
        self,
        *,
        relay_url: str | None = RELAY_URL,
        base_url: str = BASE_URL,
        recv_window: int = RECV_WINDOW_MS,
        timeout: float = 30.0,
        normalizer: OrderNormalizer | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize connector.

        Args:
            relay_url: Forwarding prefix; None or "" to call upstream directly
            base_url: Upstream API root
            recv_window: Receive window (ms) sent with signed requests
            timeout: Total HTTP timeout in seconds
            normalizer: Normalizer used by fetch_orders
            clock: Local epoch-ms clock
        """
        self.recv_window = recv_window
        self._transport = RESTTransport(base_url=get_base_url(relay_url, base_url), timeout=timeout)
        self._runner = RestRunner(self._transport)
        self._normalizer = normalizer or OrderNormalizer()
        self._clock = clock
        self.clock_guard = ClockSkewGuard(self.probe_server_time, tolerance_ms=recv_window)
        self.last_skew_check: SkewCheck | None = None

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Fetch data from a REST endpoint.

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        return await self._runner.run(spec=spec, adapter=adapter_cls(), params=params)

    async def probe_server_time(self) -> int:
        """Return upstream server epoch ms."""
        server_time: int = await self.fetch("server_time", {})
        return server_time

    async def check_clock_skew(self, local_time: int | None = None) -> SkewCheck:
        """Run the advisory clock check (never raises for probe failures)."""
        check = await self.clock_guard.check(self._clock() if local_time is None else local_time)
        self.last_skew_check = check
        return check

    async def fetch_health(self) -> dict[str, object]:
        """Probe server time to verify connectivity through the relay."""
        start = perf_counter()
        server_time = await self.probe_server_time()
        latency_ms = (perf_counter() - start) * 1000.0
        return {
            "exchange": "binance",
            "status": "ok",
            "latency_ms": latency_ms,
            "server_time": server_time,
        }

    async def fetch_order_page(
        self, credentials: Credentials, request: PageRequest
    ) -> list[dict[str, Any]]:
        """Fetch one page of raw order records.

        The clock check uses the same timestamp that is signed and completes
        before the signed request is sent.

        Raises:
            ValidationError: Empty keys or rows beyond the upstream maximum
            RateLimitError: HTTP 429
            IpBannedError: HTTP 418
            UpstreamError: Other non-2xx responses
            ProtocolError: Payload without a ``data`` array
            NetworkError: Transport failure
        """
        if not credentials.api_key or not credentials.secret_key:
            raise ValidationError("API key and secret key are required", field="credentials")
        if request.rows_per_page > MAX_ROWS_PER_PAGE:
            raise ValidationError(
                f"rows_per_page must be <= {MAX_ROWS_PER_PAGE}", field="rows_per_page"
            )

        timestamp = self._clock()
        await self.check_clock_skew(timestamp)

        params = {
            "timestamp": timestamp,
            "recv_window": self.recv_window,
            "page_request": request,
            "api_key": credentials.api_key,
            "secret_key": credentials.secret_key,
        }
        try:
            records: list[dict[str, Any]] = await self.fetch("order_history", params)
        except P2PError as e:
            logger.error(
                "Order history page %d failed: %s",
                request.page_number,
                e,
                extra={"error_type": type(e).__name__},
            )
            raise
        return records

    async def fetch_orders(self, credentials: Credentials, request: PageRequest) -> NormalizedBatch:
        """Fetch one page and normalize it."""
        records = await self.fetch_order_page(credentials, request)
        return self._normalizer.normalize_batch(records)

    @property
    def normalizer(self) -> OrderNormalizer:
        return self._normalizer

    async def close(self) -> None:
        """Close underlying resources."""
        await self._transport.close()

    async def __aenter__(self) -> BinanceP2PConnector:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
