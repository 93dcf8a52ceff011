"""Unit tests for BinanceP2PConnector (order fetcher)."""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from urllib.parse import parse_qsl

import pytest

from p2precon.connectors.binance import BinanceP2PConnector
from p2precon.connectors.binance.config import API_KEY_HEADER, ORDER_HISTORY_PATH, SERVER_TIME_PATH
from p2precon.connectors.binance.signing import build_query_string, generate_signature
from p2precon.core import (
    FeeClass,
    IpBannedError,
    NetworkError,
    ProtocolError,
    RateLimitError,
    SkewOutcome,
    TradeDirection,
    UpstreamError,
    ValidationError,
)
from p2precon.models import Credentials, PageRequest

NOW = 1_700_000_000_000
CREDS = Credentials(api_key="api-key", secret_key="secret-key")


class FakeTransport:
    """Records calls and serves canned responses per path."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, dict | None, dict | None]] = []

    async def get(self, path, *, params=None, headers=None):
        self.calls.append((path, params, headers))
        response = self.responses[path]
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        pass


def _connector(responses: dict[str, Any]) -> tuple[BinanceP2PConnector, FakeTransport]:
    connector = BinanceP2PConnector(clock=lambda: NOW)
    transport = FakeTransport(responses)
    connector._transport = transport
    connector._runner._t = transport
    return connector, transport


def test_default_base_url_includes_relay():
    connector = BinanceP2PConnector()
    assert connector._transport.base_url == "https://cors-proxy.fringe.zone/https://api.binance.com"


def test_relay_can_be_disabled():
    connector = BinanceP2PConnector(relay_url=None)
    assert connector._transport.base_url == "https://api.binance.com"


@pytest.mark.asyncio
async def test_fetch_unknown_endpoint():
    connector, _ = _connector({})
    with pytest.raises(ValueError):
        await connector.fetch("klines", {})


@pytest.mark.asyncio
async def test_fetch_order_page_signs_request():
    records = [{"orderNumber": "1"}]
    connector, transport = _connector(
        {SERVER_TIME_PATH: {"serverTime": NOW + 10}, ORDER_HISTORY_PATH: {"data": records}}
    )
    request = PageRequest(page_number=2, rows_per_page=20, direction=TradeDirection.BUY)

    result = await connector.fetch_order_page(CREDS, request)

    assert result == records
    # Clock probe strictly before the signed request
    assert [call[0] for call in transport.calls] == [SERVER_TIME_PATH, ORDER_HISTORY_PATH]

    _, query, headers = transport.calls[1]
    assert headers == {API_KEY_HEADER: "api-key"}
    assert list(query) == ["timestamp", "recvWindow", "page", "rows", "tradeType", "signature"]
    assert query["timestamp"] == NOW
    assert query["recvWindow"] == 60000
    unsigned = {k: v for k, v in query.items() if k != "signature"}
    assert query["signature"] == generate_signature(build_query_string(unsigned), "secret-key")

    assert connector.last_skew_check.outcome == SkewOutcome.WITHIN_TOLERANCE
    assert connector.last_skew_check.local_time == NOW


@pytest.mark.asyncio
async def test_clock_probe_failure_does_not_block_fetch():
    connector, transport = _connector(
        {SERVER_TIME_PATH: NetworkError("down"), ORDER_HISTORY_PATH: {"data": []}}
    )

    assert await connector.fetch_order_page(CREDS, PageRequest()) == []
    assert connector.last_skew_check.outcome == SkewOutcome.UNKNOWN_ASSUMED_TOLERANT
    assert len(transport.calls) == 2


@pytest.mark.asyncio
async def test_drifted_clock_still_fetches():
    connector, _ = _connector(
        {SERVER_TIME_PATH: {"serverTime": NOW + 120_000}, ORDER_HISTORY_PATH: {"data": []}}
    )

    await connector.fetch_order_page(CREDS, PageRequest())

    assert connector.last_skew_check.outcome == SkewOutcome.DRIFTED
    assert not connector.last_skew_check.tolerant


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        RateLimitError("slow down"),
        IpBannedError("banned"),
        UpstreamError("Signature for this request is not valid.", status_code=400),
        NetworkError("reset"),
    ],
)
async def test_fetch_order_page_single_attempt_errors(error):
    connector, transport = _connector(
        {SERVER_TIME_PATH: {"serverTime": NOW}, ORDER_HISTORY_PATH: error}
    )

    with pytest.raises(type(error)):
        await connector.fetch_order_page(CREDS, PageRequest())

    assert [call[0] for call in transport.calls].count(ORDER_HISTORY_PATH) == 1


@pytest.mark.asyncio
async def test_fetch_order_page_protocol_error():
    connector, _ = _connector(
        {SERVER_TIME_PATH: {"serverTime": NOW}, ORDER_HISTORY_PATH: {"list": []}}
    )
    with pytest.raises(ProtocolError):
        await connector.fetch_order_page(CREDS, PageRequest())


@pytest.mark.asyncio
async def test_fetch_order_page_rejects_empty_keys_before_network():
    connector, transport = _connector({})
    blank = Credentials.model_construct(api_key="", secret_key="")

    with pytest.raises(ValidationError):
        await connector.fetch_order_page(blank, PageRequest())
    assert transport.calls == []


@pytest.mark.asyncio
async def test_fetch_order_page_rejects_oversized_rows():
    connector, transport = _connector({})
    with pytest.raises(ValidationError):
        await connector.fetch_order_page(CREDS, PageRequest(rows_per_page=500))
    assert transport.calls == []


@pytest.mark.asyncio
async def test_fetch_orders_normalizes_page():
    connector, _ = _connector(
        {
            SERVER_TIME_PATH: {"serverTime": NOW},
            ORDER_HISTORY_PATH: {
                "data": [
                    {
                        "orderNumber": "1",
                        "tradeType": "BUY",
                        "totalPrice": "1000",
                        "amount": "20",
                        "unitPrice": "50",
                        "commission": 0,
                    },
                    {"orderNumber": "2", "tradeType": "BUY"},
                ]
            },
        }
    )

    batch = await connector.fetch_orders(CREDS, PageRequest())

    assert [o.order_id for o in batch.orders] == ["1"]
    assert batch.orders[0].fee_class == FeeClass.TAKER
    assert batch.orders[0].net_crypto_amount == Decimal("19.95")
    assert [r.order_id for r in batch.rejected] == ["2"]


@pytest.mark.asyncio
async def test_fetch_health():
    connector, _ = _connector({SERVER_TIME_PATH: {"serverTime": NOW}})
    result = await connector.fetch_health()
    assert result["status"] == "ok"
    assert result["server_time"] == NOW


@pytest.mark.asyncio
async def test_fetch_order_page_full_url_through_http_client():
    """The signed query reaches the wire unchanged after the relay prefix."""
    connector = BinanceP2PConnector(clock=lambda: NOW)
    urls: list[str] = []

    class _Response:
        status = 200
        headers: dict = {}

        def __init__(self, body):
            self._body = body

        async def json(self, content_type=None):
            return self._body

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return None

    class _Session:
        closed = False

        def get(self, url, headers=None):
            urls.append(url)
            if SERVER_TIME_PATH in url:
                return _Response({"serverTime": NOW})
            return _Response({"data": []})

        async def close(self):
            self.closed = True

    connector._transport._http._session = _Session()

    await connector.fetch_order_page(CREDS, PageRequest())

    assert urls[1].startswith(
        "https://cors-proxy.fringe.zone/https://api.binance.com" + ORDER_HISTORY_PATH + "?"
    )
    pairs = parse_qsl(urls[1].split("?", 1)[1])
    assert [k for k, _ in pairs][-1] == "signature"
    unsigned = dict(pairs[:-1])
    expected = generate_signature(build_query_string(unsigned), "secret-key")
    assert dict(pairs)["signature"] == expected
