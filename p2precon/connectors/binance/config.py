"""Binance P2P connector constants.

Requests go through a forwarding relay because the upstream API rejects
cross-origin browser requests; the relay prefix is prepended verbatim to the
full upstream URL.
"""

from __future__ import annotations

from decimal import Decimal

BASE_URL = "https://api.binance.com"
RELAY_URL = "https://cors-proxy.fringe.zone/"

SERVER_TIME_PATH = "/api/v3/time"
ORDER_HISTORY_PATH = "/sapi/v1/c2c/orderMatch/listUserOrderHistory"

API_KEY_HEADER = "X-MBX-APIKEY"

# Server-side tolerance for signed request timestamps (ms); also the default
# tolerance of the advisory clock check.
RECV_WINDOW_MS = 60_000

DEFAULT_ROWS_PER_PAGE = 50
MAX_ROWS_PER_PAGE = 100

# Upstream reports zero commission for taker trades; this is the flat fee charged.
FALLBACK_TAKER_FEE = Decimal("0.05")


def get_base_url(relay_url: str | None = RELAY_URL, base_url: str = BASE_URL) -> str:
    """Get the effective REST base URL.

    Examples:
        >>> get_base_url()
        'https://cors-proxy.fringe.zone/https://api.binance.com'
        >>> get_base_url(None)
        'https://api.binance.com'
    """
    if not relay_url:
        return base_url
    return f"{relay_url}{base_url}"
