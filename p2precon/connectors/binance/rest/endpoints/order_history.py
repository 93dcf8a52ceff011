"""Binance C2C (P2P) order history endpoint definition and adapter.

This endpoint is signed: the query carries ``timestamp``/``recvWindow`` and an
HMAC signature, and the API key travels in a header.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from p2precon.connectors.binance.config import API_KEY_HEADER, ORDER_HISTORY_PATH
from p2precon.connectors.binance.signing import RequestSigner
from p2precon.core.exceptions import ProtocolError
from p2precon.models import PageRequest
from p2precon.runtime.rest import ResponseAdapter, RestEndpointSpec

from ..schemas import BinanceOrderHistoryPage

logger = logging.getLogger(__name__)


def build_path(params: dict[str, Any]) -> str:
    return ORDER_HISTORY_PATH


def build_unsigned_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build the canonical, ordered parameter set before signing.

    Order: timestamp, recvWindow, startTimestamp, endTimestamp, page, rows,
    tradeType. Optional filters are omitted when unset.
    """
    request: PageRequest = params["page_request"]
    q: dict[str, Any] = {
        "timestamp": int(params["timestamp"]),
        "recvWindow": int(params["recv_window"]),
    }
    if request.start_time is not None:
        q["startTimestamp"] = request.start_time
    if request.end_time is not None:
        q["endTimestamp"] = request.end_time
    q["page"] = request.page_number
    q["rows"] = request.rows_per_page
    if request.direction is not None:
        q["tradeType"] = request.direction.value
    return q


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build and sign query parameters."""
    return RequestSigner(params["secret_key"]).sign(build_unsigned_query(params))


def build_headers(params: dict[str, Any]) -> dict[str, str]:
    """Build headers (requires API key)."""
    api_key = params.get("api_key")
    if not api_key:
        raise ValueError("API key required for Binance order history endpoint")
    return {API_KEY_HEADER: api_key}


SPEC = RestEndpointSpec(
    id="order_history",
    method="GET",
    build_path=build_path,
    build_query=build_query,
    build_headers=build_headers,
)


class Adapter(ResponseAdapter):
    """Adapter returning the raw records of one page."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Parse the order-history envelope.

        Raises:
            ProtocolError: If the payload has no ``data`` array
        """
        if not isinstance(response, dict):
            raise ProtocolError(f"Expected JSON object, got {type(response).__name__}")
        try:
            page = BinanceOrderHistoryPage.model_validate(response)
        except PydanticValidationError as e:
            raise ProtocolError("Order history response has no 'data' array") from e

        logger.debug(
            "Order history page %s: %d records (reported total %s)",
            params["page_request"].page_number,
            len(page.data),
            page.total,
        )
        return page.data
