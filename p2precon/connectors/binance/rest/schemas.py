"""Binance REST API raw response schemas.

These models describe the response envelopes only. Individual order records
inside ``data`` are left as raw mappings because their shape varies; the
normalizer owns record-level validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BinanceServerTime(BaseModel):
    """Raw ``/api/v3/time`` response."""

    server_time: int = Field(..., alias="serverTime", description="Server epoch ms")

    model_config = {"populate_by_name": True}


class BinanceOrderHistoryPage(BaseModel):
    """Raw C2C order-history response envelope."""

    data: list[Any] = Field(..., description="Order records for the page")
    total: int | None = Field(None, description="Reported total (not reliable for paging)")
    success: bool | None = Field(None, description="Upstream success flag")
    code: str | None = Field(None, description="Upstream status code")

    model_config = {"populate_by_name": True}


__all__ = [
    "BinanceOrderHistoryPage",
    "BinanceServerTime",
]
