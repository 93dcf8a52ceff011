"""Binance server time endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from p2precon.connectors.binance.config import SERVER_TIME_PATH
from p2precon.core.exceptions import ProtocolError
from p2precon.runtime.rest import ResponseAdapter, RestEndpointSpec

from ..schemas import BinanceServerTime


def build_path(params: dict[str, Any]) -> str:
    return SERVER_TIME_PATH


SPEC = RestEndpointSpec(
    id="server_time",
    method="GET",
    build_path=build_path,
)


class Adapter(ResponseAdapter):
    """Adapter extracting ``serverTime`` as epoch ms."""

    def parse(self, response: Any, params: dict[str, Any]) -> int:
        try:
            return BinanceServerTime.model_validate(response).server_time
        except PydanticValidationError as e:
            raise ProtocolError(f"Malformed server time response: {response!r}") from e
