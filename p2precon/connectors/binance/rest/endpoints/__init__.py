"""Binance REST endpoint registry."""

from __future__ import annotations

from p2precon.runtime.rest import ResponseAdapter, RestEndpointSpec

from .order_history import SPEC as OrderHistorySpec  # noqa: N811
from .order_history import Adapter as OrderHistoryAdapter
from .server_time import SPEC as ServerTimeSpec  # noqa: N811
from .server_time import Adapter as ServerTimeAdapter

# Registry mapping endpoint IDs to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    "server_time": (ServerTimeSpec, ServerTimeAdapter),
    "order_history": (OrderHistorySpec, OrderHistoryAdapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID."""
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Get endpoint adapter class by ID."""
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    return sorted(_ENDPOINT_REGISTRY)


__all__ = ["get_endpoint_adapter", "get_endpoint_spec", "list_endpoints"]
