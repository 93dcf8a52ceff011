"""REST transport bound to a base URL."""

from __future__ import annotations

from typing import Any

from .http_client import HTTPClient


class RESTTransport:
    """Thin wrapper over HTTPClient used by the runner and connectors."""

    def __init__(self, base_url: str, *, timeout: float = 30.0) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout)

    @property
    def base_url(self) -> str | None:
        return self._http.base_url

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self._http.get(path, params=params, headers=headers)

    async def close(self) -> None:
        await self._http.close()
