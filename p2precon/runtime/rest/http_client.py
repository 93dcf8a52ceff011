"""Async HTTP client wrapper.

Performs exactly one attempt per call and maps failures onto the library's
exception hierarchy. Retry and backoff are left to callers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlencode

import aiohttp

from ...core.exceptions import (
    IpBannedError,
    NetworkError,
    ProtocolError,
    RateLimitError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

_DEFAULT_RETRY_AFTER = 60


def _retry_after(response: aiohttp.ClientResponse) -> int | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def build_url(url: str, params: dict[str, Any] | None) -> str:
    """Append an already ordered parameter mapping as a query string.

    The query string is encoded here rather than by aiohttp so the bytes sent
    are exactly the bytes that were signed.
    """
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(params)}"


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _resolve(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body.

        Raises:
            RateLimitError: HTTP 429
            IpBannedError: HTTP 418
            UpstreamError: any other non-2xx status
            ProtocolError: 2xx body that is not JSON
            NetworkError: connection failure or timeout
        """
        target = self._resolve(url)
        # Query string carries the signature; keep it out of logs
        logger.debug("GET %s", target)
        try:
            async with self.session.get(build_url(target, params), headers=headers) as response:
                await self._raise_for_status(response)
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ProtocolError(f"Response from {target} is not valid JSON") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Request to {target} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise NetworkError(f"Request to {target} timed out") from e

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        status = response.status
        if 200 <= status < 300:
            return

        message, code = await self._error_details(response)
        if status == 429:
            raise RateLimitError(
                message or "Request rate limit exceeded",
                retry_after=_retry_after(response) or _DEFAULT_RETRY_AFTER,
            )
        if status == 418:
            raise IpBannedError(
                message or "IP address has been banned",
                retry_after=_retry_after(response),
            )
        raise UpstreamError(
            message or f"Upstream request failed with HTTP {status}",
            status_code=status,
            upstream_code=code,
        )

    @staticmethod
    async def _error_details(response: aiohttp.ClientResponse) -> tuple[str | None, int | None]:
        """Extract the upstream ``msg``/``code`` pair from an error body."""
        try:
            body = await response.json(content_type=None)
        except ValueError:
            return None, None
        if not isinstance(body, dict):
            return None, None
        code = body.get("code")
        return body.get("msg"), code if isinstance(code, int) else None

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
