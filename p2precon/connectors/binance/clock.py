"""Advisory clock-skew check against the upstream server time.

The upstream service validates each signed request's timestamp against its
receive window, so this check never blocks a request. When the server time
cannot be obtained the outcome is UNKNOWN_ASSUMED_TOLERANT (fail-open).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ...core.enums import SkewOutcome
from ...core.exceptions import NetworkError, P2PError
from .config import RECV_WINDOW_MS

logger = logging.getLogger(__name__)

ServerTimeSource = Callable[[], Awaitable[int]]


@dataclass(frozen=True)
class SkewCheck:
    """Outcome of one clock comparison."""

    outcome: SkewOutcome
    local_time: int
    server_time: int | None = None
    tolerance_ms: int = RECV_WINDOW_MS
    error: str | None = None

    @property
    def drift_ms(self) -> int | None:
        """Signed server minus local difference, if known."""
        if self.server_time is None:
            return None
        return self.server_time - self.local_time

    @property
    def tolerant(self) -> bool:
        """False only when drift was confirmed outside the tolerance."""
        return self.outcome != SkewOutcome.DRIFTED


def is_within_tolerance(local_time: int, server_time: int, tolerance_ms: int) -> bool:
    """Check that two epoch-ms clocks are at most ``tolerance_ms`` apart."""
    return abs(server_time - local_time) <= tolerance_ms


class ClockSkewGuard:
    """Compares local timestamps with the upstream server clock."""

    def __init__(self, source: ServerTimeSource, *, tolerance_ms: int = RECV_WINDOW_MS) -> None:
        self._source = source
        self.tolerance_ms = tolerance_ms

    async def probe_server_time(self) -> int:
        """Fetch server epoch ms.

        Raises:
            NetworkError: transport failure or non-success response
        """
        try:
            return await self._source()
        except NetworkError:
            raise
        except P2PError as e:
            raise NetworkError(f"Server time probe failed: {e}") from e

    async def check(self, local_time: int) -> SkewCheck:
        """Compare ``local_time`` with the server clock, failing open."""
        try:
            server_time = await self.probe_server_time()
        except NetworkError as e:
            logger.debug("Clock probe failed, assuming tolerant: %s", e)
            return SkewCheck(
                outcome=SkewOutcome.UNKNOWN_ASSUMED_TOLERANT,
                local_time=local_time,
                tolerance_ms=self.tolerance_ms,
                error=str(e),
            )

        if is_within_tolerance(local_time, server_time, self.tolerance_ms):
            outcome = SkewOutcome.WITHIN_TOLERANCE
        else:
            outcome = SkewOutcome.DRIFTED
            logger.warning(
                "Local clock drift %d ms exceeds tolerance %d ms",
                server_time - local_time,
                self.tolerance_ms,
            )
        return SkewCheck(
            outcome=outcome,
            local_time=local_time,
            server_time=server_time,
            tolerance_ms=self.tolerance_ms,
        )
