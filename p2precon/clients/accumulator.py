"""Incremental page accumulation over the order-history endpoint.

State machine (per QueryState):
    IDLE --search/load_more--> FETCHING --ok--> IDLE
                                        --error--> ERROR --search/load_more--> FETCHING

Only one fetch may be in flight per QueryState; triggers received while
FETCHING are ignored rather than queued. A cancelled fetch returns the state to
IDLE with the accumulated data untouched. ``disconnect`` resets the state and
bumps its session generation so a response that resolves afterwards is
discarded instead of applied.

End of data is inferred: a page with fewer raw records than requested rows
means nothing remains. A full final page reports has_more=True until the next
page comes back short or empty.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..connectors.binance.config import DEFAULT_ROWS_PER_PAGE
from ..connectors.binance.normalizer import OrderNormalizer, RejectedRecord
from ..core.enums import FetchStatus
from ..models import CanonicalOrder, Credentials, PageRequest, SearchCriteria

logger = logging.getLogger(__name__)


class PageSource(Protocol):
    """Anything that can fetch one page of raw order records."""

    async def fetch_order_page(
        self, credentials: Credentials, request: PageRequest
    ) -> list[dict[str, Any]]: ...


@dataclass
class QueryState:
    """Session-scoped accumulation state, owned by one accumulator."""

    orders: list[CanonicalOrder] = field(default_factory=list)
    current_page: int = 0
    has_more: bool = False
    status: FetchStatus = FetchStatus.IDLE
    criteria: SearchCriteria = field(default_factory=SearchCriteria)
    # Dropped records per page number
    rejected: dict[int, list[RejectedRecord]] = field(default_factory=dict)
    last_error: Exception | None = None
    session: int = 0

    @property
    def is_fetching(self) -> bool:
        return self.status == FetchStatus.FETCHING

    def reset(self) -> None:
        """Discard accumulated data and supersede any in-flight fetch."""
        self.orders = []
        self.current_page = 0
        self.has_more = False
        self.status = FetchStatus.IDLE
        self.criteria = SearchCriteria()
        self.rejected = {}
        self.last_error = None
        self.session += 1


class PaginationAccumulator:
    """Drives page fetches and merges them into a QueryState."""

    def __init__(
        self,
        source: PageSource,
        credentials: Credentials,
        *,
        normalizer: OrderNormalizer | None = None,
        rows_per_page: int = DEFAULT_ROWS_PER_PAGE,
    ) -> None:
        if rows_per_page < 1:
            raise ValueError("rows_per_page must be a positive integer")
        self._source = source
        self._credentials = credentials
        self._normalizer = normalizer or OrderNormalizer()
        self.rows_per_page = rows_per_page

    async def search(self, state: QueryState, criteria: SearchCriteria | None = None) -> bool:
        """Fetch page 1 for ``criteria`` and replace the accumulated list.

        Returns:
            True if the page was applied, False if the trigger was ignored or
            the response was stale.
        """
        return await self._run(state, criteria or SearchCriteria(), page_number=1, replace=True)

    async def load_more(self, state: QueryState) -> bool:
        """Fetch the next page for the current criteria and append it."""
        if state.current_page == 0:
            logger.debug("load_more ignored: no search has completed")
            return False
        if not state.has_more:
            logger.debug("load_more ignored: no more pages")
            return False
        return await self._run(
            state, state.criteria, page_number=state.current_page + 1, replace=False
        )

    def disconnect(self, state: QueryState) -> None:
        """Reset ``state``; a fetch still in flight is discarded when it resolves."""
        state.reset()

    async def _run(
        self,
        state: QueryState,
        criteria: SearchCriteria,
        *,
        page_number: int,
        replace: bool,
    ) -> bool:
        if state.is_fetching:
            logger.debug("Fetch trigger ignored: page request already in flight")
            return False

        session = state.session
        request = criteria.page(page_number, self.rows_per_page)
        state.status = FetchStatus.FETCHING
        try:
            records = await self._source.fetch_order_page(self._credentials, request)
        except asyncio.CancelledError:
            if state.session == session:
                logger.debug("Page %d fetch cancelled", page_number)
                state.status = FetchStatus.IDLE
            raise
        except Exception as e:
            if state.session != session:
                logger.debug("Discarding error from superseded session %d: %s", session, e)
                return False
            state.status = FetchStatus.ERROR
            state.last_error = e
            raise

        if state.session != session:
            logger.debug("Discarding page %d from superseded session %d", page_number, session)
            return False

        batch = self._normalizer.normalize_batch(records)
        if replace:
            state.orders = list(batch.orders)
            state.rejected = {}
            state.criteria = criteria
        else:
            state.orders = [*state.orders, *batch.orders]
        if batch.rejected:
            state.rejected[page_number] = list(batch.rejected)

        state.current_page = page_number
        state.has_more = len(records) >= request.rows_per_page
        state.status = FetchStatus.IDLE
        state.last_error = None

        logger.debug(
            "Applied page %d: %d orders (%d dropped), %d accumulated, has_more=%s",
            page_number,
            len(batch.orders),
            len(batch.rejected),
            len(state.orders),
            state.has_more,
        )
        return True
