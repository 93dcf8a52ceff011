"""High-level order-history session.

Ties a connector, session credentials, a QueryState and a
PaginationAccumulator together behind connect/search/load_more/disconnect,
which is the shape an interactive front end drives:

- ``connect`` starts a fresh session and fetches the first page
- ``search`` replaces results for new server-side criteria
- ``load_more`` appends the next page while more data may remain
- ``orders``/``summary`` read the accumulated list through the local filter
"""

from __future__ import annotations

import logging

from ..connectors.binance import BinanceP2PConnector
from ..connectors.binance.config import DEFAULT_ROWS_PER_PAGE
from ..core.exceptions import ValidationError
from ..models import CanonicalOrder, Credentials, FilterCriteria, SearchCriteria
from ..storage.credentials import CredentialStore
from .accumulator import PaginationAccumulator, QueryState
from .filters import OrderSummary, filter_orders, summarize

logger = logging.getLogger(__name__)


class OrderFeed:
    """Interactive order-history session over one connector."""

    def __init__(
        self,
        connector: BinanceP2PConnector | None = None,
        *,
        rows_per_page: int = DEFAULT_ROWS_PER_PAGE,
    ) -> None:
        self._connector = connector or BinanceP2PConnector()
        self._rows_per_page = rows_per_page
        self._state = QueryState()
        self._accumulator: PaginationAccumulator | None = None

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._accumulator is not None

    async def connect(
        self, credentials: Credentials, criteria: SearchCriteria | None = None
    ) -> bool:
        """Start a new session and fetch the first page."""
        self.disconnect()
        self._accumulator = PaginationAccumulator(
            self._connector,
            credentials,
            normalizer=self._connector.normalizer,
            rows_per_page=self._rows_per_page,
        )
        logger.info("Order feed connected")
        return await self._accumulator.search(self._state, criteria)

    async def connect_saved(
        self, store: CredentialStore, name: str, criteria: SearchCriteria | None = None
    ) -> bool:
        """Connect using a credential saved under ``name``."""
        saved = store.get(name)
        if saved is None:
            raise ValidationError(f"No saved credential named {name!r}", field="name")
        return await self.connect(saved.credentials(), criteria)

    async def search(self, criteria: SearchCriteria | None = None) -> bool:
        """Replace results with page 1 for new server-side criteria."""
        return await self._require_accumulator().search(self._state, criteria)

    async def load_more(self) -> bool:
        """Append the next page for the current criteria."""
        return await self._require_accumulator().load_more(self._state)

    def disconnect(self) -> None:
        """Drop credentials and accumulated data; in-flight pages are discarded."""
        if self._accumulator is not None:
            self._accumulator.disconnect(self._state)
            self._accumulator = None
            logger.info("Order feed disconnected")

    def orders(self, criteria: FilterCriteria | None = None) -> list[CanonicalOrder]:
        """Accumulated orders passing the local filter."""
        return filter_orders(self._state.orders, criteria)

    def summary(self, criteria: FilterCriteria | None = None) -> OrderSummary:
        """Per-direction totals for the orders visible under ``criteria``."""
        return summarize(self.orders(criteria))

    async def close(self) -> None:
        """Disconnect and close the underlying connector."""
        self.disconnect()
        await self._connector.close()

    async def __aenter__(self) -> OrderFeed:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _require_accumulator(self) -> PaginationAccumulator:
        if self._accumulator is None:
            raise RuntimeError("OrderFeed is not connected")
        return self._accumulator
