"""Client-side session, accumulation and filtering."""

from .accumulator import PageSource, PaginationAccumulator, QueryState
from .filters import DirectionSummary, OrderSummary, filter_orders, matches, summarize
from .order_feed import OrderFeed

__all__ = [
    "DirectionSummary",
    "OrderFeed",
    "OrderSummary",
    "PageSource",
    "PaginationAccumulator",
    "QueryState",
    "filter_orders",
    "matches",
    "summarize",
]
