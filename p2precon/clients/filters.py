"""Client-side filtering and aggregation over fetched orders.

Date range and direction are applied server-side when fetching; only status
and fee class are filtered here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import TradeDirection
from ..models import CanonicalOrder, FilterCriteria


def matches(order: CanonicalOrder, criteria: FilterCriteria) -> bool:
    """Whether ``order`` passes every predicate set in ``criteria``."""
    if criteria.status is not None and order.status != criteria.status:
        return False
    if criteria.fee_class is not None and order.fee_class != criteria.fee_class:
        return False
    return True


def filter_orders(
    orders: Iterable[CanonicalOrder], criteria: FilterCriteria | None = None
) -> list[CanonicalOrder]:
    """Return a new list of orders matching ``criteria``; the input is untouched."""
    if criteria is None or criteria.is_empty:
        return list(orders)
    return [order for order in orders if matches(order, criteria)]


@dataclass(frozen=True)
class DirectionSummary:
    """Totals for one trade direction."""

    count: int = 0
    fiat_total: Decimal = Decimal("0")
    gross_crypto_total: Decimal = Decimal("0")
    fee_total: Decimal = Decimal("0")
    net_crypto_total: Decimal = Decimal("0")

    @property
    def average_price(self) -> Decimal | None:
        """Fiat paid per unit of net crypto."""
        if self.net_crypto_total == 0:
            return None
        return self.fiat_total / self.net_crypto_total


@dataclass(frozen=True)
class OrderSummary:
    buy: DirectionSummary
    sell: DirectionSummary

    @property
    def count(self) -> int:
        return self.buy.count + self.sell.count


def summarize(orders: Iterable[CanonicalOrder]) -> OrderSummary:
    """Aggregate counts and amounts per direction."""
    totals = {
        TradeDirection.BUY: [0, Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0")],
        TradeDirection.SELL: [0, Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0")],
    }
    for order in orders:
        t = totals[order.direction]
        t[0] += 1
        t[1] += order.fiat_amount
        t[2] += order.gross_crypto_amount
        t[3] += order.fee_amount
        t[4] += order.net_crypto_amount
    return OrderSummary(
        buy=DirectionSummary(*totals[TradeDirection.BUY]),
        sell=DirectionSummary(*totals[TradeDirection.SELL]),
    )
