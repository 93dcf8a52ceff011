"""Normalization of raw C2C order records into CanonicalOrder.

Upstream records are inconsistent: amounts arrive as numbers or decorated
strings, direction and status strings vary in case and wording, and taker
trades report a zero commission. Each record is normalized independently; a
record that fails validation is dropped with a diagnostic and the rest of
the batch continues.

Fee rule:
    A record is TAKER when its commission is exactly zero (or absent) or when
    ``advertisementRole`` says TAKER. Taker records carry the flat
    FALLBACK_TAKER_FEE instead of the reported commission. All other records
    are MAKER with the reported commission. Net amount subtracts the fee for
    BUY and adds it for SELL.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ...core.enums import FeeClass, OrderStatus, TradeDirection
from ...core.exceptions import ValidationError
from ...models import CanonicalOrder, net_crypto_amount
from ...utils.numbers import parse_decimal, parse_epoch_ms
from .config import FALLBACK_TAKER_FEE

logger = logging.getLogger(__name__)

# Upstream field names
ORDER_ID = "orderNumber"
TRADE_TYPE = "tradeType"
FIAT_TOTAL = "totalPrice"
CRYPTO_AMOUNT = "amount"
UNIT_PRICE = "unitPrice"
COMMISSION = "commission"
ORDER_STATUS = "orderStatus"
CREATE_TIME = "createTime"
ROLE_TAG = "advertisementRole"

_COMPLETED_TOKENS = ("COMPLET", "SUCCESS")
_CANCELLED_TOKENS = ("CANCEL", "FAIL")


def normalize_status(value: Any) -> OrderStatus:
    """Map a free-form status string onto OrderStatus.

    Examples:
        >>> normalize_status("completed_success")
        <OrderStatus.COMPLETED: 'COMPLETED'>
        >>> normalize_status(None)
        <OrderStatus.PENDING: 'PENDING'>
    """
    if value is None:
        return OrderStatus.PENDING
    text = str(value).upper()
    if any(token in text for token in _COMPLETED_TOKENS):
        return OrderStatus.COMPLETED
    if any(token in text for token in _CANCELLED_TOKENS):
        return OrderStatus.CANCELLED
    return OrderStatus.PENDING


def classify_fee(
    commission: Decimal, role_tag: Any = None, *, taker_fee: Decimal = FALLBACK_TAKER_FEE
) -> tuple[FeeClass, Decimal]:
    """Infer fee class and effective fee from the reported commission."""
    tagged_taker = role_tag is not None and str(role_tag).strip().upper() == FeeClass.TAKER.value
    if commission == 0 or tagged_taker:
        return FeeClass.TAKER, taker_fee
    return FeeClass.MAKER, commission


@dataclass(frozen=True)
class RejectedRecord:
    """Diagnostic for a record dropped during normalization."""

    index: int
    reason: str
    error_type: str
    field: str | None = None
    order_id: str | None = None


@dataclass(frozen=True)
class NormalizedBatch:
    """Orders produced from one batch plus the records that were dropped."""

    orders: list[CanonicalOrder] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.orders) + len(self.rejected)


class OrderNormalizer:
    """Converts raw order records into CanonicalOrder instances."""

    def __init__(self, *, taker_fee: Decimal = FALLBACK_TAKER_FEE) -> None:
        self.taker_fee = taker_fee

    def normalize(self, record: Any) -> CanonicalOrder | None:
        """Normalize one record, returning None if it is dropped."""
        batch = self.normalize_batch([record])
        return batch.orders[0] if batch.orders else None

    def normalize_batch(self, records: Iterable[Any]) -> NormalizedBatch:
        """Normalize every record, isolating per-record failures."""
        orders: list[CanonicalOrder] = []
        rejected: list[RejectedRecord] = []
        for index, record in enumerate(records):
            try:
                orders.append(self._convert(record))
            except ValidationError as e:
                order_id = _peek_order_id(record)
                logger.warning(
                    "Dropping order record %d (%s): %s",
                    index,
                    order_id or "no id",
                    e,
                )
                rejected.append(
                    RejectedRecord(
                        index=index,
                        reason=str(e),
                        error_type=type(e).__name__,
                        field=e.field,
                        order_id=order_id,
                    )
                )
        return NormalizedBatch(orders=orders, rejected=rejected)

    def _convert(self, record: Any) -> CanonicalOrder:
        if not isinstance(record, Mapping):
            raise ValidationError(f"Record is not an object: {type(record).__name__}")

        order_id = _peek_order_id(record)
        if not order_id:
            raise ValidationError("Missing order identifier", field=ORDER_ID)

        raw_direction = record.get(TRADE_TYPE)
        direction = (
            TradeDirection.from_str(raw_direction) if isinstance(raw_direction, str) else None
        )
        if direction is None:
            raise ValidationError(f"Invalid trade type: {raw_direction!r}", field=TRADE_TYPE)

        fiat_amount = parse_decimal(record.get(FIAT_TOTAL), FIAT_TOTAL)
        gross = parse_decimal(record.get(CRYPTO_AMOUNT), CRYPTO_AMOUNT)
        unit_price = parse_decimal(record.get(UNIT_PRICE), UNIT_PRICE)

        raw_commission = record.get(COMMISSION)
        commission = (
            Decimal("0") if raw_commission is None else parse_decimal(raw_commission, COMMISSION)
        )
        fee_class, fee = classify_fee(commission, record.get(ROLE_TAG), taker_fee=self.taker_fee)

        raw_created = record.get(CREATE_TIME)
        created_at = None if raw_created is None else parse_epoch_ms(raw_created, CREATE_TIME)

        try:
            return CanonicalOrder(
                order_id=order_id,
                direction=direction,
                fiat_amount=fiat_amount,
                unit_price=unit_price,
                gross_crypto_amount=gross,
                fee_amount=fee,
                fee_class=fee_class,
                net_crypto_amount=net_crypto_amount(direction, gross, fee),
                status=normalize_status(record.get(ORDER_STATUS)),
                created_at_epoch_ms=created_at,
            )
        except PydanticValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(f"{loc}: {first.get('msg')}", field=loc or None) from e


def _peek_order_id(record: Any) -> str | None:
    if not isinstance(record, Mapping):
        return None
    value = record.get(ORDER_ID)
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None
