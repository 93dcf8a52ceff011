"""Canonical P2P order data model."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.enums import FeeClass, OrderStatus, TradeDirection


def net_crypto_amount(direction: TradeDirection, gross: Decimal, fee: Decimal) -> Decimal:
    """Apply the fee to a gross crypto amount.

    Buyers receive the gross amount less the fee; sellers release the gross
    amount plus the fee.
    """
    if direction == TradeDirection.BUY:
        return gross - fee
    return gross + fee


class CanonicalOrder(BaseModel):
    """Validated, normalized representation of an upstream P2P trade record."""

    order_id: str = Field(..., min_length=1)
    direction: TradeDirection
    fiat_amount: Decimal
    unit_price: Decimal
    gross_crypto_amount: Decimal
    fee_amount: Decimal = Field(..., ge=0)
    fee_class: FeeClass
    net_crypto_amount: Decimal
    status: OrderStatus = OrderStatus.PENDING
    created_at_epoch_ms: int | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @model_validator(mode="after")
    def validate_net_amount(self) -> CanonicalOrder:
        """Validate net amount follows the direction's fee rule."""
        expected = net_crypto_amount(self.direction, self.gross_crypto_amount, self.fee_amount)
        if self.net_crypto_amount != expected:
            raise ValueError(
                f"net_crypto_amount {self.net_crypto_amount} != expected {expected} "
                f"for {self.direction.value}"
            )
        return self

    @property
    def is_taker(self) -> bool:
        """True when the taker fallback fee applies."""
        return self.fee_class == FeeClass.TAKER

    @property
    def is_completed(self) -> bool:
        """True when the order settled."""
        return self.status == OrderStatus.COMPLETED

    def __str__(self) -> str:
        """String representation."""
        return (
            f"CanonicalOrder({self.order_id} {self.direction.value} "
            f"fiat={self.fiat_amount} net={self.net_crypto_amount} {self.status.value})"
        )
