"""Unit tests for core enums."""

import pytest

from p2precon.core import FeeClass, OrderStatus, TradeDirection


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("BUY", TradeDirection.BUY),
        ("buy", TradeDirection.BUY),
        (" Sell ", TradeDirection.SELL),
        ("SELLING", None),
        ("", None),
    ],
)
def test_trade_direction_from_str(raw, expected):
    assert TradeDirection.from_str(raw) is expected


def test_enum_values_are_strings():
    assert TradeDirection.BUY == "BUY"
    assert OrderStatus.COMPLETED.value == "COMPLETED"
    assert FeeClass.TAKER.value == "TAKER"
