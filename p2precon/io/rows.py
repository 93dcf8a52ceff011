"""Flat row conversion for the spreadsheet collaborator.

Export turns CanonicalOrder values into flat dict rows with fixed column
names; import maps rows that use those column names back onto upstream field
names, so imported rows go through the same normalizer as fetched records.
Column detection and cell formatting stay with the spreadsheet side.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from ..connectors.binance import normalizer as fields
from ..models import CanonicalOrder

COLUMNS = (
    "Order ID",
    "Type",
    "Fiat Amount",
    "Price",
    "Crypto Amount",
    "Fee",
    "Fee Class",
    "Net Amount",
    "Status",
    "Created",
)

TOTAL_LABEL = "Total"

# Export column -> upstream record field
_IMPORT_MAP = {
    "Order ID": fields.ORDER_ID,
    "Type": fields.TRADE_TYPE,
    "Fiat Amount": fields.FIAT_TOTAL,
    "Price": fields.UNIT_PRICE,
    "Crypto Amount": fields.CRYPTO_AMOUNT,
    "Fee": fields.COMMISSION,
    "Fee Class": fields.ROLE_TAG,
    "Status": fields.ORDER_STATUS,
    "Created": fields.CREATE_TIME,
}


def _format_time(epoch_ms: int | None) -> str:
    if epoch_ms is None:
        return ""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=UTC).isoformat()


def order_to_row(order: CanonicalOrder) -> dict[str, Any]:
    return {
        "Order ID": order.order_id,
        "Type": order.direction.value,
        "Fiat Amount": order.fiat_amount,
        "Price": order.unit_price,
        "Crypto Amount": order.gross_crypto_amount,
        "Fee": order.fee_amount,
        "Fee Class": order.fee_class.value,
        "Net Amount": order.net_crypto_amount,
        "Status": order.status.value,
        "Created": _format_time(order.created_at_epoch_ms),
    }


def orders_to_rows(
    orders: Iterable[CanonicalOrder], *, include_total: bool = False
) -> list[dict[str, Any]]:
    """Convert orders to rows, optionally followed by a Total row.

    The Total row sums fiat, crypto, fee and net amounts; other cells are empty.
    """
    rows = [order_to_row(order) for order in orders]
    if include_total:
        total = {column: "" for column in COLUMNS}
        total["Order ID"] = TOTAL_LABEL
        for column in ("Fiat Amount", "Crypto Amount", "Fee", "Net Amount"):
            total[column] = sum((row[column] for row in rows), Decimal("0"))
        rows.append(total)
    return rows


def row_to_raw_record(row: Mapping[str, Any]) -> dict[str, Any]:
    """Map an exported-style row back to an upstream-shaped record.

    Unknown columns are ignored. A ``Created`` cell in ISO format is
    converted back to epoch ms; a TAKER ``Fee Class`` keeps the taker tag so
    fee inference gives the same result as for the exported order.
    """
    record: dict[str, Any] = {}
    for column, upstream in _IMPORT_MAP.items():
        value = row.get(column)
        if value is None or value == "":
            continue
        record[upstream] = value

    created = record.get(fields.CREATE_TIME)
    if isinstance(created, str):
        try:
            parsed = datetime.fromisoformat(created)
        except ValueError:
            # Left as-is; the normalizer rejects it
            pass
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            record[fields.CREATE_TIME] = round(parsed.timestamp() * 1000)
    return record


def rows_to_raw_records(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Convert rows, skipping Total rows."""
    return [row_to_raw_record(row) for row in rows if row.get("Order ID") != TOTAL_LABEL]
