"""Tabular import/export helpers."""

from .rows import (
    COLUMNS,
    TOTAL_LABEL,
    order_to_row,
    orders_to_rows,
    row_to_raw_record,
    rows_to_raw_records,
)

__all__ = [
    "COLUMNS",
    "TOTAL_LABEL",
    "order_to_row",
    "orders_to_rows",
    "row_to_raw_record",
    "rows_to_raw_records",
]
