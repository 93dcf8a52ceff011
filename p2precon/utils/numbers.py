"""Lenient numeric parsing for upstream amounts.

Upstream amounts arrive as JSON numbers or as strings that may carry
thousands separators, currency symbols or whitespace. Everything except
digits, the decimal point and the minus sign is stripped; whatever remains
must be a valid number. Nothing is ever coerced to zero.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from ..core.exceptions import NumericParseError

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_decimal(value: object, field: str | None = None) -> Decimal:
    """Parse ``value`` into a finite Decimal.

    Raises:
        NumericParseError: If the value is missing, boolean, not a string or
            number, non-finite or has no numeric remainder after stripping.

    Examples:
        >>> parse_decimal("1,250.50 EGP")
        Decimal('1250.50')
        >>> parse_decimal(20)
        Decimal('20')
    """
    if value is None:
        raise NumericParseError(f"{field or 'value'} is missing", field=field, value=value)
    if isinstance(value, bool):
        raise NumericParseError(f"{field or 'value'} is boolean", field=field, value=value)

    if isinstance(value, (int, Decimal)):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value.strip())
        try:
            result = Decimal(cleaned)
        except InvalidOperation as e:
            raise NumericParseError(
                f"{field or 'value'} is not numeric: {value!r}", field=field, value=value
            ) from e
    else:
        raise NumericParseError(
            f"{field or 'value'} is not a string or number: {type(value).__name__}",
            field=field,
            value=value,
        )

    if not result.is_finite():
        raise NumericParseError(f"{field or 'value'} is not finite", field=field, value=value)
    return result


def parse_epoch_ms(value: object, field: str | None = None) -> int:
    """Parse an integral epoch-milliseconds value."""
    result = parse_decimal(value, field)
    if result != result.to_integral_value():
        raise NumericParseError(f"{field or 'value'} is not an integer", field=field, value=value)
    return int(result)
