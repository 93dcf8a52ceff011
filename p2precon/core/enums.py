"""Core enumerations shared by models, normalizer and accumulator.

Architecture:
    String enums so values serialize directly to the exchange's vocabulary
    (BUY/SELL) and to exported rows without extra mapping.

Key Types:
    - TradeDirection: BUY or SELL side of a P2P order
    - OrderStatus: normalized lifecycle status
    - FeeClass: maker vs taker classification
    - FetchStatus: accumulator state machine
    - SkewOutcome: tri-state result of the advisory clock check
"""

from enum import Enum


class TradeDirection(str, Enum):
    """Side of a P2P trade from the account holder's point of view."""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_str(cls, value: str) -> "TradeDirection | None":
        """Parse a direction case-insensitively, ignoring surrounding whitespace."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class OrderStatus(str, Enum):
    """Normalized order status."""

    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"


class FeeClass(str, Enum):
    """Liquidity role that determines which fee applies."""

    MAKER = "MAKER"
    TAKER = "TAKER"


class FetchStatus(str, Enum):
    """State of a query session's fetch machinery."""

    IDLE = "IDLE"
    FETCHING = "FETCHING"
    ERROR = "ERROR"


class SkewOutcome(str, Enum):
    """Result of comparing local and server clocks."""

    WITHIN_TOLERANCE = "within_tolerance"
    DRIFTED = "drifted"
    UNKNOWN_ASSUMED_TOLERANT = "unknown_assumed_tolerant"
