"""Core components."""

from .enums import FeeClass, FetchStatus, OrderStatus, SkewOutcome, TradeDirection
from .exceptions import (
    IpBannedError,
    NetworkError,
    NumericParseError,
    P2PError,
    ProtocolError,
    ProviderError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "TradeDirection",
    "OrderStatus",
    "FeeClass",
    "FetchStatus",
    "SkewOutcome",
    "P2PError",
    "ValidationError",
    "NumericParseError",
    "ProtocolError",
    "NetworkError",
    "ProviderError",
    "RateLimitError",
    "IpBannedError",
    "UpstreamError",
]
