"""Binance P2P connector implementation."""

from .clock import ClockSkewGuard, SkewCheck, is_within_tolerance
from .normalizer import NormalizedBatch, OrderNormalizer, RejectedRecord, normalize_status
from .rest.provider import BinanceP2PConnector
from .signing import RequestSigner, build_query_string, generate_signature

__all__ = [
    "BinanceP2PConnector",
    "ClockSkewGuard",
    "NormalizedBatch",
    "OrderNormalizer",
    "RejectedRecord",
    "RequestSigner",
    "SkewCheck",
    "build_query_string",
    "generate_signature",
    "is_within_tolerance",
    "normalize_status",
]
