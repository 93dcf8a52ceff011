"""p2precon - Binance P2P order history client and normalization pipeline."""

from .clients import (
    OrderFeed,
    OrderSummary,
    PaginationAccumulator,
    QueryState,
    filter_orders,
    summarize,
)
from .connectors.binance import (
    BinanceP2PConnector,
    ClockSkewGuard,
    NormalizedBatch,
    OrderNormalizer,
    RejectedRecord,
    RequestSigner,
    SkewCheck,
)
from .core import (
    FeeClass,
    FetchStatus,
    IpBannedError,
    NetworkError,
    NumericParseError,
    OrderStatus,
    P2PError,
    ProtocolError,
    ProviderError,
    RateLimitError,
    SkewOutcome,
    TradeDirection,
    UpstreamError,
    ValidationError,
)
from .models import (
    CanonicalOrder,
    Credentials,
    FilterCriteria,
    PageRequest,
    SavedCredential,
    SearchCriteria,
)
from .storage import CredentialStore, InMemoryCredentialStore, JsonFileCredentialStore

__version__ = "0.1.0"

__all__ = [
    # Core enums
    "TradeDirection",
    "OrderStatus",
    "FeeClass",
    "FetchStatus",
    "SkewOutcome",
    # Models
    "CanonicalOrder",
    "Credentials",
    "SavedCredential",
    "PageRequest",
    "SearchCriteria",
    "FilterCriteria",
    # Connector
    "BinanceP2PConnector",
    "ClockSkewGuard",
    "SkewCheck",
    "RequestSigner",
    "OrderNormalizer",
    "NormalizedBatch",
    "RejectedRecord",
    # Clients
    "OrderFeed",
    "OrderSummary",
    "PaginationAccumulator",
    "QueryState",
    "filter_orders",
    "summarize",
    # Storage
    "CredentialStore",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    # Exceptions
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
