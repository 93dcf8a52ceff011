"""Data models.

All value models are pydantic v2 models with frozen=True; amounts are
Decimal. QueryState (see ``clients.accumulator``) is the only mutable state and
lives with the accumulator that owns it.
"""

from .credentials import Credentials, SavedCredential
from .order import CanonicalOrder, net_crypto_amount
from .requests import FilterCriteria, PageRequest, SearchCriteria

__all__ = [
    "CanonicalOrder",
    "Credentials",
    "FilterCriteria",
    "PageRequest",
    "SavedCredential",
    "SearchCriteria",
    "net_crypto_amount",
]
