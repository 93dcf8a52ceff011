"""HMAC-SHA256 request signing for authenticated endpoints."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

SIGNATURE_PARAM = "signature"


def build_query_string(params: Mapping[str, Any]) -> str:
    """Serialize parameters in insertion order, URL-encoded.

    Examples:
        >>> build_query_string({"timestamp": 1, "recvWindow": 60000})
        'timestamp=1&recvWindow=60000'
    """
    return urlencode(list(params.items()))


def generate_signature(query_string: str, secret_key: str) -> str:
    """Hex-encoded HMAC-SHA256 of the UTF-8 query string."""
    return hmac.new(
        secret_key.encode("utf-8"),
        query_string.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


class RequestSigner:
    """Signs ordered parameter mappings with a secret key.

    Identical parameters and secret always give an identical signature. The
    secret must be non-empty; callers validate it before signing.
    """

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key

    def signature(self, params: Mapping[str, Any]) -> str:
        return generate_signature(build_query_string(params), self._secret_key)

    def sign(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Return a new mapping with ``signature`` appended as the last entry."""
        signed = dict(params)
        signed[SIGNATURE_PARAM] = self.signature(params)
        return signed
