"""Custom exception hierarchy.

Record-level errors (ValidationError, NumericParseError) are raised and caught
inside the normalizer. Page-level errors (ProtocolError, ProviderError and its
subclasses, NetworkError) escape the fetcher and accumulator unchanged.
"""

from __future__ import annotations


class P2PError(Exception):
    """Base exception for all library errors."""

    pass


class ValidationError(P2PError):
    """A record or argument failed validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NumericParseError(ValidationError):
    """A numeric field could not be parsed."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        super().__init__(message, field=field)
        self.value = value


class ProtocolError(P2PError):
    """Response payload does not match the documented shape."""

    pass


class NetworkError(P2PError):
    """Transport-level failure (connection, DNS, timeout)."""

    pass


class ProviderError(P2PError):
    """Non-success response from the upstream service."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ProviderError):
    """Upstream rate limit exceeded (HTTP 429)."""

    def __init__(self, message: str, retry_after: int = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class IpBannedError(ProviderError):
    """Client IP banned by upstream (HTTP 418). Not safe to retry automatically."""

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        super().__init__(message, status_code=418)
        self.retry_after = retry_after


class UpstreamError(ProviderError):
    """Any other non-2xx response, carrying the upstream message."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        upstream_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.upstream_code = upstream_code
