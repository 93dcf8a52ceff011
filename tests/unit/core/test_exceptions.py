"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from p2precon.core import (
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


def test_rate_limit_error_with_retry_after():
    error = RateLimitError("rate limit", retry_after=120)
    assert error.status_code == 429
    assert error.retry_after == 120
    assert isinstance(error, ProviderError)
    assert isinstance(error, P2PError)


def test_ip_banned_error_is_distinct_from_rate_limit():
    error = IpBannedError("banned")
    assert error.status_code == 418
    assert isinstance(error, ProviderError)
    assert not isinstance(error, RateLimitError)


def test_upstream_error_carries_codes():
    error = UpstreamError(
        "Signature for this request is not valid.", status_code=400, upstream_code=-1022
    )
    assert str(error) == "Signature for this request is not valid."
    assert error.status_code == 400
    assert error.upstream_code == -1022


def test_numeric_parse_error_is_validation_error():
    error = NumericParseError("amount is not numeric", field="amount", value="abc")
    assert isinstance(error, ValidationError)
    assert error.field == "amount"
    assert error.value == "abc"


def test_page_level_errors_are_not_record_level():
    for error in (ProtocolError("x"), NetworkError("x"), ProviderError("x")):
        assert isinstance(error, P2PError)
        assert not isinstance(error, ValidationError)
