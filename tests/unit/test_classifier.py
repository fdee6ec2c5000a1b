from __future__ import annotations

import pytest

from storefront.state.errors import ErrorKind
from storefront.handlers.classifier import classify
from storefront.errors import RateLimitError, ConfigurationError, EmailDeliveryError


class _PgError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


class _CodedError(Exception):
    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


def test_classify_none_is_unknown() -> None:
    result = classify(None)
    assert result.kind is ErrorKind.UNKNOWN
    assert result.retryable is False
    assert result.http_status == 500


@pytest.mark.parametrize("code", ["08001", "08000", "08006", "57P01", "53300"])
def test_connection_codes_win_regardless_of_message(code: str) -> None:
    result = classify(_PgError("permission denied for relation x", code))
    assert result.kind is ErrorKind.CONNECTION_ERROR
    assert result.retryable is True
    assert result.http_status == 503


def test_errno_style_code_is_connection() -> None:
    result = classify(_CodedError("connect ECONNREFUSED 127.0.0.1:5432", "ECONNREFUSED"))
    assert result.kind is ErrorKind.CONNECTION_ERROR


def test_builtin_connection_error_is_connection() -> None:
    assert classify(ConnectionResetError("peer reset")).kind is ErrorKind.CONNECTION_ERROR


def test_timeout_message_is_retryable() -> None:
    result = classify(Exception("Database query timeout"))
    assert result.kind is ErrorKind.TIMEOUT
    assert result.retryable is True
    assert result.http_status == 503


def test_query_canceled_code_is_timeout() -> None:
    assert classify(_PgError("canceling statement due to statement timeout", "57014")).kind is ErrorKind.TIMEOUT


def test_timeout_error_type_is_timeout() -> None:
    assert classify(TimeoutError()).kind is ErrorKind.TIMEOUT


def test_permission_is_not_retryable() -> None:
    result = classify(_PgError("must be owner of table", "42501"))
    assert result.kind is ErrorKind.PERMISSION_ERROR
    assert result.retryable is False
    assert result.http_status == 403


def test_undefined_table_is_config() -> None:
    result = classify(_PgError('relation "catalog.templates" does not exist', "42P01"))
    assert result.kind is ErrorKind.CONFIG_ERROR
    assert result.retryable is False
    assert result.http_status == 500


def test_configuration_error_type_is_config() -> None:
    assert classify(ConfigurationError("bad")).kind is ErrorKind.CONFIG_ERROR


def test_invalid_text_representation_is_validation() -> None:
    result = classify(_PgError("invalid input syntax for type uuid", "22P02"))
    assert result.kind is ErrorKind.VALIDATION_ERROR
    assert result.http_status == 400


def test_rate_limit_error_type_is_rate_limited() -> None:
    result = classify(RateLimitError(retry_in=3.0, limit=2, window_seconds=60.0))
    assert result.kind is ErrorKind.RATE_LIMITED
    assert result.retryable is False
    assert result.http_status == 429


def test_email_delivery_failure_is_retryable() -> None:
    result = classify(EmailDeliveryError("email service unavailable (status 503)", code="503"))
    assert result.kind is ErrorKind.EMAIL_SERVICE_ERROR
    assert result.retryable is True


def test_media_and_network_messages() -> None:
    assert classify(Exception("cloudinary asset failed")).kind is ErrorKind.MEDIA_LOAD_ERROR
    assert classify(Exception("fetch failed")).kind is ErrorKind.NETWORK_ERROR


def test_rule_order_prefers_earlier_match() -> None:
    # "timeout" beats "email" because availability rules are evaluated first.
    assert classify(Exception("email send timeout")).kind is ErrorKind.TIMEOUT


def test_unmatched_fault_is_unknown() -> None:
    result = classify(ValueError("something odd"))
    assert result.kind is ErrorKind.UNKNOWN
    assert result.retryable is False
