from __future__ import annotations

import logging

import pytest

from storefront.monitoring.reporter import Reporter
from storefront.monitoring.scrub import filter_message, scrub_mapping, contains_sensitive_data


def test_filter_message_masks_emails_and_secrets() -> None:
    filtered = filter_message("send failed for jane@example.com with api_key=abc123")
    assert "jane@example.com" not in filtered
    assert "[EMAIL_FILTERED]" in filtered
    assert "abc123" not in filtered


def test_filter_message_masks_account_numbers() -> None:
    assert "[ACCOUNT_NUMBER_FILTERED]" in filter_message("wallet 77 123456 rejected")


def test_filter_message_truncates() -> None:
    filtered = filter_message("x" * 400)
    assert filtered.endswith("... [TRUNCATED]")
    assert len(filtered) == 250 + len("... [TRUNCATED]")


def test_contains_sensitive_data() -> None:
    assert contains_sensitive_data("password reset") is True
    assert contains_sensitive_data("templates listed") is False


def test_scrub_mapping_filters_sensitive_keys_and_nested_values() -> None:
    scrubbed = scrub_mapping({"email": "a@b.co", "attempt": 2, "nested": {"phone": "77123456"}})
    assert scrubbed["email"] == "[FILTERED]"
    assert scrubbed["attempt"] == 2
    assert scrubbed["nested"]["phone"] == "[FILTERED]"


def test_reporter_logs_scrubbed_exception(caplog: pytest.LogCaptureFixture) -> None:
    reporter = Reporter(logger_name="storefront.test.events")
    with caplog.at_level(logging.ERROR, logger="storefront.test.events"):
        reporter.report_exception(RuntimeError("boom for jane@example.com"), {"tags": {"component": "x"}})

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert "jane@example.com" not in record.getMessage()
    assert record.tags == {"component": "x"}


def test_reporter_message_level(caplog: pytest.LogCaptureFixture) -> None:
    reporter = Reporter(logger_name="storefront.test.events")
    with caplog.at_level(logging.INFO, logger="storefront.test.events"):
        reporter.report_message("Slow templates load", {"level": "warning"})
    assert caplog.records[0].levelno == logging.WARNING


def test_disabled_reporter_emits_nothing(caplog: pytest.LogCaptureFixture) -> None:
    reporter = Reporter(enabled=False, logger_name="storefront.test.events")
    with caplog.at_level(logging.DEBUG, logger="storefront.test.events"):
        reporter.report_exception(RuntimeError("boom"))
        reporter.report_message("hello")
    assert caplog.records == []
