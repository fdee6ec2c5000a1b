"""Sensitive data scrubbing for reported messages and context."""

from __future__ import annotations

import re
from typing import Any

from storefront.config.monitoring import MAX_REPORTED_MESSAGE_LEN

FILTERED = "[FILTERED]"

_SENSITIVE_MARKERS = (
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"api[_-]?key", re.IGNORECASE),
    re.compile(r"e-?mail", re.IGNORECASE),
    re.compile(r"account[_-]?number", re.IGNORECASE),
    re.compile(r"payment[_-]?method", re.IGNORECASE),
    re.compile(r"passport", re.IGNORECASE),
    re.compile(r"\b(?:00253\s*)?77\s*\d{6}\b"),
    re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
)

# Order matters: keyed secrets before bare emails, account numbers before phones.
_REPLACEMENTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"password[=:]\s*\S+", re.IGNORECASE), "password=[FILTERED]"),
    (re.compile(r"token[=:]\s*\S+", re.IGNORECASE), "token=[FILTERED]"),
    (re.compile(r"secret[=:]\s*\S+", re.IGNORECASE), "secret=[FILTERED]"),
    (re.compile(r"api[_-]?key[=:]\s*\S+", re.IGNORECASE), "api_key=[FILTERED]"),
    (re.compile(r"email[=:]\s*[^\s@]+@[^\s,}\"]+", re.IGNORECASE), "email=[FILTERED]"),
    (re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[EMAIL_FILTERED]"),
    (re.compile(r"\b(?:00253\s*)?77\s*\d{6}\b"), "[ACCOUNT_NUMBER_FILTERED]"),
    (
        re.compile(r"(\+\d{1,3}[-\s]?)?\(?\d{2,4}\)?[-\s]?\d{2,4}[-\s]?\d{2,4}[-\s]?\d{2,4}"),
        "[PHONE_FILTERED]",
    ),
)

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "email",
    "phone",
    "account_name",
    "account_number",
    "payment_method",
    "message",
})


def contains_sensitive_data(text: str | None) -> bool:
    if not text:
        return False
    return any(pattern.search(text) for pattern in _SENSITIVE_MARKERS)


def filter_message(text: str | None, *, max_len: int = MAX_REPORTED_MESSAGE_LEN) -> str:
    if not text:
        return ""
    filtered = text
    for pattern, replacement in _REPLACEMENTS:
        filtered = pattern.sub(replacement, filtered)
    if len(filtered) > max_len:
        filtered = f"{filtered[:max_len]}... [TRUNCATED]"
    return filtered


def scrub_value(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS:
        return FILTERED
    if isinstance(value, str):
        return filter_message(value) if contains_sensitive_data(value) else value
    if isinstance(value, dict):
        return scrub_mapping(value)
    return value


def scrub_mapping(values: dict[str, Any] | None) -> dict[str, Any]:
    return {str(key): scrub_value(str(key), value) for key, value in (values or {}).items()}


__all__ = [
    "FILTERED",
    "SENSITIVE_KEYS",
    "contains_sensitive_data",
    "filter_message",
    "scrub_mapping",
    "scrub_value",
]
