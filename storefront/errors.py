"""Shared error types for the storefront server."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a client identity exhausts its window for a category."""

    retry_in: float
    limit: int
    window_seconds: float


class ConfigurationError(Exception):
    """Raised when a required setting is missing or malformed."""


class EmailDeliveryError(Exception):
    """Raised when the email provider refuses or fails a send."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


__all__ = ["ConfigurationError", "EmailDeliveryError", "RateLimitError"]
