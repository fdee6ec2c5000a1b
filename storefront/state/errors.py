"""Classified error types (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class ErrorKind(str, Enum):
    CONNECTION_ERROR = "connection_error"
    TIMEOUT = "timeout"
    PERMISSION_ERROR = "permission_error"
    CONFIG_ERROR = "config_error"
    VALIDATION_ERROR = "validation_error"
    RATE_LIMITED = "rate_limited"
    EMAIL_SERVICE_ERROR = "email_service_error"
    MEDIA_LOAD_ERROR = "media_load_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ClassifiedError:
    kind: ErrorKind
    retryable: bool
    http_status: int
    user_message: str


__all__ = ["ClassifiedError", "ErrorKind"]
