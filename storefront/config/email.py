"""Transactional email configuration."""

from __future__ import annotations

ENV_RESEND_API_KEY = "RESEND_API_KEY"
ENV_RESEND_FROM_EMAIL = "RESEND_FROM_EMAIL"
ENV_RESEND_TO_EMAIL = "RESEND_TO_EMAIL"
ENV_RESEND_API_URL = "RESEND_API_URL"
ENV_EMAIL_TIMEOUT_S = "EMAIL_TIMEOUT_S"

DEFAULT_RESEND_API_URL = "https://api.resend.com"
DEFAULT_EMAIL_TIMEOUT_S = 10.0

CONTACT_SUBJECT_PREFIX = "[Contact Benew]"
CONTACT_SOURCE_HEADER = "Benew-Contact-Form"
CONTACT_VERSION_HEADER = "2.0"

__all__ = [
    "CONTACT_SOURCE_HEADER",
    "CONTACT_SUBJECT_PREFIX",
    "CONTACT_VERSION_HEADER",
    "DEFAULT_EMAIL_TIMEOUT_S",
    "DEFAULT_RESEND_API_URL",
    "ENV_EMAIL_TIMEOUT_S",
    "ENV_RESEND_API_KEY",
    "ENV_RESEND_API_URL",
    "ENV_RESEND_FROM_EMAIL",
    "ENV_RESEND_TO_EMAIL",
]
