"""Form constraints and submission constants."""

from __future__ import annotations

NAME_MIN_LEN = 2
NAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
SUBJECT_MIN_LEN = 3
SUBJECT_MAX_LEN = 100
MESSAGE_MIN_LEN = 10
MESSAGE_MAX_LEN = 1000

PHONE_MIN_LEN = 8
PHONE_MAX_LEN = 20
PHONE_MIN_DIGITS = 8
ACCOUNT_NAME_MIN_LEN = 2
ACCOUNT_NAME_MAX_LEN = 100
ACCOUNT_NUMBER_MIN_LEN = 5
ACCOUNT_NUMBER_MAX_LEN = 50
FEE_MIN = 1.0
FEE_MAX = 100_000.0
FEE_TOLERANCE = 0.01

# Free-text fields are clipped before validation.
CLEAN_STRING_MAX_LEN = 200

CASH_ACCOUNT_NAME = "CASH"
CASH_ACCOUNT_NUMBER = "N/A"
ORDER_STATUS_UNPAID = "unpaid"

DUPLICATE_WINDOW_S = 5 * 60.0

# Outcome codes
CODE_VALIDATION_FAILED = "validation_failed"
CODE_RATE_LIMITED = "rate_limited"
CODE_DUPLICATE = "duplicate_email"
CODE_APPLICATION_NOT_FOUND = "application_not_found"
CODE_PLATFORM_NOT_FOUND = "platform_not_found"
CODE_PRICE_MISMATCH = "price_mismatch"
CODE_INSERT_FAILED = "insert_failed"
CODE_SEND_FAILED = "send_failed"

__all__ = [
    "ACCOUNT_NAME_MAX_LEN",
    "ACCOUNT_NAME_MIN_LEN",
    "ACCOUNT_NUMBER_MAX_LEN",
    "ACCOUNT_NUMBER_MIN_LEN",
    "CASH_ACCOUNT_NAME",
    "CASH_ACCOUNT_NUMBER",
    "CLEAN_STRING_MAX_LEN",
    "CODE_APPLICATION_NOT_FOUND",
    "CODE_DUPLICATE",
    "CODE_INSERT_FAILED",
    "CODE_PLATFORM_NOT_FOUND",
    "CODE_PRICE_MISMATCH",
    "CODE_RATE_LIMITED",
    "CODE_SEND_FAILED",
    "CODE_VALIDATION_FAILED",
    "DUPLICATE_WINDOW_S",
    "EMAIL_MAX_LEN",
    "FEE_MAX",
    "FEE_MIN",
    "FEE_TOLERANCE",
    "MESSAGE_MAX_LEN",
    "MESSAGE_MIN_LEN",
    "NAME_MAX_LEN",
    "NAME_MIN_LEN",
    "ORDER_STATUS_UNPAID",
    "PHONE_MAX_LEN",
    "PHONE_MIN_DIGITS",
    "PHONE_MIN_LEN",
    "SUBJECT_MAX_LEN",
    "SUBJECT_MIN_LEN",
]
