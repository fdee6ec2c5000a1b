"""Structural validation for the contact and order forms."""

from __future__ import annotations

from typing import Any

from pydantic import Field, EmailStr, BaseModel, ConfigDict, field_validator

from storefront.config.forms import (
    FEE_MAX,
    FEE_MIN,
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    EMAIL_MAX_LEN,
    PHONE_MAX_LEN,
    PHONE_MIN_LEN,
    MESSAGE_MAX_LEN,
    MESSAGE_MIN_LEN,
    SUBJECT_MAX_LEN,
    SUBJECT_MIN_LEN,
    PHONE_MIN_DIGITS,
    ACCOUNT_NAME_MAX_LEN,
    ACCOUNT_NAME_MIN_LEN,
    ACCOUNT_NUMBER_MAX_LEN,
    ACCOUNT_NUMBER_MIN_LEN,
)

from .validation import clean_string, normalize_uuid


def _check_email_length(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if len(value) > EMAIL_MAX_LEN:
            raise ValueError(f"Email is too long (maximum {EMAIL_MAX_LEN} characters)")
    return value


class ContactForm(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr
    subject: str = Field(min_length=SUBJECT_MIN_LEN, max_length=SUBJECT_MAX_LEN)
    message: str = Field(min_length=MESSAGE_MIN_LEN, max_length=MESSAGE_MAX_LEN)

    @field_validator("email", mode="before")
    @classmethod
    def _email_length(cls, value: Any) -> Any:
        return _check_email_length(value)


class OrderForm(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    last_name: str = Field(min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    first_name: str = Field(min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr
    phone: str = Field(min_length=PHONE_MIN_LEN, max_length=PHONE_MAX_LEN)
    payment_method: str
    account_name: str | None = Field(default=None, min_length=ACCOUNT_NAME_MIN_LEN, max_length=ACCOUNT_NAME_MAX_LEN)
    account_number: str | None = Field(
        default=None,
        min_length=ACCOUNT_NUMBER_MIN_LEN,
        max_length=ACCOUNT_NUMBER_MAX_LEN,
    )
    application_id: str
    application_fee: float = Field(ge=FEE_MIN, le=FEE_MAX)

    @field_validator("last_name", "first_name", "phone", "payment_method", "application_id", mode="before")
    @classmethod
    def _clean(cls, value: Any) -> Any:
        return clean_string(value)

    @field_validator("account_name", "account_number", mode="before")
    @classmethod
    def _clean_optional(cls, value: Any) -> Any:
        value = clean_string(value)
        return value or None

    @field_validator("email", mode="before")
    @classmethod
    def _email_length(cls, value: Any) -> Any:
        return _check_email_length(clean_string(value))

    @field_validator("phone")
    @classmethod
    def _phone_digits(cls, value: str) -> str:
        if sum(char.isdigit() for char in value) < PHONE_MIN_DIGITS:
            raise ValueError(f"Phone must contain at least {PHONE_MIN_DIGITS} digits")
        return value

    @field_validator("payment_method", "application_id")
    @classmethod
    def _identifier(cls, value: str) -> str:
        normalized = normalize_uuid(value)
        if normalized is None:
            raise ValueError("Invalid identifier format")
        return normalized


__all__ = ["ContactForm", "OrderForm"]
