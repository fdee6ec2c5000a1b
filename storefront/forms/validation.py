"""Input normalization helpers shared by schemas and path parameters."""

from __future__ import annotations

import re
import uuid
from typing import Any

from pydantic import ValidationError

from storefront.config.forms import CLEAN_STRING_MAX_LEN

_UUID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_ANGLE_BRACKETS = re.compile(r"[<>]")

FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "subject": "Subject",
    "message": "Message",
    "last_name": "Last name",
    "first_name": "First name",
    "phone": "Phone",
    "payment_method": "Payment method",
    "account_name": "Account name",
    "account_number": "Account number",
    "application_id": "Application",
    "application_fee": "Amount",
}


def normalize_uuid(value: Any) -> str | None:
    """Return the canonical lowercase form of a dashed UUID, or None."""
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not _UUID_PATTERN.match(candidate):
        return None
    return str(uuid.UUID(candidate))


def clean_string(value: Any, *, max_len: int = CLEAN_STRING_MAX_LEN) -> Any:
    if not isinstance(value, str):
        return value
    return _ANGLE_BRACKETS.sub("", value.strip())[:max_len]


def _describe(error: dict[str, Any]) -> str:
    field = str(error["loc"][0]) if error.get("loc") else ""
    label = FIELD_LABELS.get(field, field.replace("_", " ").capitalize() or "Value")
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f"{label} is required"
    if kind == "string_too_short":
        return f"{label} is too short (minimum {ctx.get('min_length')} characters)"
    if kind == "string_too_long":
        return f"{label} is too long (maximum {ctx.get('max_length')} characters)"
    if kind == "greater_than_equal":
        return f"{label} must be at least {ctx.get('ge')}"
    if kind == "less_than_equal":
        return f"{label} must not exceed {ctx.get('le')}"
    if kind == "value_error" and ctx.get("error") is not None:
        return str(ctx["error"])
    return f"{label} is invalid"


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic ValidationError into one message per field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "__root__"
        errors.setdefault(field, _describe(error))
    return errors


__all__ = ["clean_string", "field_errors", "normalize_uuid"]
