"""Outbound email message (dataclasses only)."""

from __future__ import annotations

from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class EmailMessage:
    to: tuple[str, ...]
    subject: str
    text: str
    reply_to: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class EmailReceipt:
    message_id: str | None


__all__ = ["EmailMessage", "EmailReceipt"]
