"""Order and catalog records used by the write path (dataclasses only)."""

from __future__ import annotations

from datetime import datetime
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OrderApplication:
    application_id: str
    name: str
    fee: float


@dataclass(frozen=True, slots=True)
class PaymentPlatform:
    platform_id: str
    name: str
    is_cash_payment: bool


@dataclass(frozen=True, slots=True)
class NewOrder:
    last_name: str
    first_name: str
    email: str
    phone: str
    platform_id: str
    account_name: str
    account_number: str
    application_id: str
    price: float
    payment_status: str


@dataclass(frozen=True, slots=True)
class OrderRecord:
    order_id: str
    payment_status: str
    created: datetime | None


__all__ = ["NewOrder", "OrderApplication", "OrderRecord", "PaymentPlatform"]
