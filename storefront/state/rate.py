"""Rate governance state (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class RateCategory(str, Enum):
    PUBLIC = "public"
    API = "api"
    CONTACT = "contact"
    ORDER = "order"


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    limit: int
    window_seconds: float


@dataclass(slots=True)
class RateWindowEntry:
    identity: str
    category: RateCategory
    window_start: float
    count: int = 1


@dataclass(frozen=True, slots=True)
class RateDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after_ms: int = 0


@dataclass(frozen=True, slots=True)
class ClientIdentity:
    """Rate governance key; `forwarded` marks an address read from a proxy header."""

    address: str
    forwarded: bool = False


__all__ = ["ClientIdentity", "RateCategory", "RateDecision", "RateLimitPolicy", "RateWindowEntry"]
