"""Configuration module exports (env names and defaults only)."""

from .environment import ENV_APP_ENV, DEFAULT_APP_ENV
from .limits import DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE

__all__ = [
    "DEFAULT_APP_ENV",
    "DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE",
    "ENV_APP_ENV",
]
