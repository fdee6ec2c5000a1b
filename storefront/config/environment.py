"""Deployment posture configuration."""

from __future__ import annotations

ENV_APP_ENV = "APP_ENV"

APP_ENV_PRODUCTION = "production"
APP_ENV_DEVELOPMENT = "development"

DEFAULT_APP_ENV = APP_ENV_PRODUCTION

__all__ = [
    "APP_ENV_DEVELOPMENT",
    "APP_ENV_PRODUCTION",
    "DEFAULT_APP_ENV",
    "ENV_APP_ENV",
]
