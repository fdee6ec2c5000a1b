"""Logging configuration."""

from __future__ import annotations

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FORMAT = "LOG_FORMAT"
ENV_SHOW_THIRD_PARTY_LOGS = "SHOW_THIRD_PARTY_LOGS"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers kept at WARNING unless SHOW_THIRD_PARTY_LOGS is set.
THIRD_PARTY_LOGGERS = ("asyncpg", "httpx", "httpcore")

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "DEFAULT_LOG_LEVEL",
    "ENV_LOG_FORMAT",
    "ENV_LOG_LEVEL",
    "ENV_SHOW_THIRD_PARTY_LOGS",
    "THIRD_PARTY_LOGGERS",
]
