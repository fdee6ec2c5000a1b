"""Logging initialization."""

from __future__ import annotations

import os
import logging

from storefront.config.logging import (
    ENV_LOG_LEVEL,
    ENV_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_FORMAT,
    THIRD_PARTY_LOGGERS,
    ENV_SHOW_THIRD_PARTY_LOGS,
)


def configure_logging() -> None:
    # Driver and HTTP client loggers are chatty at INFO. Keep them tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_THIRD_PARTY_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    level = (os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    log_format = os.getenv(ENV_LOG_FORMAT) or DEFAULT_LOG_FORMAT
    logging.basicConfig(level=level if level in logging.getLevelNamesMapping() else DEFAULT_LOG_LEVEL, format=log_format)


__all__ = ["configure_logging"]
