"""Error reporting configuration."""

from __future__ import annotations

ENV_MONITORING_ENABLED = "MONITORING_ENABLED"
ENV_MONITORING_LOGGER = "MONITORING_LOGGER"

DEFAULT_MONITORING_ENABLED = True
DEFAULT_MONITORING_LOGGER = "storefront.monitoring.events"

# Reported messages are truncated after scrubbing.
MAX_REPORTED_MESSAGE_LEN = 250

__all__ = [
    "DEFAULT_MONITORING_ENABLED",
    "DEFAULT_MONITORING_LOGGER",
    "ENV_MONITORING_ENABLED",
    "ENV_MONITORING_LOGGER",
    "MAX_REPORTED_MESSAGE_LEN",
]
