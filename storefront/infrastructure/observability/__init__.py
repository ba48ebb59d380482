"""Observability infrastructure module."""

from storefront.infrastructure.observability.logger import (
    DefaultObservabilityManager,
    configure_logging,
    sanitize_for_logging,
)
from storefront.infrastructure.observability.notifier import LoggingNotifier, Notification

__all__ = [
    "DefaultObservabilityManager",
    "LoggingNotifier",
    "Notification",
    "configure_logging",
    "sanitize_for_logging",
]
