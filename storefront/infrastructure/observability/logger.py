"""structlog-backed observability for the storefront client."""

import logging
from collections.abc import MutableMapping
from typing import Any

import structlog

from storefront.domain.interfaces.observability_manager import (
    ObservabilityError,
    ObservabilityManager,
)

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = frozenset({"token", "password", "authorization", "razorpay_signature", "signature"})


def sanitize_for_logging(data: Any) -> Any:
    """Redact bearer tokens, passwords and payment signatures.

    Walks dicts and lists; keys are matched case-insensitively, and any
    string carrying a bearer credential is masked wherever it sits.
    """
    if isinstance(data, dict):
        return {
            key: REDACTED
            if isinstance(key, str) and key.lower() in SENSITIVE_KEYS
            else sanitize_for_logging(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [sanitize_for_logging(item) for item in data]
    if isinstance(data, str) and data.startswith("Bearer "):
        return f"Bearer {REDACTED}"
    return data


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor applying :func:`sanitize_for_logging` to every entry."""
    return sanitize_for_logging(dict(event_dict))


def configure_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Route structlog through stdlib logging.

    JSON lines when ``json_format`` is set (production), coloured console
    output otherwise. Secrets are redacted before rendering, so anything
    logged through structlog (notifications included) is covered.
    """
    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.INFO), format="%(message)s")


class DefaultObservabilityManager(ObservabilityManager):
    """Writes events and log lines through structlog.

    Events (``session_started``, ``transition_committed``, ``order_placed``...)
    go to the ``storefront.events`` logger with the event type as the log
    message; free-form logs go to ``storefront``.
    """

    def __init__(self, log_level: str = "INFO", json_format: bool = True) -> None:
        configure_logging(log_level=log_level, json_format=json_format)
        self._events = structlog.get_logger("storefront.events")
        self._logger = structlog.get_logger("storefront")

    async def emit_event(
        self,
        event_type: str,
        payload: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Emit an event for observability.

        Raises:
            ObservabilityError: If event emission fails.
        """
        fields = dict(payload)
        if metadata:
            fields["metadata"] = metadata
        try:
            self._events.info(event_type, **fields)
        except Exception as e:
            raise ObservabilityError(f"Failed to emit {event_type} event: {e}") from e

    async def log(
        self,
        level: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Log ``message`` at ``level``; unknown levels fall back to INFO.

        Raises:
            ObservabilityError: If logging fails.
        """
        log_method = getattr(self._logger, level.lower(), self._logger.info)
        try:
            log_method(message, **(context or {}))
        except Exception as e:
            raise ObservabilityError(f"Failed to log message: {e}") from e
