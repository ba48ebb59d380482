"""Structlog-backed notifier."""

from collections import deque
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict

from storefront.domain.interfaces.notifier import Notifier


class Notification(BaseModel):
    level: Literal["success", "error", "info"]
    message: str

    model_config = ConfigDict(frozen=True)


class LoggingNotifier(Notifier):
    """Writes notifications to the ``storefront.notifications`` logger.

    The most recent notifications are kept (bounded) so a host application
    can render them as toasts.
    """

    def __init__(self, max_history: int = 50) -> None:
        self._logger = structlog.get_logger("storefront.notifications")
        self._history: deque[Notification] = deque(maxlen=max_history if max_history > 0 else None)

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    @property
    def last(self) -> Notification | None:
        return self._history[-1] if self._history else None

    def success(self, message: str) -> None:
        self._history.append(Notification(level="success", message=message))
        self._logger.info("notification", level_hint="success", message=message)

    def error(self, message: str) -> None:
        self._history.append(Notification(level="error", message=message))
        self._logger.warning("notification", level_hint="error", message=message)

    def info(self, message: str) -> None:
        self._history.append(Notification(level="info", message=message))
        self._logger.info("notification", level_hint="info", message=message)
