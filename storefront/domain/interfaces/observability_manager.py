"""ObservabilityManager interface for events and logging."""

from abc import ABC, abstractmethod
from typing import Any


class ObservabilityManager(ABC):
    """Where the client reports what happened, apart from user notifications.

    Events emitted by the library:

    - ``session_started`` / ``session_ended`` (payload carries ``reason``:
      ``logout`` or ``unauthorized``)
    - ``transition_committed`` / ``transition_failed`` / ``transition_cancelled``
    - ``order_placed``

    Callers treat a failing implementation as non-fatal wherever the
    underlying action already succeeded.
    """

    @abstractmethod
    async def emit_event(
        self,
        event_type: str,
        payload: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Record one of the events above.

        Raises:
            ObservabilityError: If the event could not be recorded.
        """

    @abstractmethod
    async def log(
        self,
        level: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Write a log line at ``level`` (DEBUG ... CRITICAL) with ``context``.

        Raises:
            ObservabilityError: If logging fails.
        """


class ObservabilityError(Exception):
    """Raised when observability operations fail."""

    pass
