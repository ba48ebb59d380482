"""Notifier interface for user-facing notifications."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Sink for the short notifications a storefront page shows the user.

    Components report outcomes here (a web page shows them as
    toasts); they never raise for a failure they have already reported.
    """

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        """Neutral notification. Defaults to ``success`` styling."""
        self.success(message)
