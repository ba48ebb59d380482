"""Navigator interface for client-side navigation."""

from abc import ABC, abstractmethod


class Navigator(ABC):
    """Moves the host application to another route.

    The HTTP adapter uses it to force the login entry point after a 401;
    the checkout wizard hands it the placed order's page.
    """

    @abstractmethod
    def go_to(self, path: str) -> None:
        """Navigate to ``path`` (e.g. ``/login`` or ``/orders/<id>``)."""
        pass


class NullNavigator(Navigator):
    """Navigator that remembers the last requested path and does nothing else."""

    def __init__(self) -> None:
        self.current_path: str | None = None

    def go_to(self, path: str) -> None:
        self.current_path = path
