"""SessionStore interface for persisting the signed-in session.

Example:
    ```python
    from storefront.infrastructure.session_store.memory_store import InMemorySessionStore

    store: SessionStore = InMemorySessionStore()
    await store.save(session)
    restored = await store.load()
    await store.clear()
    ```
"""

from abc import ABC, abstractmethod

from storefront.domain.models.session import Session


class SessionStoreError(Exception):
    """Raised when a session cannot be read, written, or cleared."""

    pass


class SessionStore(ABC):
    """Abstract persistence for at most one Session."""

    @abstractmethod
    async def load(self) -> Session | None:
        """Return the persisted session, or None when nobody is signed in.

        Raises:
            SessionStoreError: If the stored session cannot be read.
        """
        pass

    @abstractmethod
    async def save(self, session: Session) -> None:
        """Persist ``session``, replacing any previous one.

        Raises:
            SessionStoreError: If the session cannot be written.
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Forget the persisted session. Clearing an empty store is a no-op."""
        pass
