"""In-memory session store implementation."""

import asyncio

from storefront.domain.interfaces.session_store import SessionStore
from storefront.domain.models.session import Session


class InMemorySessionStore(SessionStore):
    """Keeps the session for the lifetime of the process.

    This is the default store; nothing survives a restart.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session
        self._write_lock = asyncio.Lock()

    async def load(self) -> Session | None:
        return self._session

    async def save(self, session: Session) -> None:
        async with self._write_lock:
            self._session = session

    async def clear(self) -> None:
        async with self._write_lock:
            self._session = None
