"""Session store implementations."""

from storefront.infrastructure.session_store.file_store import EncryptedFileSessionStore
from storefront.infrastructure.session_store.memory_store import InMemorySessionStore

__all__ = [
    "EncryptedFileSessionStore",
    "InMemorySessionStore",
]
