"""Encrypted file-backed session store.

The session document is serialized to JSON and encrypted with Fernet before
it touches the disk, so the bearer token is never stored in clear text.

Example:
    ```python
    store = EncryptedFileSessionStore("~/.storefront/session", EncryptionService())
    await store.save(session)
    ```
"""

import asyncio
import json
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from storefront.domain.interfaces.session_store import SessionStore, SessionStoreError
from storefront.domain.models.session import Session
from storefront.infrastructure.utils.encryption import EncryptionError, EncryptionService


class EncryptedFileSessionStore(SessionStore):
    """SessionStore persisting one encrypted session document to a file."""

    def __init__(
        self,
        path: str | Path,
        encryption_service: EncryptionService | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            path: File holding the encrypted session. Parent directories are
                created on first save.
            encryption_service: Service used to encrypt the document. Defaults
                to one keyed from STOREFRONT_ENCRYPTION_KEY.

        Raises:
            SessionStoreError: If the encryption service cannot be created.
        """
        self._path = Path(path).expanduser()
        if encryption_service is None:
            try:
                encryption_service = EncryptionService()
            except EncryptionError as e:
                raise SessionStoreError(f"Failed to initialize encryption service: {e}") from e
        self._encryption = encryption_service
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> Session | None:
        """Read and decrypt the stored session.

        Raises:
            SessionStoreError: If the file is unreadable, was encrypted with a
                different key, or does not hold a valid session.
        """
        async with self._lock:
            if not self._path.exists():
                return None
            try:
                encrypted = await asyncio.to_thread(self._path.read_bytes)
            except OSError as e:
                raise SessionStoreError(f"Failed to read session file: {e}") from e

        if not encrypted.strip():
            return None

        try:
            document = json.loads(self._encryption.decrypt(encrypted))
            return Session.model_validate(document)
        except EncryptionError as e:
            raise SessionStoreError(f"Failed to decrypt session file: {e}") from e
        except (ValueError, PydanticValidationError) as e:
            raise SessionStoreError(f"Session file does not hold a valid session: {e}") from e

    async def save(self, session: Session) -> None:
        try:
            encrypted = self._encryption.encrypt(json.dumps(session.to_document()))
        except EncryptionError as e:
            raise SessionStoreError(f"Failed to encrypt session: {e}") from e

        async with self._lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                await asyncio.to_thread(self._path.write_bytes, encrypted)
            except OSError as e:
                raise SessionStoreError(f"Failed to write session file: {e}") from e

    async def clear(self) -> None:
        async with self._lock:
            try:
                self._path.unlink(missing_ok=True)
            except OSError as e:
                raise SessionStoreError(f"Failed to remove session file: {e}") from e
