"""Encryption utilities for session persistence at rest."""

import os
from base64 import urlsafe_b64encode

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ENCRYPTION_KEY_ENV = "STOREFRONT_ENCRYPTION_KEY"
ENCRYPTION_SALT_ENV = "STOREFRONT_ENCRYPTION_SALT"


class EncryptionError(Exception):
    """Raised when encryption/decryption operations fail."""

    pass


class EncryptionService:
    """Encrypts and decrypts persisted session documents with Fernet.

    The key is either a Fernet key (44 base64 characters) or a passphrase
    from which one is derived with PBKDF2.
    """

    def __init__(self, encryption_key: str | None = None) -> None:
        """Initialize EncryptionService with encryption key.

        Args:
            encryption_key: Optional encryption key string. If None, loads from
                the STOREFRONT_ENCRYPTION_KEY environment variable. Outside
                production a key is generated for the lifetime of the process.

        Raises:
            EncryptionError: If no key is available in production.
        """
        if encryption_key is None:
            encryption_key = os.getenv(ENCRYPTION_KEY_ENV)
            if not encryption_key:
                environment = os.getenv("ENVIRONMENT", os.getenv("ENV", "development")).lower()
                if environment == "production":
                    raise EncryptionError(
                        f"{ENCRYPTION_KEY_ENV} environment variable is required in production"
                    )
                encryption_key = Fernet.generate_key().decode()
                os.environ[ENCRYPTION_KEY_ENV] = encryption_key

        self._fernet = Fernet(self._get_fernet_key(encryption_key))

    def _get_fernet_key(self, key_str: str) -> bytes:
        """Get Fernet key from string (either direct Fernet key or passphrase).

        Raises:
            EncryptionError: If key format is invalid.
        """
        if len(key_str) == 44:
            return key_str.encode()

        if not key_str:
            raise EncryptionError("Encryption key cannot be empty")

        salt = os.getenv(ENCRYPTION_SALT_ENV, "storefront-salt").encode()
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=100000,
        )
        return urlsafe_b64encode(kdf.derive(key_str.encode()))

    def encrypt(self, plaintext: str) -> bytes:
        """Encrypt ``plaintext``.

        Raises:
            EncryptionError: If encryption fails.
        """
        try:
            return self._fernet.encrypt(plaintext.encode())
        except Exception as e:
            raise EncryptionError(f"Failed to encrypt data: {e}") from e

    def decrypt(self, encrypted_data: bytes) -> str:
        """Decrypt data produced by :meth:`encrypt`.

        Raises:
            EncryptionError: If the data was tampered with or the key differs.
        """
        try:
            return self._fernet.decrypt(encrypted_data).decode()
        except InvalidToken as e:
            raise EncryptionError("Failed to decrypt data: invalid token or wrong key") from e
        except Exception as e:
            raise EncryptionError(f"Failed to decrypt data: {e}") from e
