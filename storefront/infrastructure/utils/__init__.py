"""Shared infrastructure utilities."""

from storefront.infrastructure.utils.encryption import EncryptionError, EncryptionService
from storefront.infrastructure.utils.validation import ValidationError

__all__ = [
    "EncryptionError",
    "EncryptionService",
    "ValidationError",
]
