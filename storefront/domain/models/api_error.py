"""ApiError model for standardized backend error handling."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories of API errors."""

    AuthenticationError = "authentication_error"
    """Session missing or expired (401)."""

    AuthorizationError = "authorization_error"
    """Authenticated but not allowed (403)."""

    ValidationError = "validation_error"
    """Request rejected as malformed (400, 422)."""

    NotFoundError = "not_found_error"
    """Entity does not exist (404)."""

    BusinessRuleError = "business_rule_error"
    """Server refused the operation on business grounds (409, other 4xx)."""

    ServerError = "server_error"
    """Backend failure (5xx)."""

    NetworkError = "network_error"
    """Transport failure or timeout; the request may not have reached the server."""

    UnknownError = "unknown_error"
    """Unknown or unclassified error."""


class ApiError(Exception):
    """Standardized error for backend calls.

    Every failed call to the storefront API surfaces as an ApiError. The
    ``message`` carries the server's ``{"message": ...}`` payload verbatim when
    there is one, so callers can show it to the user as-is.

    Example:
        ```python
        raise ApiError(
            category=ErrorCategory.BusinessRuleError,
            message="Cannot delete category with products",
            status_code=409,
        )
        ```
    """

    def __init__(
        self,
        category: ErrorCategory | str,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ApiError.

        Args:
            category: Error category (ErrorCategory enum or string).
            message: Human-readable error message.
            status_code: HTTP status code if a response was received.
            server_message: The message the server put in its error payload, if any.
            details: Additional error details.
        """
        self.category = ErrorCategory(category) if isinstance(category, str) else category
        self.message = message
        self.status_code = status_code
        self.server_message = server_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def is_unauthorized(self) -> bool:
        return self.category == ErrorCategory.AuthenticationError

    def user_message(self, fallback: str) -> str:
        """Message to show the user: the server's own message, else ``fallback``."""
        return self.server_message or fallback

    def __repr__(self) -> str:
        """String representation of the error."""
        return (
            f"ApiError(category={self.category.value}, "
            f"message={self.message!r}, status_code={self.status_code})"
        )

    def __str__(self) -> str:
        """Human-readable error message."""
        return self.message
