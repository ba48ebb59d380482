"""Session data model for the authenticated storefront user."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.models.user import UserAddress, UserRole


class Session(BaseModel):
    """The signed-in user and the bearer token used for every API call.

    A Session is created from the login response, persisted through a
    SessionStore, and torn down when the backend answers 401. The token is
    never logged.
    """

    user_id: str = Field(..., alias="_id", min_length=1)
    name: str = ""
    email: str = ""
    phone: str | None = None
    role: UserRole = UserRole.User
    address: UserAddress | None = None
    token: str = Field(..., min_length=1, repr=False)
    started_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.Admin

    @classmethod
    def from_login_response(cls, data: dict[str, Any]) -> "Session":
        """Build a session from an ``/auth/login`` or ``/auth/register`` response.

        The backend returns the user fields and ``token`` at the top level;
        some deployments nest the user under ``user``.

        Args:
            data: Decoded JSON response body.

        Returns:
            Session for the authenticated user.
        """
        payload = dict(data.get("user") or {})
        payload.setdefault("token", data.get("token"))
        for key, value in data.items():
            if key != "user":
                payload.setdefault(key, value)
        return cls.model_validate(payload)

    def to_document(self) -> dict[str, Any]:
        """Serialize for a SessionStore."""
        return self.model_dump(mode="json", by_alias=True)
