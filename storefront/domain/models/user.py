"""User data model and UserRole enum."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Access level of a storefront account."""

    User = "user"
    """Regular customer."""

    Admin = "admin"
    """Back-office administrator with full management privileges."""

    @property
    def label(self) -> str:
        return "Admin" if self is UserRole.Admin else "User"

    @property
    def article_label(self) -> str:
        """Label with its indefinite article ("an Admin", "a User")."""
        return "an Admin" if self is UserRole.Admin else "a User"


class UserAddress(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""

    model_config = ConfigDict(extra="ignore")


class User(BaseModel):
    """Account as read from the admin users listing."""

    id: str = Field(..., alias="_id", min_length=1)
    name: str = ""
    email: str = ""
    phone: str | None = None
    role: UserRole = UserRole.User
    address: UserAddress | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def label(self) -> str:
        return self.name or self.email or self.id

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.Admin
