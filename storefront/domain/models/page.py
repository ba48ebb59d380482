"""Paginated collection model."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of an admin listing (``page`` is 1-based)."""

    items: list[T] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    pages: int = Field(default=1, ge=0)
    total: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def has_pagination(self) -> bool:
        return self.pages > 1
