"""Cart data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CartProduct(BaseModel):
    id: str | None = Field(default=None, alias="_id")
    name: str = ""
    images: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CartItem(BaseModel):
    """A cart line. ``price`` is the unit price at the time it was added."""

    id: str = Field(..., alias="_id", min_length=1)
    product: CartProduct | str | None = None
    price: float = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)
    selected_size: str | None = Field(default=None, alias="selectedSize")
    customization: dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Cart(BaseModel):
    """Server-side cart as returned by every ``/cart`` mutation."""

    items: list[CartItem] = Field(default_factory=list)
    total_price: float = Field(default=0, alias="totalPrice")
    total_items: int = Field(default=0, alias="totalItems")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def empty(cls) -> "Cart":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        """Number of units in the cart (``totalItems`` when the server sent it)."""
        return self.total_items or sum(item.quantity for item in self.items)
