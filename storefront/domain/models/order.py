"""Order data model and OrderStatus enum."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    """Lifecycle status of an order, as owned by the server."""

    Pending = "pending"
    Confirmed = "confirmed"
    Processing = "processing"
    Shipped = "shipped"
    Delivered = "delivered"
    Cancelled = "cancelled"

    @property
    def label(self) -> str:
        return self.value.capitalize()


CUSTOMER_CANCELLABLE_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.Pending, OrderStatus.Confirmed}
)
"""Statuses from which a customer may cancel their own order."""


class StatusHistoryEntry(BaseModel):
    """One server-appended entry of an order's status log."""

    status: OrderStatus
    note: str | None = None
    date: datetime | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class ShippingAddress(BaseModel):
    """Delivery address attached to an order or entered at checkout."""

    name: str = ""
    email: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    country: str = "India"

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )


class OrderItem(BaseModel):
    """A line of an order."""

    product_id: str | None = Field(default=None, alias="product")
    name: str = ""
    image: str | None = None
    price: float = Field(default=0, ge=0)
    quantity: int = Field(default=1, ge=1)
    customization: dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class PaymentInfo(BaseModel):
    method: str | None = None
    status: str | None = None

    model_config = ConfigDict(extra="ignore")


class OrderCustomer(BaseModel):
    id: str | None = Field(default=None, alias="_id")
    name: str | None = None
    email: str | None = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Order(BaseModel):
    """Order as read from the API.

    Orders are server-authoritative: the client never mutates ``order_status``
    locally, it re-reads the order after every change.
    """

    id: str = Field(..., alias="_id", min_length=1)
    order_number: str = Field(default="", alias="orderNumber")
    order_status: OrderStatus = Field(default=OrderStatus.Pending, alias="orderStatus")
    user: OrderCustomer | None = None
    items: list[OrderItem] = Field(default_factory=list)
    shipping_address: ShippingAddress | None = Field(default=None, alias="shippingAddress")
    payment_info: PaymentInfo | None = Field(default=None, alias="paymentInfo")
    items_price: float | None = Field(default=None, alias="itemsPrice")
    shipping_price: float | None = Field(default=None, alias="shippingPrice")
    tax_price: float | None = Field(default=None, alias="taxPrice")
    total_price: float | None = Field(default=None, alias="totalPrice")
    status_history: list[StatusHistoryEntry] = Field(
        default_factory=list, alias="statusHistory"
    )
    created_at: datetime | None = Field(default=None, alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def label(self) -> str:
        """Identifier shown to an admin (order number, falling back to the id)."""
        return self.order_number or self.id

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id!r}, order_number={self.order_number!r}, "
            f"order_status={self.order_status.value})"
        )
