"""PaymentGateway interface for the external checkout widget."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GatewayCheckout(BaseModel):
    """Options handed to the gateway widget, built from ``/payment/create-order``."""

    key: str | None = None
    amount: int = Field(..., ge=0, description="Amount in the gateway's minor unit")
    currency: str = "INR"
    gateway_order_id: str = Field(..., min_length=1)
    order_id: str = Field(..., min_length=1, description="Backend order id to verify against")
    name: str = "Ambikamber"
    description: str = "Premium Wooden Nameplates"
    prefill: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class GatewayPayment(BaseModel):
    """What the widget reports back after a successful payment."""

    gateway_order_id: str = Field(..., min_length=1)
    payment_id: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)


class PaymentGateway(ABC):
    """The third-party payment widget (Razorpay Checkout on the web storefront)."""

    @abstractmethod
    async def collect(self, checkout: GatewayCheckout) -> GatewayPayment | None:
        """Show the widget and wait for the customer.

        Returns:
            The payment proof, or None if the customer dismissed the widget.
        """
        pass
