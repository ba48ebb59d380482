"""CheckoutWizard component: address entry, payment, order placement."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from storefront.domain.components.cart_manager import CartManager
from storefront.domain.components.pricing import price_with
from storefront.domain.components.session_manager import SessionManager
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.interfaces.payment_gateway import (
    GatewayCheckout,
    GatewayPayment,
    PaymentGateway,
)
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.order import ShippingAddress
from storefront.domain.models.pricing import CHECKOUT_PRICING, PriceBreakdown, PricingConfig
from storefront.infrastructure.utils.validation import ValidationError, validate_shipping_address

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import PaymentAPI


class CheckoutStep(str, Enum):
    Address = "address"
    Payment = "payment"
    Completed = "completed"


class PaymentMethod(str, Enum):
    Razorpay = "razorpay"
    Demo = "demo"


class EmptyCartError(Exception):
    """Raised when checkout is started with nothing in the cart."""

    pass


class CheckoutStateError(Exception):
    """Raised when an action is not valid in the wizard's current step."""

    pass


class CheckoutWizard:
    """Linear checkout: ADDRESS -> PAYMENT -> COMPLETED.

    The only backward move is PAYMENT -> ADDRESS. Once the order is placed the
    wizard is completed for good; the placed order is reachable through
    ``order_id`` and ``order_path``.
    """

    def __init__(
        self,
        payment_api: PaymentAPI,
        cart_manager: CartManager,
        session_manager: SessionManager,
        notifier: Notifier,
        observability_manager: ObservabilityManager,
        payment_gateway: PaymentGateway | None = None,
        pricing: PricingConfig = CHECKOUT_PRICING,
    ) -> None:
        self._payment_api = payment_api
        self._cart_manager = cart_manager
        self._session_manager = session_manager
        self._notifier = notifier
        self._observability = observability_manager
        self._gateway = payment_gateway
        self._pricing = pricing
        self._reset()

    def _reset(self) -> None:
        self.step: CheckoutStep | None = None
        self.address = ShippingAddress()
        self.payment_method = PaymentMethod.Razorpay
        self.order_id: str | None = None
        self.processing = False

    @property
    def is_active(self) -> bool:
        return self.step is not None

    @property
    def order_path(self) -> str | None:
        return f"/orders/{self.order_id}" if self.order_id else None

    def totals(self) -> PriceBreakdown:
        return price_with(self._cart_manager.cart.items, self._pricing)

    def start(self) -> CheckoutStep:
        """Enter the ADDRESS step with the address prefilled from the session.

        Raises:
            EmptyCartError: If the cart has no items.
        """
        if self._cart_manager.is_empty:
            raise EmptyCartError("Your cart is empty")
        self._reset()
        session = self._session_manager.current
        if session is not None:
            address = session.address
            self.address = ShippingAddress(
                name=session.name,
                email=session.email,
                phone=session.phone or "",
                street=address.street if address else "",
                city=address.city if address else "",
                state=address.state if address else "",
                pincode=address.pincode if address else "",
            )
        self.step = CheckoutStep.Address
        return self.step

    def update_address(self, **fields: str) -> ShippingAddress:
        self._require(CheckoutStep.Address)
        for name, value in fields.items():
            if name not in ShippingAddress.model_fields:
                raise ValueError(f"Unknown address field: {name}")
            setattr(self.address, name, value)
        return self.address

    def proceed_to_payment(self) -> bool:
        """Validate the address and move to PAYMENT.

        Returns:
            False (staying at ADDRESS, with the first problem notified) if the
            address is invalid. No network call is made either way.
        """
        self._require(CheckoutStep.Address)
        try:
            validate_shipping_address(self.address)
        except ValidationError as e:
            self._notifier.error(e.message)
            return False
        self.step = CheckoutStep.Payment
        return True

    def back_to_address(self) -> CheckoutStep:
        self._require(CheckoutStep.Payment)
        self.step = CheckoutStep.Address
        return self.step

    def select_payment_method(self, method: PaymentMethod | str) -> None:
        self._require(CheckoutStep.Payment)
        self.payment_method = PaymentMethod(method)

    def cancel(self) -> None:
        """Abandon the checkout, dropping the entered address."""
        if self.step == CheckoutStep.Completed:
            raise CheckoutStateError("Order already placed")
        self._reset()

    async def pay(self) -> bool:
        """Place the order with the selected payment method.

        Returns:
            True once the order is placed (step COMPLETED). False when the
            payment failed or was dismissed; the wizard stays at PAYMENT.

        Raises:
            CheckoutStateError: If not at PAYMENT, a payment is already in
                progress, or a gateway payment is requested without a gateway.
        """
        self._require(CheckoutStep.Payment)
        if self.processing:
            raise CheckoutStateError("Payment already in progress")
        self.processing = True
        try:
            if self.payment_method == PaymentMethod.Demo:
                return await self._pay_demo()
            return await self._pay_with_gateway()
        finally:
            self.processing = False

    async def _pay_demo(self) -> bool:
        try:
            data = await self._payment_api.demo(self.address)
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to place order"))
            return False
        await self._complete(data, "Order placed successfully!")
        return True

    async def _pay_with_gateway(self) -> bool:
        if self._gateway is None:
            raise CheckoutStateError("No payment gateway configured")

        try:
            order_data = await self._payment_api.create_order(
                _json_amount(self.totals().total), self.address
            )
        except ApiError as e:
            self._notifier.error(e.user_message("Payment failed"))
            return False

        checkout = GatewayCheckout(
            key=order_data.get("key"),
            amount=order_data["amount"],
            currency=order_data.get("currency") or self._pricing.currency,
            gateway_order_id=order_data["razorpayOrderId"],
            order_id=order_data["orderId"],
            prefill={
                "name": self.address.name,
                "email": self.address.email,
                "contact": self.address.phone,
            },
        )
        payment = await self._gateway.collect(checkout)
        if payment is None:
            self._notifier.error("Payment cancelled")
            return False

        try:
            data = await self._payment_api.verify(_verification_body(payment, checkout))
        except ApiError as e:
            self._notifier.error("Payment verification failed")
            await self._observability.log(
                level="ERROR",
                message="Payment verification failed",
                context={"order_id": checkout.order_id, "error": str(e)},
            )
            return False
        await self._complete(data, "Payment successful!")
        return True

    async def _complete(self, data: Any, message: str) -> None:
        self._notifier.success(message)
        order = (data or {}).get("order") or {}
        self.order_id = order.get("_id")
        self.step = CheckoutStep.Completed
        # the server empties the cart once the order exists
        await self._cart_manager.load()
        if self.order_path:
            self._session_manager.navigator.go_to(self.order_path)
        try:
            await self._observability.emit_event(
                event_type="order_placed",
                payload={"order_id": self.order_id, "method": self.payment_method.value},
            )
        except Exception as e:
            await self._observability.log(
                level="WARNING",
                message=f"Failed to emit order_placed event: {e}",
                context={"order_id": self.order_id},
            )

    def _require(self, step: CheckoutStep) -> None:
        if self.step != step:
            current = self.step.value if self.step else "inactive"
            raise CheckoutStateError(f"Expected checkout step {step.value}, is {current}")


def _verification_body(payment: GatewayPayment, checkout: GatewayCheckout) -> dict[str, str]:
    return {
        "razorpay_order_id": payment.gateway_order_id,
        "razorpay_payment_id": payment.payment_id,
        "razorpay_signature": payment.signature,
        "orderId": checkout.order_id,
    }


def _json_amount(amount: Decimal) -> int | float:
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)
