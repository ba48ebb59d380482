"""CartManager component: the shopper's server-side cart."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from storefront.domain.components.pricing import amount_to_free_shipping, price_with
from storefront.domain.components.session_manager import SessionManager
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.cart import Cart
from storefront.domain.models.pricing import (
    CART_PRICING,
    FREE_SHIPPING_HINT_THRESHOLD,
    PriceBreakdown,
    PricingConfig,
)
from storefront.infrastructure.utils.validation import ValidationError, validate_quantity

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import CartAPI


class CartManager:
    """Holds the current cart and wraps the cart endpoints.

    Every mutation replaces the local cart with the one the server returns.
    Failures are reported through the notifier and leave the cart unchanged.
    """

    def __init__(
        self,
        cart_api: CartAPI,
        session_manager: SessionManager,
        notifier: Notifier,
        pricing: PricingConfig = CART_PRICING,
        free_shipping_hint_threshold: Decimal = FREE_SHIPPING_HINT_THRESHOLD,
    ) -> None:
        self._cart_api = cart_api
        self._session_manager = session_manager
        self._notifier = notifier
        self._pricing = pricing
        self._hint_threshold = free_shipping_hint_threshold
        self.cart = Cart.empty()
        self.loading = False

    @property
    def pricing(self) -> PricingConfig:
        return self._pricing

    @property
    def item_count(self) -> int:
        return self.cart.item_count

    @property
    def is_empty(self) -> bool:
        return self.cart.is_empty

    async def load(self) -> Cart:
        """Fetch the cart; guests always see an empty one."""
        if not self._session_manager.is_authenticated:
            self.cart = Cart.empty()
            return self.cart
        self.loading = True
        try:
            self.cart = await self._cart_api.get()
        except ApiError as e:
            # Leave the last known cart in place; the page shows it as-is.
            self._notifier.error(e.user_message("Failed to load cart"))
        finally:
            self.loading = False
        return self.cart

    async def add(
        self,
        product_id: str,
        quantity: int = 1,
        selected_size: str | None = None,
        customization: dict[str, Any] | None = None,
    ) -> bool:
        if not self._session_manager.is_authenticated:
            self._notifier.error("Please login to add items to cart")
            return False
        if not self._valid_quantity(quantity):
            return False
        try:
            self.cart = await self._cart_api.add(
                product_id,
                quantity=quantity,
                selected_size=selected_size,
                customization=customization,
            )
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to add to cart"))
            return False
        self._notifier.success("Added to cart!")
        return True

    async def update_quantity(self, item_id: str, quantity: int) -> bool:
        if not self._valid_quantity(quantity):
            return False
        try:
            self.cart = await self._cart_api.update(item_id, quantity)
        except ApiError:
            self._notifier.error("Failed to update cart")
            return False
        return True

    async def change_quantity(self, item_id: str, current_quantity: int, delta: int) -> bool:
        """The +/- buttons. Results below 1 are ignored; use ``remove`` instead."""
        new_quantity = current_quantity + delta
        if new_quantity < 1:
            return False
        return await self.update_quantity(item_id, new_quantity)

    async def remove(self, item_id: str) -> bool:
        try:
            self.cart = await self._cart_api.remove(item_id)
        except ApiError:
            self._notifier.error("Failed to remove item")
            return False
        self._notifier.success("Item removed from cart")
        return True

    async def clear(self) -> bool:
        try:
            await self._cart_api.clear()
        except ApiError:
            self._notifier.error("Failed to clear cart")
            return False
        self.cart = Cart.empty()
        return True

    def _valid_quantity(self, quantity: int) -> bool:
        try:
            validate_quantity(quantity)
        except ValidationError as e:
            self._notifier.error(e.message)
            return False
        return True

    def totals(self) -> PriceBreakdown:
        return price_with(self.cart.items, self._pricing)

    def free_shipping_hint(self) -> Decimal:
        """Amount still needed for free shipping; 0 when no hint should show."""
        return amount_to_free_shipping(self.totals().subtotal, self._hint_threshold)
