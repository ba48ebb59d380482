"""OrderTracker component: a customer's view of their own orders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.order import CUSTOMER_CANCELLABLE_STATUSES, Order

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import OrdersAPI


class OrderTracker:
    def __init__(self, orders_api: OrdersAPI, notifier: Notifier) -> None:
        self._orders_api = orders_api
        self._notifier = notifier
        self.orders: list[Order] = []
        self.current: Order | None = None

    async def list_orders(self) -> list[Order]:
        try:
            self.orders = await self._orders_api.get_all()
        except ApiError:
            self._notifier.error("Failed to fetch orders")
        return self.orders

    async def get_order(self, order_id: str) -> Order | None:
        try:
            self.current = await self._orders_api.get_by_id(order_id)
        except ApiError:
            self._notifier.error("Order not found")
            self.current = None
        return self.current

    @staticmethod
    def can_cancel(order: Order) -> bool:
        """Customers may only cancel orders that have not started processing."""
        return order.order_status in CUSTOMER_CANCELLABLE_STATUSES

    async def cancel_order(self, order: Order) -> bool:
        """Cancel ``order`` and re-read it from the server.

        Returns:
            False if the order is past the cancellable statuses (no call is
            made) or the server refused.
        """
        if not self.can_cancel(order):
            self._notifier.error(
                f"Order cannot be cancelled once it is {order.order_status.value}"
            )
            return False
        try:
            await self._orders_api.cancel(order.id)
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to cancel order"))
            return False
        self._notifier.success("Order cancelled successfully")
        await self.get_order(order.id)
        return True
