"""Admin list/detail views for orders and users."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from storefront.domain.components.transition_gate import TransitionGate
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.order import Order, OrderStatus
from storefront.domain.models.page import Page
from storefront.domain.models.product import Product
from storefront.domain.models.transition import TransitionRequest
from storefront.domain.models.user import User, UserRole

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import AdminAPI

RowT = TypeVar("RowT", Order, User, Product)


class PagedListView(ABC, Generic[RowT]):
    """Paginated, searchable server listing.

    Rows always mirror the last successful fetch. A failed fetch notifies the
    user and keeps the previous rows on screen.
    Views that change rows through a TransitionGate re-fetch after each
    successful commit; views without one refresh themselves.
    """

    fetch_failure_message = "Failed to fetch"

    def __init__(
        self,
        admin_api: AdminAPI,
        gate: TransitionGate | None,
        notifier: Notifier,
        observability_manager: ObservabilityManager,
    ) -> None:
        self._admin_api = admin_api
        self._gate = gate
        self._notifier = notifier
        self._observability = observability_manager

        self.rows: list[RowT] = []
        self.page = 1
        self.total_pages = 1
        self.total: int | None = None
        self.search = ""
        self.loading = False

        if gate is not None:
            gate.add_refresh_callback(self._after_commit)

    @property
    def gate(self) -> TransitionGate | None:
        return self._gate

    @abstractmethod
    async def _fetch(self) -> Page[RowT]:
        pass

    async def refresh(self) -> bool:
        """Re-fetch the current page. Returns False if the fetch failed."""
        self.loading = True
        try:
            result = await self._fetch()
        except ApiError as e:
            self._notifier.error(self.fetch_failure_message)
            await self._observability.log(
                level="WARNING",
                message=self.fetch_failure_message,
                context={"page": self.page, "error": str(e)},
            )
            return False
        finally:
            self.loading = False

        self.rows = list(result.items)
        self.total_pages = result.pages
        self.total = result.total
        return True

    async def set_search(self, term: str) -> bool:
        self.search = term
        return await self.refresh()

    async def set_page(self, page: int) -> bool:
        if page < 1 or (self.total_pages and page > self.total_pages):
            raise ValueError(f"Page {page} is out of range 1..{self.total_pages}")
        self.page = page
        return await self.refresh()

    async def next_page(self) -> bool:
        return await self.set_page(min(self.page + 1, max(self.total_pages, 1)))

    async def previous_page(self) -> bool:
        return await self.set_page(max(self.page - 1, 1))

    def find(self, entity_id: str) -> RowT | None:
        for row in self.rows:
            if row.id == entity_id:
                return row
        return None

    async def _after_commit(self, request: TransitionRequest) -> None:
        await self.refresh()


class OrderListView(PagedListView[Order]):
    """Admin orders page: listing, status filter, detail panel, status selector."""

    fetch_failure_message = "Failed to fetch orders"

    def __init__(
        self,
        admin_api: AdminAPI,
        gate: TransitionGate,
        notifier: Notifier,
        observability_manager: ObservabilityManager,
    ) -> None:
        super().__init__(admin_api, gate, notifier, observability_manager)
        self.status_filter: OrderStatus | None = None
        self.selected: Order | None = None

    async def _fetch(self) -> Page[Order]:
        return await self._admin_api.get_orders(
            page=self.page, search=self.search, status=self.status_filter
        )

    async def set_status_filter(self, status: OrderStatus | str | None) -> bool:
        self.status_filter = OrderStatus(status) if status else None
        return await self.refresh()

    def selector_value(self, order_id: str) -> OrderStatus | None:
        """Status the selector shows: always the server's, never a proposal."""
        if self.selected is not None and self.selected.id == order_id:
            return self.selected.order_status
        order = self.find(order_id)
        return order.order_status if order else None

    def request_status_change(
        self, order_id: str, proposed: OrderStatus | str
    ) -> TransitionRequest | None:
        """Open the status gate for a selector change on a row or the detail panel.

        Raises:
            KeyError: If the order is neither listed nor selected.
        """
        order = self.find(order_id)
        if order is None and self.selected is not None and self.selected.id == order_id:
            order = self.selected
        if order is None:
            raise KeyError(order_id)
        return self._gate.open(
            order.id,
            order.label,
            order.order_status.value,
            OrderStatus(proposed).value,
        )

    async def view_details(self, order_id: str) -> Order | None:
        try:
            self.selected = await self._admin_api.get_order(order_id)
        except ApiError:
            self._notifier.error("Failed to load order details")
            return None
        return self.selected

    def close_details(self) -> None:
        self.selected = None

    async def _after_commit(self, request: TransitionRequest) -> None:
        await self.refresh()
        if self.selected is not None and self.selected.id == request.entity_id:
            try:
                self.selected = await self._admin_api.get_order(request.entity_id)
            except ApiError:
                self._notifier.error("Failed to load order details")


class UserStats(BaseModel):
    total: int
    admins: int
    customers: int

    model_config = ConfigDict(frozen=True)


class UserListView(PagedListView[User]):
    """Admin users page: listing, search, role selector."""

    fetch_failure_message = "Failed to fetch users"

    async def _fetch(self) -> Page[User]:
        return await self._admin_api.get_users(page=self.page, search=self.search)

    def selector_value(self, user_id: str) -> UserRole | None:
        user = self.find(user_id)
        return user.role if user else None

    def request_role_change(self, user_id: str, proposed: UserRole | str) -> TransitionRequest | None:
        """Open the role gate for a listed user.

        Raises:
            KeyError: If the user is not on the current page.
        """
        user = self.find(user_id)
        if user is None:
            raise KeyError(user_id)
        return self._gate.open(user.id, user.label, user.role.value, UserRole(proposed).value)

    def stats(self) -> UserStats:
        """Counts over the rows on the current page."""
        admins = sum(1 for user in self.rows if user.is_admin)
        return UserStats(total=len(self.rows), admins=admins, customers=len(self.rows) - admins)
