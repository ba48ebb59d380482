"""Tests for the admin order and user list views."""

import httpx
import pytest

from storefront.domain.components.list_views import OrderListView, UserListView
from storefront.domain.components.transition_gate import TransitionGate
from storefront.domain.components.transition_policies import (
    OrderStatusPolicy,
    UserRolePolicy,
)
from storefront.domain.models.order import OrderStatus
from storefront.domain.models.transition import GateState
from storefront.domain.models.user import UserRole


def order_doc(order_id: str, status: str, number: str | None = None) -> dict:
    return {
        "_id": order_id,
        "orderNumber": number or f"ORD-{order_id}",
        "orderStatus": status,
        "user": {"_id": "c1", "name": "Meera", "email": "meera@example.com"},
        "items": [{"product": "p1", "name": "Oak nameplate", "price": 500, "quantity": 2}],
        "totalPrice": 1000,
    }


def user_doc(user_id: str, name: str, role: str) -> dict:
    return {"_id": user_id, "name": name, "email": f"{user_id}@example.com", "role": role}


class TestOrderListView:
    @pytest.fixture(autouse=True)
    def setup(self, api, backend, notifier, observability) -> None:
        self.backend = backend
        self.notifier = notifier
        self.gate = TransitionGate(OrderStatusPolicy(api.admin), notifier, observability)
        self.view = OrderListView(api.admin, self.gate, notifier, observability)
        self.status = {"o1": "confirmed", "o2": "pending"}

        def list_orders(request):
            return httpx.Response(
                200,
                json={
                    "orders": [order_doc(i, s) for i, s in self.status.items()],
                    "page": int(request.url.params.get("page", 1)),
                    "pages": 3,
                    "total": 25,
                },
            )

        def get_order(request):
            return httpx.Response(200, json=order_doc("o1", self.status["o1"]))

        def update_status(request):
            self.status["o1"] = backend.body(request)["status"]
            return httpx.Response(200, json={"message": "ok"})

        backend.on("GET", "/admin/orders", responder=list_orders)
        backend.on("GET", "/admin/orders/o1", responder=get_order)
        backend.on("PUT", "/admin/orders/o1/status", responder=update_status)

    @pytest.mark.asyncio
    async def test_refresh_loads_page(self) -> None:
        assert await self.view.refresh() is True

        assert [o.id for o in self.view.rows] == ["o1", "o2"]
        assert self.view.total_pages == 3
        assert self.view.total == 25
        assert self.view.loading is False
        params = self.backend.calls("GET", "/admin/orders")[0].url.params
        assert params["page"] == "1"

    @pytest.mark.asyncio
    async def test_search_filter_and_page_are_sent(self) -> None:
        await self.view.refresh()
        await self.view.set_search("ORD-1")
        await self.view.set_status_filter("shipped")
        await self.view.set_page(2)

        params = self.backend.calls("GET", "/admin/orders")[-1].url.params
        assert params["search"] == "ORD-1"
        assert params["status"] == "shipped"
        assert params["page"] == "2"

    @pytest.mark.asyncio
    async def test_set_page_out_of_range(self) -> None:
        await self.view.refresh()
        with pytest.raises(ValueError):
            await self.view.set_page(4)

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_rows(self) -> None:
        await self.view.refresh()
        self.backend.on("GET", "/admin/orders", status=500)

        assert await self.view.refresh() is False

        assert [o.id for o in self.view.rows] == ["o1", "o2"]
        assert self.notifier.errors == ["Failed to fetch orders"]

    @pytest.mark.asyncio
    async def test_cancel_order_from_detail_panel(self) -> None:
        await self.view.refresh()
        await self.view.view_details("o1")
        gets_before = len(self.backend.calls("GET"))

        self.view.request_status_change("o1", OrderStatus.Cancelled)
        await self.gate.confirm()
        assert self.gate.state == GateState.AwaitingStep2
        # selector still shows the server value while the dialog is open
        assert self.view.selector_value("o1") == OrderStatus.Confirmed
        await self.gate.confirm()

        puts = self.backend.calls("PUT")
        assert len(puts) == 1
        assert puts[0].url.path == "/api/admin/orders/o1/status"
        assert self.backend.body(puts[0]) == {"status": "cancelled"}
        new_gets = [r.url.path for r in self.backend.calls("GET")[gets_before:]]
        assert new_gets == ["/api/admin/orders", "/api/admin/orders/o1"]
        assert self.view.selected.order_status == OrderStatus.Cancelled
        assert self.view.find("o1").order_status == OrderStatus.Cancelled

    @pytest.mark.asyncio
    async def test_rejected_change_leaves_rows_untouched(self) -> None:
        await self.view.refresh()
        self.backend.on("PUT", "/admin/orders/o2/status", {"message": "Not allowed"}, status=409)

        self.view.request_status_change("o2", "shipped")
        await self.gate.confirm()

        assert self.view.selector_value("o2") == OrderStatus.Pending
        assert self.notifier.errors == ["Not allowed"]

    @pytest.mark.asyncio
    async def test_no_op_selector_change(self) -> None:
        await self.view.refresh()

        assert self.view.request_status_change("o2", "pending") is None
        assert self.gate.state == GateState.Idle

    @pytest.mark.asyncio
    async def test_unknown_order_raises(self) -> None:
        await self.view.refresh()
        with pytest.raises(KeyError):
            self.view.request_status_change("missing", "shipped")

    @pytest.mark.asyncio
    async def test_detail_failure_notifies(self) -> None:
        assert await self.view.view_details("o9") is None
        assert self.notifier.errors == ["Failed to load order details"]

    @pytest.mark.asyncio
    async def test_close_details(self) -> None:
        await self.view.view_details("o1")
        self.view.close_details()
        assert self.view.selected is None


class TestUserListView:
    @pytest.fixture(autouse=True)
    def setup(self, api, backend, notifier, observability) -> None:
        self.backend = backend
        self.notifier = notifier
        self.gate = TransitionGate(UserRolePolicy(api.admin), notifier, observability)
        self.view = UserListView(api.admin, self.gate, notifier, observability)
        backend.on(
            "GET",
            "/admin/users",
            {
                "users": [
                    user_doc("u1", "Ravi Kumar", "user"),
                    user_doc("u2", "Asha Admin", "admin"),
                    user_doc("u3", "Kiran", "user"),
                ],
                "page": 1,
                "pages": 1,
            },
        )
        backend.on("PUT", "/admin/users/u1/role", {"message": "ok"})

    @pytest.mark.asyncio
    async def test_stats_count_current_page(self) -> None:
        await self.view.refresh()
        stats = self.view.stats()

        assert (stats.total, stats.admins, stats.customers) == (3, 1, 2)

    @pytest.mark.asyncio
    async def test_role_change_refetches_page(self) -> None:
        await self.view.refresh()

        request = self.view.request_role_change("u1", UserRole.Admin)
        assert request.entity_label == "Ravi Kumar"
        await self.gate.confirm()
        await self.gate.confirm()

        assert self.notifier.successes == ["Ravi Kumar is now an Admin"]
        assert len(self.backend.calls("GET", "/admin/users")) == 2

    @pytest.mark.asyncio
    async def test_cancelled_role_change_makes_no_call(self) -> None:
        await self.view.refresh()

        self.view.request_role_change("u1", "admin")
        await self.gate.confirm()
        await self.gate.cancel()

        assert self.backend.mutations() == []
        assert self.view.selector_value("u1") == UserRole.User

    @pytest.mark.asyncio
    async def test_fetch_failure_message(self) -> None:
        self.backend.on("GET", "/admin/users", status=403)

        await self.view.refresh()

        assert self.notifier.errors == ["Failed to fetch users"]
