"""Tests for TransitionGate and the order-status / user-role policies."""

import asyncio

import httpx
import pytest

from storefront.domain.components.session_manager import SessionManager
from storefront.domain.components.transition_gate import (
    GateBusyError,
    InvalidTransitionValueError,
    NoOpenTransitionError,
    TransitionGate,
    TransitionPolicy,
)
from storefront.domain.components.transition_policies import (
    OrderStatusPolicy,
    UserRolePolicy,
)
from storefront.domain.models.api_error import ApiError, ErrorCategory
from storefront.domain.models.transition import (
    GateState,
    TransitionNotice,
    TransitionOutcome,
    TransitionRequest,
)
from storefront.infrastructure.adapters.http_client import StorefrontHttpClient
from storefront.infrastructure.adapters.storefront_api import StorefrontApi


class BlockingPolicy(TransitionPolicy):
    """Policy whose commit waits until the test releases it."""

    entity_type = "order"

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.commits: list[TransitionRequest] = []
        self.error: Exception | None = None

    def is_critical(self, current_value: str, proposed_value: str) -> bool:
        return False

    def describe(self, request: TransitionRequest) -> TransitionNotice:
        return TransitionNotice(headline="Update?", summary="")

    async def commit(self, request: TransitionRequest) -> None:
        self.commits.append(request)
        self.started.set()
        await self.release.wait()
        if self.error:
            raise self.error

    def success_message(self, request: TransitionRequest) -> str:
        return "done"

    def failure_message(self, request: TransitionRequest) -> str:
        return "failed"


class TestOrderStatusGate:
    """Order status changes through the gate."""

    @pytest.fixture(autouse=True)
    def setup(self, api, backend, notifier, observability) -> None:
        self.backend = backend
        self.notifier = notifier
        self.observability = observability
        self.policy = OrderStatusPolicy(api.admin)
        self.gate = TransitionGate(self.policy, notifier, observability)
        backend.on("PUT", "/admin/orders/o1/status", {"message": "Order status updated"})

    @pytest.mark.parametrize(
        ("current", "proposed", "critical"),
        [
            ("pending", "confirmed", False),
            ("processing", "shipped", False),
            ("shipped", "delivered", False),
            ("delivered", "pending", False),
            ("confirmed", "cancelled", True),
            ("pending", "cancelled", True),
            ("cancelled", "processing", True),
            ("cancelled", "pending", True),
        ],
    )
    def test_critical_iff_cancelled_is_involved(self, current, proposed, critical) -> None:
        assert self.policy.is_critical(current, proposed) is critical

    def test_open_with_same_value_is_a_no_op(self) -> None:
        assert self.gate.open("o1", "ORD-1", "shipped", "shipped") is None
        assert self.gate.state == GateState.Idle
        assert self.gate.request is None
        assert self.gate.history == []

    def test_open_rejects_unknown_status(self) -> None:
        with pytest.raises(InvalidTransitionValueError):
            self.gate.open("o1", "ORD-1", "pending", "lost")
        assert self.gate.state == GateState.Idle

    def test_open_accepts_enum_members(self) -> None:
        from storefront.domain.models.order import OrderStatus

        request = self.gate.open("o1", "ORD-1", OrderStatus.Pending, OrderStatus.Shipped)
        assert request is not None
        assert request.proposed_value == "shipped"

    @pytest.mark.asyncio
    async def test_standard_change_commits_after_one_confirmation(self) -> None:
        request = self.gate.open("o1", "ORD-1", "processing", "shipped")

        assert request is not None
        assert self.gate.state == GateState.AwaitingStep1
        assert self.gate.is_critical is False
        assert self.gate.confirm_label == "Confirm"
        assert self.backend.mutations() == []

        state = await self.gate.confirm()

        assert state == GateState.ResolvedSuccess
        puts = self.backend.calls("PUT", "/admin/orders/o1/status")
        assert len(puts) == 1
        assert self.backend.body(puts[0]) == {"status": "shipped"}
        assert self.notifier.successes == ["Order status updated"]
        assert self.gate.request is None
        assert self.gate.is_open is False

    @pytest.mark.asyncio
    async def test_cancelling_an_order_needs_two_confirmations(self) -> None:
        self.gate.open("o1", "ORD-1", "confirmed", "cancelled")
        assert self.gate.is_critical is True
        assert self.gate.confirm_label == "Continue →"

        state = await self.gate.confirm()

        assert state == GateState.AwaitingStep2
        assert self.gate.request.confirm_step == 2
        assert self.gate.confirm_label == "Confirm"
        assert self.backend.mutations() == []

        state = await self.gate.confirm()

        assert state == GateState.ResolvedSuccess
        puts = self.backend.calls("PUT", "/admin/orders/o1/status")
        assert [self.backend.body(r) for r in puts] == [{"status": "cancelled"}]
        record = self.gate.history[-1]
        assert record.outcome == TransitionOutcome.Committed
        assert record.critical is True
        assert record.confirmations == 2

    @pytest.mark.asyncio
    async def test_cancel_at_second_step_makes_no_call(self) -> None:
        self.gate.open("o1", "ORD-1", "confirmed", "cancelled")
        await self.gate.confirm()

        state = await self.gate.cancel()

        assert state == GateState.Cancelled
        assert self.gate.request is None
        assert self.backend.requests == []
        record = self.gate.history[-1]
        assert record.outcome == TransitionOutcome.Cancelled
        assert record.confirmations == 1
        assert "transition_cancelled" in self.observability.event_types()

    @pytest.mark.asyncio
    async def test_cancel_at_first_step_makes_no_call(self) -> None:
        self.gate.open("o1", "ORD-1", "pending", "confirmed")

        await self.gate.cancel()

        assert self.backend.requests == []
        assert self.gate.history[-1].confirmations == 0
        assert self.notifier.successes == []
        assert self.notifier.errors == []

    @pytest.mark.asyncio
    async def test_reopen_replaces_pending_request(self) -> None:
        self.gate.open("o1", "ORD-1", "confirmed", "cancelled")
        await self.gate.confirm()

        request = self.gate.open("o1", "ORD-1", "confirmed", "processing")

        assert request.proposed_value == "processing"
        assert request.confirm_step == 1
        assert self.gate.state == GateState.AwaitingStep1
        assert self.gate.is_critical is False
        assert self.gate.history[-1].outcome == TransitionOutcome.Replaced
        assert self.backend.requests == []

    @pytest.mark.asyncio
    async def test_server_rejection_shows_server_message(self) -> None:
        self.backend.on(
            "PUT", "/admin/orders/o1/status", {"message": "Cannot ship unpaid order"}, status=400
        )
        self.gate.open("o1", "ORD-1", "pending", "shipped")

        state = await self.gate.confirm()

        assert state == GateState.ResolvedFailure
        assert self.notifier.errors == ["Cannot ship unpaid order"]
        assert self.gate.request is None
        record = self.gate.history[-1]
        assert record.outcome == TransitionOutcome.Failed
        assert record.error == "Cannot ship unpaid order"
        event = self.observability.events[-1]
        assert event["event_type"] == "transition_failed"
        assert event["payload"]["error_category"] == ErrorCategory.ValidationError.value

    @pytest.mark.asyncio
    async def test_failure_without_server_message_uses_fallback(self) -> None:
        self.backend.on("PUT", "/admin/orders/o1/status", status=500)
        self.gate.open("o1", "ORD-1", "pending", "shipped")

        await self.gate.confirm()

        assert self.notifier.errors == ["Failed to update order status"]

    @pytest.mark.asyncio
    async def test_confirm_without_request_raises(self) -> None:
        with pytest.raises(NoOpenTransitionError):
            await self.gate.confirm()

    @pytest.mark.asyncio
    async def test_commit_without_request_raises_and_leaves_gate_idle(self) -> None:
        with pytest.raises(NoOpenTransitionError):
            await self.gate._commit()

        assert self.gate.state == GateState.Idle
        assert self.backend.requests == []

    @pytest.mark.asyncio
    async def test_refresh_callbacks_run_only_after_success(self) -> None:
        refreshed: list[str] = []

        async def refresh(request: TransitionRequest) -> None:
            refreshed.append(request.entity_id)

        self.gate.add_refresh_callback(refresh)
        self.backend.on("PUT", "/admin/orders/o1/status", status=409)
        self.gate.open("o1", "ORD-1", "pending", "shipped")
        await self.gate.confirm()
        assert refreshed == []

        self.backend.on("PUT", "/admin/orders/o1/status", {"ok": True})
        self.gate.open("o1", "ORD-1", "pending", "shipped")
        await self.gate.confirm()
        assert refreshed == ["o1"]

    @pytest.mark.asyncio
    async def test_failing_refresh_is_logged_not_raised(self) -> None:
        async def refresh(request: TransitionRequest) -> None:
            raise RuntimeError("boom")

        self.gate.add_refresh_callback(refresh)
        self.gate.open("o1", "ORD-1", "pending", "shipped")

        assert await self.gate.confirm() == GateState.ResolvedSuccess
        assert any("boom" in log["message"] for log in self.observability.logs)

    @pytest.mark.asyncio
    async def test_event_emission_failure_does_not_break_commit(self) -> None:
        self.observability.emit_error = RuntimeError("sink down")
        self.gate.open("o1", "ORD-1", "pending", "shipped")

        assert await self.gate.confirm() == GateState.ResolvedSuccess
        assert self.observability.logs[-1]["level"] == "WARNING"

    def test_cancel_notice_lists_side_effects(self) -> None:
        self.gate.open("o1", "ORD-1", "confirmed", "cancelled")
        notice = self.gate.notice

        assert notice.headline == "Critical Status Change"
        assert notice.summary == "Change order #ORD-1 status from confirmed to cancelled?"
        assert notice.notes == [
            "Cancelling will notify the customer and initiate a refund if payment was made."
        ]
        assert notice.side_effects_intro == "Cancelling this order will:"
        assert "Update inventory counts" in notice.side_effects
        assert notice.final_headline == "Final Confirmation Required"

    def test_reactivation_notice(self) -> None:
        self.gate.open("o1", "ORD-1", "cancelled", "pending")
        notice = self.gate.notice

        assert notice.side_effects_intro == "Reactivating this order will:"
        assert notice.side_effects[0] == "Mark order as active again"
        assert "unusual" in notice.notes[0]

    def test_delivery_notice_is_standard(self) -> None:
        self.gate.open("o1", "ORD-1", "shipped", "delivered")
        notice = self.gate.notice

        assert notice.headline == "Update Order Status?"
        assert notice.notes == ["Customer will be notified that their order has been delivered."]
        assert notice.side_effects == []


class TestGateWhileCommitting:
    """The gate refuses to act while a commit is in flight."""

    @pytest.mark.asyncio
    async def test_controls_are_disabled_during_commit(self, notifier, observability) -> None:
        policy = BlockingPolicy()
        gate = TransitionGate(policy, notifier, observability)
        gate.open("o1", "ORD-1", "pending", "shipped")

        task = asyncio.create_task(gate.confirm())
        await policy.started.wait()

        assert gate.is_busy is True
        assert gate.is_open is True
        with pytest.raises(GateBusyError):
            gate.open("o2", "ORD-2", "pending", "confirmed")
        with pytest.raises(GateBusyError):
            await gate.confirm()
        with pytest.raises(GateBusyError):
            await gate.cancel()

        policy.release.set()
        assert await task == GateState.ResolvedSuccess
        assert len(policy.commits) == 1
        assert notifier.successes == ["done"]

    @pytest.mark.asyncio
    async def test_no_op_open_is_allowed_while_busy(self, notifier, observability) -> None:
        policy = BlockingPolicy()
        gate = TransitionGate(policy, notifier, observability)
        gate.open("o1", "ORD-1", "pending", "shipped")
        task = asyncio.create_task(gate.confirm())
        await policy.started.wait()

        assert gate.open("o1", "ORD-1", "shipped", "shipped") is None

        policy.release.set()
        await task

    @pytest.mark.asyncio
    async def test_network_failure_resolves_with_fallback(self, notifier, observability) -> None:
        policy = BlockingPolicy()
        policy.error = ApiError(ErrorCategory.NetworkError, "connection refused")
        policy.release.set()
        gate = TransitionGate(policy, notifier, observability)
        gate.open("o1", "ORD-1", "pending", "shipped")

        assert await gate.confirm() == GateState.ResolvedFailure
        assert notifier.errors == ["failed"]

    @pytest.mark.asyncio
    async def test_unexpected_commit_error_still_closes_gate(self, notifier, observability) -> None:
        policy = BlockingPolicy()
        policy.error = RuntimeError("boom")
        policy.release.set()
        gate = TransitionGate(policy, notifier, observability)
        gate.open("o1", "ORD-1", "pending", "shipped")

        assert await gate.confirm() == GateState.ResolvedFailure

        assert gate.is_busy is False
        assert gate.request is None
        assert notifier.errors == ["failed"]
        assert gate.history[-1].outcome == TransitionOutcome.Failed
        assert gate.history[-1].error == "boom"
        assert observability.logs[-1]["level"] == "ERROR"
        # the view stays usable
        assert gate.open("o2", "ORD-2", "pending", "confirmed") is not None
        assert await gate.cancel() == GateState.Cancelled

    def test_history_is_bounded(self, notifier, observability) -> None:
        gate = TransitionGate(BlockingPolicy(), notifier, observability, max_history=2)
        for proposed in ("confirmed", "processing", "shipped"):
            gate.open("o1", "ORD-1", "pending", proposed)

        # three opens: two replacements recorded, the third still pending
        assert [r.to_value for r in gate.history] == ["confirmed", "processing"]


class TestUserRoleGate:
    """Role changes always take two confirmations."""

    @pytest.fixture(autouse=True)
    def setup(self, api, backend, notifier, observability) -> None:
        self.backend = backend
        self.notifier = notifier
        self.gate = TransitionGate(UserRolePolicy(api.admin), notifier, observability)
        backend.on("PUT", "/admin/users/u1/role", {"message": "Role updated"})

    @pytest.mark.asyncio
    async def test_promote_to_admin(self) -> None:
        self.gate.open("u1", "Ravi Kumar", "user", "admin")
        assert self.gate.is_critical is True
        assert self.gate.required_confirmations == 2

        await self.gate.confirm()
        assert self.backend.requests == []
        await self.gate.confirm()

        puts = self.backend.calls("PUT", "/admin/users/u1/role")
        assert [self.backend.body(r) for r in puts] == [{"role": "admin"}]
        assert self.notifier.successes == ["Ravi Kumar is now an Admin"]

    @pytest.mark.asyncio
    async def test_demote_to_user(self) -> None:
        self.gate.open("u1", "Ravi Kumar", "admin", "user")
        notice = self.gate.notice
        assert notice.notes == ["This user will lose all admin privileges."]
        assert notice.side_effects_intro == "Revoking Admin access will:"

        await self.gate.confirm()
        await self.gate.confirm()

        assert self.notifier.successes == ["Ravi Kumar is now a User"]

    @pytest.mark.asyncio
    async def test_failure_uses_role_fallback(self) -> None:
        self.backend.on("PUT", "/admin/users/u1/role", status=500)
        self.gate.open("u1", "Ravi Kumar", "user", "admin")
        await self.gate.confirm()
        await self.gate.confirm()

        assert self.notifier.errors == ["Failed to update role"]
        assert self.gate.state == GateState.ResolvedFailure

    def test_promote_notice(self) -> None:
        self.gate.open("u1", "Ravi Kumar", "user", "admin")
        notice = self.gate.notice

        assert notice.summary == "Are you sure you want to change Ravi Kumar's role from User to Admin?"
        assert notice.notes == ["Admins have full access to manage products, orders, and users."]
        assert notice.side_effects == [
            "View and manage all orders",
            "Create, edit, and delete products",
            "Manage categories and users",
            "Access dashboard and analytics",
        ]


class TestGateOverHttp:
    """Failures raised below the adapter still resolve the gate."""

    @pytest.fixture(autouse=True)
    def setup(self, backend, notifier, observability, navigator, admin_session, read_only_store) -> None:
        self.backend = backend
        self.notifier = notifier
        self.navigator = navigator
        self.session_manager = SessionManager(
            read_only_store, observability, navigator=navigator, session=admin_session
        )
        http = StorefrontHttpClient("http://shop.test/api", self.session_manager, transport=backend.transport)
        self.gate = TransitionGate(OrderStatusPolicy(StorefrontApi(http).admin), notifier, observability)

    @pytest.mark.asyncio
    async def test_expired_token_during_commit(self) -> None:
        self.backend.on("PUT", "/admin/orders/o1/status", {"message": "Token expired"}, status=401)
        self.gate.open("o1", "ORD-1", "pending", "shipped")

        assert await self.gate.confirm() == GateState.ResolvedFailure

        assert self.session_manager.current is None
        assert self.navigator.paths == ["/login"]
        assert self.notifier.errors == ["Token expired"]
        assert self.gate.is_busy is False

    @pytest.mark.asyncio
    async def test_undecodable_response_during_commit(self) -> None:
        self.backend.on(
            "PUT",
            "/admin/orders/o1/status",
            responder=lambda r: httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"
            ),
        )
        self.gate.open("o1", "ORD-1", "pending", "shipped")

        assert await self.gate.confirm() == GateState.ResolvedFailure

        assert self.notifier.errors == ["Failed to update order status"]
        assert self.gate.open("o1", "ORD-1", "pending", "confirmed") is not None
