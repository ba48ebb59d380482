"""Transition policies for admin order-status and user-role changes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from storefront.domain.components.transition_gate import TransitionPolicy
from storefront.domain.models.order import OrderStatus
from storefront.domain.models.transition import TransitionNotice, TransitionRequest
from storefront.domain.models.user import UserRole

if TYPE_CHECKING:
    from storefront.infrastructure.adapters.storefront_api import AdminAPI


class OrderStatusPolicy(TransitionPolicy):
    """Order status changes.

    Moving into or out of ``cancelled`` is critical: it has customer-visible
    side effects (emails, refunds, inventory) on the backend.
    """

    entity_type = "order"
    allowed_values = frozenset(status.value for status in OrderStatus)

    def __init__(self, admin_api: AdminAPI) -> None:
        self._admin_api = admin_api

    def is_critical(self, current_value: str, proposed_value: str) -> bool:
        cancelled = OrderStatus.Cancelled.value
        return current_value == cancelled or proposed_value == cancelled

    def describe(self, request: TransitionRequest) -> TransitionNotice:
        current = request.current_value
        proposed = request.proposed_value
        critical = self.is_critical(current, proposed)
        cancelled = OrderStatus.Cancelled.value

        notes = []
        if proposed == cancelled:
            notes.append(
                "Cancelling will notify the customer and initiate a refund if payment was made."
            )
        if current == cancelled:
            notes.append("Reactivating a cancelled order is unusual. Make sure this is intentional.")
        if proposed == OrderStatus.Delivered.value:
            notes.append("Customer will be notified that their order has been delivered.")

        side_effects_intro = None
        side_effects: list[str] = []
        if proposed == cancelled:
            side_effects_intro = "Cancelling this order will:"
            side_effects = [
                "Send cancellation email to customer",
                "Initiate refund if payment was received",
                "Update inventory counts",
            ]
        elif current == cancelled:
            side_effects_intro = "Reactivating this order will:"
            side_effects = [
                "Mark order as active again",
                "May require manual payment verification",
                "Customer may need to be contacted",
            ]

        return TransitionNotice(
            headline="Critical Status Change" if critical else "Update Order Status?",
            summary=(
                f"Change order #{request.entity_label or request.entity_id} status "
                f"from {current} to {proposed}?"
            ),
            notes=notes,
            final_summary=(
                "This is a critical action that may affect payment processing "
                "and customer notifications. Are you absolutely sure you want to proceed?"
            ),
            side_effects_intro=side_effects_intro,
            side_effects=side_effects,
        )

    async def commit(self, request: TransitionRequest) -> Any:
        return await self._admin_api.update_order_status(
            request.entity_id, OrderStatus(request.proposed_value)
        )

    def success_message(self, request: TransitionRequest) -> str:
        return "Order status updated"

    def failure_message(self, request: TransitionRequest) -> str:
        return "Failed to update order status"


class UserRolePolicy(TransitionPolicy):
    """User role changes. Every role change changes system access, so all are critical."""

    entity_type = "user"
    allowed_values = frozenset(role.value for role in UserRole)

    def __init__(self, admin_api: AdminAPI) -> None:
        self._admin_api = admin_api

    def is_critical(self, current_value: str, proposed_value: str) -> bool:
        return True

    def describe(self, request: TransitionRequest) -> TransitionNotice:
        current = UserRole(request.current_value)
        proposed = UserRole(request.proposed_value)

        if proposed == UserRole.Admin:
            note = "Admins have full access to manage products, orders, and users."
            side_effects_intro = "Granting Admin access will allow:"
            side_effects = [
                "View and manage all orders",
                "Create, edit, and delete products",
                "Manage categories and users",
                "Access dashboard and analytics",
            ]
        else:
            note = "This user will lose all admin privileges."
            side_effects_intro = "Revoking Admin access will:"
            side_effects = [
                "Remove access to admin dashboard",
                "Remove ability to manage products",
                "Remove ability to manage orders",
                "Remove ability to manage other users",
            ]

        return TransitionNotice(
            headline="Change User Role?",
            summary=(
                f"Are you sure you want to change {request.entity_label or request.entity_id}'s "
                f"role from {current.label} to {proposed.label}?"
            ),
            notes=[note],
            final_summary=(
                "This is a critical action that will change system access levels. "
                "Are you absolutely sure you want to proceed?"
            ),
            side_effects_intro=side_effects_intro,
            side_effects=side_effects,
        )

    async def commit(self, request: TransitionRequest) -> Any:
        return await self._admin_api.update_user_role(
            request.entity_id, UserRole(request.proposed_value)
        )

    def success_message(self, request: TransitionRequest) -> str:
        role = UserRole(request.proposed_value)
        return f"{request.entity_label} is now {role.article_label}"

    def failure_message(self, request: TransitionRequest) -> str:
        return "Failed to update role"
