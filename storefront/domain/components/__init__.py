"""Domain components."""

from storefront.domain.components.cart_manager import CartManager
from storefront.domain.components.category_manager import CategoryManager
from storefront.domain.components.checkout import (
    CheckoutStateError,
    CheckoutStep,
    CheckoutWizard,
    EmptyCartError,
    PaymentMethod,
)
from storefront.domain.components.dashboard import AdminDashboard
from storefront.domain.components.list_views import (
    OrderListView,
    PagedListView,
    UserListView,
    UserStats,
)
from storefront.domain.components.order_tracker import OrderTracker
from storefront.domain.components.product_manager import ProductManager
from storefront.domain.components.pricing import (
    amount_to_free_shipping,
    compute_totals,
    price_with,
)
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

__all__ = [
    "CartManager",
    "AdminDashboard",
    "CategoryManager",
    "CheckoutWizard",
    "CheckoutStep",
    "CheckoutStateError",
    "EmptyCartError",
    "PaymentMethod",
    "PagedListView",
    "OrderListView",
    "UserListView",
    "UserStats",
    "OrderTracker",
    "ProductManager",
    "SessionManager",
    "TransitionGate",
    "TransitionPolicy",
    "GateBusyError",
    "InvalidTransitionValueError",
    "NoOpenTransitionError",
    "OrderStatusPolicy",
    "UserRolePolicy",
    "amount_to_free_shipping",
    "compute_totals",
    "price_with",
]
