"""Domain models for the storefront client."""

from storefront.domain.models.api_error import ApiError, ErrorCategory
from storefront.domain.models.cart import Cart, CartItem, CartProduct
from storefront.domain.models.category import Category
from storefront.domain.models.dashboard import DashboardStats, MonthlyRevenue, StatusCount
from storefront.domain.models.order import (
    CUSTOMER_CANCELLABLE_STATUSES,
    Order,
    OrderCustomer,
    OrderItem,
    OrderStatus,
    PaymentInfo,
    ShippingAddress,
    StatusHistoryEntry,
)
from storefront.domain.models.page import Page
from storefront.domain.models.product import Product, ProductDraft, ProductSize
from storefront.domain.models.pricing import (
    CART_PRICING,
    CHECKOUT_PRICING,
    PriceBreakdown,
    PricingConfig,
    ShippingRule,
    TaxRule,
)
from storefront.domain.models.session import Session
from storefront.domain.models.transition import (
    GateState,
    TransitionNotice,
    TransitionOutcome,
    TransitionRecord,
    TransitionRequest,
)
from storefront.domain.models.user import User, UserAddress, UserRole

__all__ = [
    "ApiError",
    "ErrorCategory",
    "Cart",
    "CartItem",
    "CartProduct",
    "Category",
    "DashboardStats",
    "MonthlyRevenue",
    "StatusCount",
    "Order",
    "OrderCustomer",
    "OrderItem",
    "OrderStatus",
    "PaymentInfo",
    "ShippingAddress",
    "StatusHistoryEntry",
    "CUSTOMER_CANCELLABLE_STATUSES",
    "Page",
    "Product",
    "ProductDraft",
    "ProductSize",
    "PriceBreakdown",
    "PricingConfig",
    "ShippingRule",
    "TaxRule",
    "CART_PRICING",
    "CHECKOUT_PRICING",
    "Session",
    "GateState",
    "TransitionNotice",
    "TransitionOutcome",
    "TransitionRecord",
    "TransitionRequest",
    "User",
    "UserAddress",
    "UserRole",
]
