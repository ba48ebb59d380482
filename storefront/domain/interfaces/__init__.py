"""Domain interfaces for the storefront client."""

from storefront.domain.interfaces.navigator import Navigator, NullNavigator
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import (
    ObservabilityError,
    ObservabilityManager,
)
from storefront.domain.interfaces.payment_gateway import (
    GatewayCheckout,
    GatewayPayment,
    PaymentGateway,
)
from storefront.domain.interfaces.session_store import SessionStore, SessionStoreError

__all__ = [
    "Navigator",
    "NullNavigator",
    "Notifier",
    "ObservabilityManager",
    "ObservabilityError",
    "GatewayCheckout",
    "GatewayPayment",
    "PaymentGateway",
    "SessionStore",
    "SessionStoreError",
]
