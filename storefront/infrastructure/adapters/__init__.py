"""HTTP adapters for the storefront backend."""

from storefront.infrastructure.adapters.http_client import StorefrontHttpClient
from storefront.infrastructure.adapters.storefront_api import (
    AdminAPI,
    AuthAPI,
    CartAPI,
    CategoriesAPI,
    OrdersAPI,
    PaymentAPI,
    ProductsAPI,
    ReviewsAPI,
    StorefrontApi,
)

__all__ = [
    "StorefrontHttpClient",
    "StorefrontApi",
    "AdminAPI",
    "AuthAPI",
    "CartAPI",
    "CategoriesAPI",
    "OrdersAPI",
    "PaymentAPI",
    "ProductsAPI",
    "ReviewsAPI",
]
