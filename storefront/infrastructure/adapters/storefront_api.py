"""Endpoint groups of the storefront REST API."""

from __future__ import annotations

from typing import Any

from storefront.domain.models.cart import Cart
from storefront.domain.models.category import Category
from storefront.domain.models.dashboard import DashboardStats
from storefront.domain.models.order import Order, OrderStatus, ShippingAddress
from storefront.domain.models.page import Page
from storefront.domain.models.product import Product
from storefront.domain.models.user import User, UserRole
from storefront.infrastructure.adapters.http_client import StorefrontHttpClient
from storefront.infrastructure.utils.validation import validate_entity_id


class _EndpointGroup:
    def __init__(self, http: StorefrontHttpClient) -> None:
        self._http = http


class AuthAPI(_EndpointGroup):
    async def login(self, email: str, password: str) -> dict[str, Any]:
        return await self._http.post("/auth/login", json={"email": email, "password": password})

    async def register(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._http.post("/auth/register", json=data)

    async def get_profile(self) -> dict[str, Any]:
        return await self._http.get("/auth/profile")

    async def update_profile(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._http.put("/auth/profile", json=data)


class ProductsAPI(_EndpointGroup):
    async def get_all(self, params: dict[str, Any] | None = None) -> Any:
        return await self._http.get("/products", params=params)

    async def get_featured(self) -> Any:
        return await self._http.get("/products/featured")

    async def get_by_id(self, product_id: str) -> Any:
        validate_entity_id(product_id, "product_id")
        return await self._http.get(f"/products/{product_id}")

    async def get_categories(self) -> Any:
        return await self._http.get("/products/categories")

    async def get_by_category(self, category: str) -> Any:
        return await self._http.get(f"/products/category/{category}")


class CartAPI(_EndpointGroup):
    """Cart endpoints. Every mutation answers with the whole updated cart."""

    async def get(self) -> Cart:
        return Cart.model_validate(await self._http.get("/cart") or {})

    async def add(
        self,
        product_id: str,
        quantity: int = 1,
        selected_size: str | None = None,
        customization: dict[str, Any] | None = None,
    ) -> Cart:
        data = await self._http.post(
            "/cart/add",
            json={
                "productId": product_id,
                "quantity": quantity,
                "selectedSize": selected_size,
                "customization": customization,
            },
        )
        return Cart.model_validate(data or {})

    async def update(self, item_id: str, quantity: int) -> Cart:
        validate_entity_id(item_id, "item_id")
        data = await self._http.put(f"/cart/update/{item_id}", json={"quantity": quantity})
        return Cart.model_validate(data or {})

    async def remove(self, item_id: str) -> Cart:
        validate_entity_id(item_id, "item_id")
        data = await self._http.delete(f"/cart/remove/{item_id}")
        return Cart.model_validate(data or {})

    async def clear(self) -> None:
        await self._http.delete("/cart/clear")


class OrdersAPI(_EndpointGroup):
    """The signed-in customer's own orders."""

    async def get_all(self) -> list[Order]:
        data = await self._http.get("/orders")
        if isinstance(data, dict):
            data = data.get("orders", [])
        return [Order.model_validate(item) for item in data or []]

    async def get_by_id(self, order_id: str) -> Order:
        validate_entity_id(order_id, "order_id")
        return Order.model_validate(await self._http.get(f"/orders/{order_id}"))

    async def cancel(self, order_id: str) -> Any:
        validate_entity_id(order_id, "order_id")
        return await self._http.put(f"/orders/{order_id}/cancel")


class PaymentAPI(_EndpointGroup):
    async def create_order(self, amount: Any, shipping_address: ShippingAddress) -> dict[str, Any]:
        return await self._http.post(
            "/payment/create-order",
            json={"amount": amount, "shippingAddress": shipping_address.model_dump()},
        )

    async def verify(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._http.post("/payment/verify", json=data)

    async def get_key(self) -> dict[str, Any]:
        return await self._http.get("/payment/key")

    async def demo(self, shipping_address: ShippingAddress) -> dict[str, Any]:
        return await self._http.post(
            "/payment/demo",
            json={"shippingAddress": shipping_address.model_dump()},
        )


class AdminAPI(_EndpointGroup):
    """Back-office endpoints (admin session required)."""

    async def get_dashboard(self) -> DashboardStats:
        return DashboardStats.from_response(await self._http.get("/admin/dashboard"))

    # Products
    async def get_products(self, page: int = 1, search: str = "") -> Page[Product]:
        data = await self._http.get("/admin/products", params={"page": page, "search": search})
        return _parse_page(data, "products", Product, page)

    async def create_product(self, data: dict[str, Any], files: Any = None) -> Any:
        return await self._http.post("/admin/products", data=data, files=files)

    async def update_product(self, product_id: str, data: dict[str, Any], files: Any = None) -> Any:
        validate_entity_id(product_id, "product_id")
        return await self._http.put(f"/admin/products/{product_id}", data=data, files=files)

    async def delete_product(self, product_id: str) -> Any:
        validate_entity_id(product_id, "product_id")
        return await self._http.delete(f"/admin/products/{product_id}")

    # Orders
    async def get_orders(
        self,
        page: int = 1,
        search: str = "",
        status: OrderStatus | str | None = None,
    ) -> Page[Order]:
        status_value = status.value if isinstance(status, OrderStatus) else (status or "")
        data = await self._http.get(
            "/admin/orders",
            params={"page": page, "search": search, "status": status_value},
        )
        return _parse_page(data, "orders", Order, page)

    async def get_order(self, order_id: str) -> Order:
        validate_entity_id(order_id, "order_id")
        return Order.model_validate(await self._http.get(f"/admin/orders/{order_id}"))

    async def update_order_status(self, order_id: str, status: OrderStatus | str) -> Any:
        validate_entity_id(order_id, "order_id")
        return await self._http.put(
            f"/admin/orders/{order_id}/status",
            json={"status": OrderStatus(status).value},
        )

    # Users
    async def get_users(self, page: int = 1, search: str = "") -> Page[User]:
        data = await self._http.get("/admin/users", params={"page": page, "search": search})
        return _parse_page(data, "users", User, page)

    async def update_user_role(self, user_id: str, role: UserRole | str) -> Any:
        validate_entity_id(user_id, "user_id")
        return await self._http.put(
            f"/admin/users/{user_id}/role",
            json={"role": UserRole(role).value},
        )

    # Categories
    async def get_categories(self) -> list[Category]:
        data = await self._http.get("/categories/all")
        if isinstance(data, dict):
            data = data.get("categories", [])
        return [Category.model_validate(item) for item in data or []]

    async def create_category(self, data: dict[str, Any], files: Any = None) -> Any:
        return await self._http.post("/categories", data=data, files=files)

    async def update_category(self, category_id: str, data: dict[str, Any], files: Any = None) -> Any:
        validate_entity_id(category_id, "category_id")
        return await self._http.put(f"/categories/{category_id}", data=data, files=files)

    async def delete_category(self, category_id: str) -> Any:
        validate_entity_id(category_id, "category_id")
        return await self._http.delete(f"/categories/{category_id}")


class CategoriesAPI(_EndpointGroup):
    async def get_all(self) -> Any:
        return await self._http.get("/categories")

    async def get_by_slug(self, slug: str) -> Any:
        return await self._http.get(f"/categories/{slug}")


class ReviewsAPI(_EndpointGroup):
    async def get_product_reviews(self, product_id: str, params: dict[str, Any] | None = None) -> Any:
        return await self._http.get(f"/reviews/product/{product_id}", params=params)

    async def can_review(self, product_id: str) -> Any:
        return await self._http.get(f"/reviews/can-review/{product_id}")

    async def create(self, product_id: str, data: dict[str, Any]) -> Any:
        return await self._http.post(f"/reviews/{product_id}", json=data)

    async def update(self, review_id: str, data: dict[str, Any]) -> Any:
        return await self._http.put(f"/reviews/{review_id}", json=data)

    async def delete(self, review_id: str) -> Any:
        return await self._http.delete(f"/reviews/{review_id}")

    async def get_user_reviews(self) -> Any:
        return await self._http.get("/reviews/user")


class StorefrontApi:
    """All endpoint groups over one shared HTTP client."""

    def __init__(self, http: StorefrontHttpClient) -> None:
        self.http = http
        self.auth = AuthAPI(http)
        self.products = ProductsAPI(http)
        self.cart = CartAPI(http)
        self.orders = OrdersAPI(http)
        self.payment = PaymentAPI(http)
        self.admin = AdminAPI(http)
        self.categories = CategoriesAPI(http)
        self.reviews = ReviewsAPI(http)


def _parse_page(data: Any, key: str, model: Any, requested_page: int) -> Page[Any]:
    data = data or {}
    items = [model.model_validate(item) for item in data.get(key, [])]
    return Page[model](
        items=items,
        page=data.get("page") or requested_page,
        pages=data.get("pages", 1),
        total=data.get("total"),
    )
