"""StorefrontClient - wires the storefront components together."""

from typing import Any

import httpx

from storefront.domain.components.cart_manager import CartManager
from storefront.domain.components.category_manager import CategoryManager
from storefront.domain.components.checkout import CheckoutWizard
from storefront.domain.components.dashboard import AdminDashboard
from storefront.domain.components.list_views import OrderListView, UserListView
from storefront.domain.components.order_tracker import OrderTracker
from storefront.domain.components.product_manager import ProductManager
from storefront.domain.components.session_manager import SessionManager
from storefront.domain.components.transition_gate import TransitionGate
from storefront.domain.components.transition_policies import (
    OrderStatusPolicy,
    UserRolePolicy,
)
from storefront.domain.interfaces.navigator import Navigator
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.interfaces.payment_gateway import PaymentGateway
from storefront.domain.interfaces.session_store import SessionStore
from storefront.domain.models.api_error import ApiError
from storefront.domain.models.pricing import PricingConfig
from storefront.domain.models.session import Session
from storefront.infrastructure.adapters.http_client import StorefrontHttpClient
from storefront.infrastructure.adapters.storefront_api import StorefrontApi
from storefront.infrastructure.config.file_loader import PricingConfigLoader
from storefront.infrastructure.config.settings import StorefrontSettings
from storefront.infrastructure.observability.logger import DefaultObservabilityManager
from storefront.infrastructure.observability.notifier import LoggingNotifier
from storefront.infrastructure.session_store.file_store import EncryptedFileSessionStore
from storefront.infrastructure.session_store.memory_store import InMemorySessionStore
from storefront.infrastructure.utils.encryption import EncryptionService


class StorefrontClient:
    """Main entry point for library.

    Builds the HTTP client, the session, and one instance of every view
    component over a single configuration.

    Example:
        ```python
        async with StorefrontClient({"api_url": "https://shop.example/api"}) as client:
            await client.login("admin@example.com", "secret")
            await client.orders.refresh()
            client.orders.request_status_change(order_id, "shipped")
            await client.order_gate.confirm()
        ```
    """

    def __init__(
        self,
        config: StorefrontSettings | dict[str, Any] | None = None,
        session_store: SessionStore | None = None,
        observability_manager: ObservabilityManager | None = None,
        notifier: Notifier | None = None,
        navigator: Navigator | None = None,
        payment_gateway: PaymentGateway | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize StorefrontClient with dependencies.

        Args:
            config: Optional configuration. Can be:
                   - StorefrontSettings instance
                   - Dictionary with configuration values
                   - None (loads from environment variables)
            session_store: Optional SessionStore. Defaults to an encrypted file
                store when ``session_file`` is configured, else in-memory.
            observability_manager: Optional ObservabilityManager. Defaults to
                DefaultObservabilityManager.
            notifier: Optional Notifier. Defaults to LoggingNotifier.
            navigator: Receives the login route on 401 and the order page
                after checkout.
            payment_gateway: External payment widget used by checkout.
            transport: Optional httpx transport (for testing).

        Raises:
            ValueError: If configuration is invalid.
            ConfigurationError: If the pricing file cannot be loaded.
        """
        if config is None:
            self._config = StorefrontSettings()
        elif isinstance(config, dict):
            self._config = StorefrontSettings.from_dict(config)
        elif isinstance(config, StorefrontSettings):
            self._config = config
        else:
            raise ValueError(
                f"Invalid config type: {type(config)}. Expected StorefrontSettings, dict, or None"
            )

        if observability_manager is None:
            self._observability_manager: ObservabilityManager = DefaultObservabilityManager(
                log_level=self._config.log_level,
                json_format=self._config.json_logs,
            )
        else:
            self._observability_manager = observability_manager

        if session_store is None:
            session_store = self._default_session_store()
        self._notifier: Notifier = notifier or LoggingNotifier()

        cart_pricing, checkout_pricing = self._load_pricing()

        self._session_manager = SessionManager(
            store=session_store,
            observability_manager=self._observability_manager,
            navigator=navigator,
            login_path=self._config.login_path,
        )
        self._http = StorefrontHttpClient(
            self._config.api_url,
            self._session_manager,
            timeout=self._config.http_timeout_seconds,
            transport=transport,
        )
        self._api = StorefrontApi(self._http)

        self._order_gate = TransitionGate(
            OrderStatusPolicy(self._api.admin), self._notifier, self._observability_manager
        )
        self._user_gate = TransitionGate(
            UserRolePolicy(self._api.admin), self._notifier, self._observability_manager
        )
        self._orders = OrderListView(
            self._api.admin, self._order_gate, self._notifier, self._observability_manager
        )
        self._users = UserListView(
            self._api.admin, self._user_gate, self._notifier, self._observability_manager
        )
        self._cart = CartManager(
            self._api.cart, self._session_manager, self._notifier, pricing=cart_pricing
        )
        self._checkout = CheckoutWizard(
            self._api.payment,
            self._cart,
            self._session_manager,
            self._notifier,
            self._observability_manager,
            payment_gateway=payment_gateway,
            pricing=checkout_pricing,
        )
        self._tracker = OrderTracker(self._api.orders, self._notifier)
        self._categories = CategoryManager(self._api.admin, self._notifier)
        self._products = ProductManager(
            self._api.admin, self._api.categories, self._notifier, self._observability_manager
        )
        self._dashboard = AdminDashboard(self._api.admin, self._notifier)

    async def __aenter__(self) -> "StorefrontClient":
        """Restore any persisted session."""
        await self.hydrate()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def config(self) -> StorefrontSettings:
        return self._config

    @property
    def api(self) -> StorefrontApi:
        return self._api

    @property
    def session(self) -> SessionManager:
        return self._session_manager

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def observability_manager(self) -> ObservabilityManager:
        return self._observability_manager

    @property
    def order_gate(self) -> TransitionGate:
        return self._order_gate

    @property
    def user_gate(self) -> TransitionGate:
        return self._user_gate

    @property
    def orders(self) -> OrderListView:
        return self._orders

    @property
    def users(self) -> UserListView:
        return self._users

    @property
    def cart(self) -> CartManager:
        return self._cart

    @property
    def checkout(self) -> CheckoutWizard:
        return self._checkout

    @property
    def tracker(self) -> OrderTracker:
        return self._tracker

    @property
    def categories(self) -> CategoryManager:
        return self._categories

    @property
    def products(self) -> ProductManager:
        return self._products

    @property
    def dashboard(self) -> AdminDashboard:
        return self._dashboard

    async def hydrate(self) -> Session | None:
        session = await self._session_manager.hydrate()
        if session is not None:
            await self._cart.load()
        return session

    async def login(self, email: str, password: str) -> Session:
        """Sign in and start a session.

        Raises:
            ApiError: If the credentials are rejected.
        """
        data = await self._api.auth.login(email, password)
        return await self._start(data)

    async def register(self, fields: dict[str, Any]) -> Session:
        data = await self._api.auth.register(fields)
        return await self._start(data)

    async def update_profile(self, fields: dict[str, Any]) -> Session | None:
        """Save the profile form and refresh the session from the reply.

        The reply carries the updated user; the bearer token is kept unless
        the backend issues a new one. Returns None if the update was rejected.
        """
        try:
            data = await self._api.auth.update_profile(fields)
        except ApiError as e:
            self._notifier.error(e.user_message("Failed to update profile"))
            return None
        current = self._session_manager.current
        if current is None:
            return None
        data = dict(data or {})
        merged = Session.model_validate({
            **current.to_document(),
            **data,
            "_id": current.user_id,
            "token": data.get("token") or current.token,
        })
        session = await self._session_manager.start(merged)
        self._notifier.success("Profile updated successfully!")
        return session

    async def logout(self) -> None:
        await self._session_manager.teardown(reason="logout")
        await self._cart.load()

    async def _start(self, data: dict[str, Any]) -> Session:
        session = await self._session_manager.start(Session.from_login_response(data))
        await self._cart.load()
        return session

    def _default_session_store(self) -> SessionStore:
        if not self._config.session_file:
            return InMemorySessionStore()
        return EncryptedFileSessionStore(
            self._config.session_file,
            encryption_service=EncryptionService(self._config.encryption_key),
        )

    def _load_pricing(self) -> tuple[PricingConfig, PricingConfig]:
        cart_pricing = self._config.cart_pricing()
        checkout_pricing = self._config.checkout_pricing()
        if self._config.pricing_file:
            loaded = PricingConfigLoader(self._config.pricing_file).load()
            cart_pricing = loaded.get("cart", cart_pricing)
            checkout_pricing = loaded.get("checkout", checkout_pricing)
        return cart_pricing, checkout_pricing
