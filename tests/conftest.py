"""Pytest configuration and shared fixtures."""
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from dotenv import load_dotenv

from storefront.domain.components.session_manager import SessionManager
from storefront.domain.interfaces.navigator import Navigator
from storefront.domain.interfaces.notifier import Notifier
from storefront.domain.interfaces.observability_manager import ObservabilityManager
from storefront.domain.interfaces.session_store import SessionStoreError
from storefront.domain.models.session import Session
from storefront.infrastructure.adapters.http_client import StorefrontHttpClient
from storefront.infrastructure.adapters.storefront_api import StorefrontApi
from storefront.infrastructure.session_store.memory_store import InMemorySessionStore

# Load .env file from project root before running tests
project_root = Path(__file__).parent.parent
env_path = project_root / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Ensure encryption key is set for all tests
if not os.getenv("STOREFRONT_ENCRYPTION_KEY"):
    from cryptography.fernet import Fernet

    os.environ["STOREFRONT_ENCRYPTION_KEY"] = Fernet.generate_key().decode()

BASE_URL = "http://shop.test/api"


class MockObservabilityManager(ObservabilityManager):
    """Mock ObservabilityManager for testing."""

    def __init__(self) -> None:
        self.events: list[dict] = []
        self.logs: list[dict] = []
        self.emit_error: Exception | None = None

    async def emit_event(
        self,
        event_type: str,
        payload: dict,
        metadata: dict | None = None,
    ) -> None:
        if self.emit_error:
            raise self.emit_error
        self.events.append({
            "event_type": event_type,
            "payload": payload,
            "metadata": metadata or {},
        })

    async def log(
        self,
        level: str,
        message: str,
        context: dict | None = None,
    ) -> None:
        self.logs.append({
            "level": level,
            "message": message,
            "context": context or {},
        })

    def event_types(self) -> list[str]:
        return [event["event_type"] for event in self.events]


class MockNotifier(Notifier):
    """Records notifications instead of showing them."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class MockNavigator(Navigator):
    def __init__(self) -> None:
        self.paths: list[str] = []

    def go_to(self, path: str) -> None:
        self.paths.append(path)


class ReadOnlySessionStore(InMemorySessionStore):
    """Store whose persisted copy cannot be removed."""

    async def clear(self) -> None:
        raise SessionStoreError("disk is read-only")


Responder = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """In-process stand-in for the REST backend, served through httpx.MockTransport.

    Routes are keyed by method and path relative to the API base URL.
    Unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        responder: Responder | None = None,
    ) -> None:
        if responder is None:
            def responder(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, json=json_body)
        self.routes[(method, path)] = responder

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        responder = self.routes.get((request.method, path))
        if responder is None:
            return httpx.Response(404, json={"message": f"No route {request.method} {path}"})
        return responder(request)

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method)
            and (path is None or r.url.path.removeprefix("/api") == path)
        ]

    def mutations(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


def make_session(role: str = "admin", **overrides: Any) -> Session:
    data = {
        "_id": "u-admin",
        "name": "Asha Admin",
        "email": "asha@example.com",
        "phone": "9876543210",
        "role": role,
        "token": "tok-123",
        "address": {"street": "12 MG Road", "city": "Jaipur", "state": "RJ", "pincode": "302001"},
    }
    data.update(overrides)
    return Session.model_validate(data)


@pytest.fixture(scope="session", autouse=True)
def ensure_encryption_key():
    """Ensure encryption key is available for all tests."""
    if not os.getenv("STOREFRONT_ENCRYPTION_KEY"):
        from cryptography.fernet import Fernet

        os.environ["STOREFRONT_ENCRYPTION_KEY"] = Fernet.generate_key().decode()


@pytest.fixture
def observability() -> MockObservabilityManager:
    return MockObservabilityManager()


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def navigator() -> MockNavigator:
    return MockNavigator()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def admin_session() -> Session:
    return make_session()


@pytest.fixture
def session_store(admin_session) -> InMemorySessionStore:
    return InMemorySessionStore(admin_session)


@pytest.fixture
def read_only_store(admin_session) -> ReadOnlySessionStore:
    return ReadOnlySessionStore(admin_session)


@pytest.fixture
def session_manager(session_store, admin_session, observability, navigator) -> SessionManager:
    """SessionManager already holding the persisted admin session."""
    return SessionManager(session_store, observability, navigator=navigator, session=admin_session)


@pytest.fixture
def http_client(backend, session_manager) -> StorefrontHttpClient:
    return StorefrontHttpClient(BASE_URL, session_manager, transport=backend.transport)


@pytest.fixture
def session_factory() -> Callable[..., Session]:
    return make_session


@pytest.fixture
def api(http_client) -> StorefrontApi:
    return StorefrontApi(http_client)
