"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory implementations of the credential and order stores, pre-built
services, and a FastAPI app wired to them.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service, get_order_service
from modules.auth.exceptions import EmailAlreadyRegisteredError
from modules.auth.hashing import PasswordHasher
from modules.auth.models import CredentialRecord, TokenClaims
from modules.auth.service import AuthService
from modules.auth.tokens import TokenCodec
from modules.orders.models import Order, OrderStatus, OrderWithOwner
from modules.orders.service import OrderService
from shared.config import Settings, get_settings
from shared.models import Identity


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

# bcrypt's minimum cost keeps the suite fast
TEST_HASH_COST = 4


class InMemoryCredentialStore:
    """ICredentialStore backed by a dict, with the same semantics as the users table."""

    def __init__(self) -> None:
        self.users: dict[int, CredentialRecord] = {}
        self._next_id = 1

    def find_by_email(self, email: str) -> Optional[CredentialRecord]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def find_by_id(self, user_id: int) -> Optional[CredentialRecord]:
        return self.users.get(user_id)

    def insert(
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: Optional[str] = None,
    ) -> CredentialRecord:
        if self.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)
        now = datetime.now(timezone.utc)
        user = CredentialRecord(
            id=self._next_id,
            email=email,
            password_hash=password_hash,
            name=name,
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        self._next_id += 1
        return user

    def update(
        self,
        user_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Optional[CredentialRecord]:
        user = self.users.get(user_id)
        if user is None:
            return None
        changes: dict[str, Any] = {"updated_at": datetime.now(timezone.utc)}
        if name is not None:
            changes["name"] = name
        if phone is not None:
            changes["phone"] = phone
        user = user.model_copy(update=changes)
        self.users[user_id] = user
        return user

    def delete(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryOrderStore:
    """IOrderStore backed by a dict."""

    def __init__(self, users: Optional[InMemoryCredentialStore] = None) -> None:
        self.orders: dict[int, Order] = {}
        self._users = users
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        # Strictly increasing timestamps make "newest first" deterministic
        self._clock += timedelta(seconds=1)
        return self._clock

    def insert_order(
        self,
        owner_id: int,
        items: list[dict[str, Any]],
        total: Decimal,
        delivery_address: Optional[str] = None,
    ) -> Order:
        now = self._tick()
        order = Order(
            id=self._next_id,
            user_id=owner_id,
            items=items,
            total=total,
            status=OrderStatus.PENDING,
            delivery_address=delivery_address,
            created_at=now,
            updated_at=now,
        )
        self.orders[order.id] = order
        self._next_id += 1
        return order

    def find_order(self, order_id: int) -> Optional[Order]:
        return self.orders.get(order_id)

    def list_by_owner(self, owner_id: int) -> list[Order]:
        owned = [o for o in self.orders.values() if o.user_id == owner_id]
        return sorted(owned, key=lambda o: o.created_at, reverse=True)

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Optional[Order]:
        order = self.orders.get(order_id)
        if order is None:
            return None
        order = order.model_copy(update={"status": status, "updated_at": updated_at})
        self.orders[order_id] = order
        return order

    def delete(self, order_id: int) -> bool:
        return self.orders.pop(order_id, None) is not None

    def list_all(
        self,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[OrderWithOwner]:
        selected = [o for o in self.orders.values() if status is None or o.status == status]
        selected.sort(key=lambda o: o.created_at, reverse=True)

        result = []
        for order in selected[offset:offset + limit]:
            owner = self._users.find_by_id(order.user_id) if self._users else None
            result.append(OrderWithOwner(
                **order.model_dump(),
                user_name=owner.name if owner else None,
                user_email=owner.email if owner else None,
            ))
        return result


def build_identity(
    subject_id: int = 1,
    email: str = "ann@example.com",
    display_name: str = "Ann",
) -> Identity:
    """Build an Identity without going through a token."""
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return Identity(
        subject_id=subject_id,
        email=email,
        display_name=display_name,
        issued_at=now,
        expires_at=now + timedelta(days=7),
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests must not leak them."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        jwt_secret=TEST_JWT_SECRET,
        hash_cost_factor=TEST_HASH_COST,
        operator_api_key="test-operator-key",
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(cost_factor=TEST_HASH_COST)


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TEST_JWT_SECRET)


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def order_store(credential_store: InMemoryCredentialStore) -> InMemoryOrderStore:
    return InMemoryOrderStore(users=credential_store)


@pytest.fixture
def auth_service(credential_store, hasher, codec) -> AuthService:
    return AuthService(store=credential_store, hasher=hasher, codec=codec)


@pytest.fixture
def order_service(order_store) -> OrderService:
    return OrderService(store=order_store)


@pytest.fixture
def app(settings, auth_service, order_service):
    """A fresh app wired to the in-memory stores."""
    application = create_app(settings)
    application.dependency_overrides[get_auth_service] = lambda: auth_service
    application.dependency_overrides[get_order_service] = lambda: order_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def issue_token(codec):
    """Return a function that signs a token for the given user."""

    def _issue(
        subject_id: int = 1,
        email: str = "ann@example.com",
        display_name: str = "Ann",
        ttl: Optional[timedelta] = None,
    ) -> str:
        claims = TokenClaims(subject_id=subject_id, email=email, display_name=display_name)
        return codec.encode(claims, ttl=ttl)

    return _issue


@pytest.fixture
def make_identity():
    """Return a function that builds an Identity without going through a token."""
    return build_identity
