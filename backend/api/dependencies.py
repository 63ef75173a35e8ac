"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container lives on ``app.state`` so every app instance (and every test)
gets its own wiring.
"""

from typing import TYPE_CHECKING

from fastapi import Request

from shared.config import Settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.hashing import PasswordHasher
    from modules.auth.interfaces import IAuthService, ICredentialStore
    from modules.auth.tokens import TokenCodec
    from modules.orders.interfaces import IOrderService, IOrderStore


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access, except the
    token codec, which create_app() builds eagerly so that a missing signing
    secret stops startup.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._password_hasher: "PasswordHasher | None" = None
        self._token_codec: "TokenCodec | None" = None
        self._user_repository: "ICredentialStore | None" = None
        self._order_repository: "IOrderStore | None" = None
        self._auth_service: "IAuthService | None" = None
        self._order_service: "IOrderService | None" = None

    @property
    def password_hasher(self) -> "PasswordHasher":
        if self._password_hasher is None:
            from modules.auth.hashing import PasswordHasher
            self._password_hasher = PasswordHasher(self.settings.hash_cost_factor)
        return self._password_hasher

    @property
    def token_codec(self) -> "TokenCodec":
        if self._token_codec is None:
            from modules.auth.tokens import TokenCodec
            self._token_codec = TokenCodec.from_settings(self.settings)
        return self._token_codec

    @property
    def user_repository(self) -> "ICredentialStore":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def order_repository(self) -> "IOrderStore":
        """Get the order repository instance."""
        if self._order_repository is None:
            from modules.orders.repository import OrderRepository
            from shared.database import get_supabase_client
            self._order_repository = OrderRepository(get_supabase_client())
        return self._order_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                store=self.user_repository,
                hasher=self.password_hasher,
                codec=self.token_codec,
            )
        return self._auth_service

    @property
    def orders(self) -> "IOrderService":
        """Get the order service instance."""
        if self._order_service is None:
            from modules.orders.service import OrderService
            self._order_service = OrderService(store=self.order_repository)
        return self._order_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._password_hasher = None
        self._token_codec = None
        self._user_repository = None
        self._order_repository = None
        self._auth_service = None
        self._order_service = None


def get_container(request: Request) -> ServiceContainer:
    """The container of the app handling ``request``."""
    return request.app.state.container


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency for the app's settings."""
    return get_container(request).settings


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_order_service(request: Request) -> "IOrderService":
    """FastAPI dependency for order service."""
    return get_container(request).orders
