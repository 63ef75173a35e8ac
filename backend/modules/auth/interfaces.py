"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The credential store is a protocol too, so the service can be exercised with
an in-memory store in tests and the Supabase repository in production.
"""

from typing import Mapping, Optional, Protocol, runtime_checkable

from shared.models import Identity

from .models import (
    AuthResponse,
    CredentialRecord,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserProfile,
)


@runtime_checkable
class ICredentialStore(Protocol):
    """
    Persistence contract for user accounts.

    Email arguments are expected to be lower-cased by the caller.
    """

    def find_by_email(self, email: str) -> Optional[CredentialRecord]:
        ...

    def find_by_id(self, user_id: int) -> Optional[CredentialRecord]:
        ...

    def insert(
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: Optional[str] = None,
    ) -> CredentialRecord:
        ...

    def update(
        self,
        user_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Optional[CredentialRecord]:
        """Apply non-None fields; return None if the user doesn't exist."""
        ...

    def delete(self, user_id: int) -> bool:
        """Delete the user; return False if the user doesn't exist."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    def authenticate(self, headers: Mapping[str, str]) -> Identity:
        """
        Establish the caller's identity from request headers.

        Args:
            headers: Request headers; only ``Authorization`` is read

        Returns:
            Identity decoded from the bearer token

        Raises:
            MissingTokenError: No bearer token in the headers
            ExpiredTokenError: Token is past its expiry
            InvalidTokenError: Token failed verification
        """
        ...

    def authenticate_optional(self, headers: Mapping[str, str]) -> Optional[Identity]:
        """Same as authenticate, but yields None instead of raising."""
        ...

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and issue a token for it.

        Raises:
            EmailAlreadyRegisteredError: The email already has an account
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Exchange credentials for a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        ...

    async def get_profile(self, identity: Identity, user_id: int) -> UserProfile:
        """
        Get a user's profile. Callers may only read their own.

        Raises:
            ForbiddenError: ``user_id`` is not the caller
            UserNotFoundError: The account no longer exists
        """
        ...

    async def update_profile(
        self,
        identity: Identity,
        user_id: int,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        """Update name and/or phone of the caller's own account."""
        ...

    async def delete_account(self, identity: Identity, user_id: int) -> None:
        """Delete the caller's own account."""
        ...
