"""
Authentication service implementation.

Establishes identities from credentials (register/login), turns bearer
tokens back into identities for each request, and manages the caller's own
account. All state lives in the token or the credential store; the service
itself holds nothing between requests.
"""

import logging
from typing import Mapping, Optional

from starlette.concurrency import run_in_threadpool

from shared.exceptions import AuthenticationError
from shared.models import Identity

from .exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingTokenError,
    UserNotFoundError,
)
from .hashing import PasswordHasher
from .interfaces import ICredentialStore, IAuthService
from .models import (
    AuthResponse,
    CredentialRecord,
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    UpdateProfileRequest,
    UserProfile,
)
from .ownership import authorize_owner
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Returns None when the header is absent, uses another scheme, or has no
    token after the scheme.
    """
    value = None
    for key, header_value in headers.items():
        if key.lower() == "authorization":
            value = header_value
            break

    if not value:
        return None

    scheme, _, token = value.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses bcrypt password hashes and HS256 JWTs; accounts are read from and
    written to the injected credential store.
    """

    def __init__(
        self,
        store: ICredentialStore,
        hasher: PasswordHasher,
        codec: TokenCodec,
    ):
        self._store = store
        self._hasher = hasher
        self._codec = codec
        self._dummy_hash: Optional[str] = None

    # -------------------------------------------------------------------------
    # Authentication gate
    # -------------------------------------------------------------------------

    def authenticate(self, headers: Mapping[str, str]) -> Identity:
        """Decode the bearer token in ``headers`` into an Identity."""
        token = extract_bearer_token(headers)
        if token is None:
            raise MissingTokenError()
        return self._codec.decode(token)

    def authenticate_optional(self, headers: Mapping[str, str]) -> Optional[Identity]:
        """Like authenticate, but anonymous or bad tokens yield None."""
        try:
            return self.authenticate(headers)
        except AuthenticationError:
            return None

    # -------------------------------------------------------------------------
    # Credentials
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResponse:
        email = request.email.lower()

        if self._store.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await run_in_threadpool(self._hasher.hash, request.password)
        user = self._store.insert(
            name=request.name,
            email=email,
            password_hash=password_hash,
            phone=request.phone or None,
        )
        logger.info(f"Registered user {user.id}")

        return AuthResponse(
            message="Registration successful",
            token=self.issue_token(user),
            user=user.to_profile(),
        )

    async def login(self, request: LoginRequest) -> AuthResponse:
        email = request.email.lower()
        user = self._store.find_by_email(email)

        if user is None:
            # Burn the same bcrypt time as a real check
            dummy_hash = await self._get_dummy_hash()
            await run_in_threadpool(self._hasher.verify, request.password, dummy_hash)
            logger.info("Login failed: no account for the given email")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(self._hasher.verify, request.password, user.password_hash):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        return AuthResponse(
            message="Login successful",
            token=self.issue_token(user),
            user=user.to_profile(),
        )

    def issue_token(self, user: CredentialRecord) -> str:
        """Sign a fresh token for ``user``."""
        claims = TokenClaims(
            subject_id=user.id,
            email=user.email,
            display_name=user.name,
        )
        return self._codec.encode(claims)

    # -------------------------------------------------------------------------
    # Own account
    # -------------------------------------------------------------------------

    async def get_profile(self, identity: Identity, user_id: int) -> UserProfile:
        authorize_owner(identity, user_id)

        user = self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.to_profile()

    async def update_profile(
        self,
        identity: Identity,
        user_id: int,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        authorize_owner(identity, user_id)

        user = self._store.update(user_id, name=request.name, phone=request.phone)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.to_profile()

    async def delete_account(self, identity: Identity, user_id: int) -> None:
        authorize_owner(identity, user_id)

        if not self._store.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info(f"Deleted user {user_id}")

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await run_in_threadpool(self._hasher.hash, "not-a-real-password")
        return self._dummy_hash
