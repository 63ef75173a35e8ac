"""
Authentication module.

Handles password hashing, token issuing and validation, the per-request
authentication gate, account management and resource ownership checks.

Public API:
- IAuthService / ICredentialStore: Interfaces for auth operations and storage
- PasswordHasher, TokenCodec: The two cryptographic building blocks
- authorize_owner: Ownership check shared with other modules
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ICredentialStore
from .models import (
    AuthResponse,
    CredentialRecord,
    JWTPayload,
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    UpdateProfileRequest,
    UserProfile,
)
from .hashing import PasswordHasher
from .tokens import TokenCodec
from .ownership import authorize_owner, is_owner
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    EmailAlreadyRegisteredError,
    UserNotFoundError,
    ForbiddenError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICredentialStore",
    # Models
    "AuthResponse",
    "CredentialRecord",
    "JWTPayload",
    "LoginRequest",
    "RegisterRequest",
    "TokenClaims",
    "UpdateProfileRequest",
    "UserProfile",
    # Building blocks
    "PasswordHasher",
    "TokenCodec",
    "authorize_owner",
    "is_owner",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "EmailAlreadyRegisteredError",
    "UserNotFoundError",
    "ForbiddenError",
]
