"""
Authentication dependencies.

Validates bearer tokens through the auth service and attaches the resulting
identity to ``request.state`` for the rest of the request.
"""

import secrets
from typing import Optional
from fastapi import Depends, Header, Request

from modules.auth.interfaces import IAuthService
from modules.orders.exceptions import OperatorAccessError
from shared.config import Settings
from shared.models import Identity

from ..dependencies import get_app_settings, get_auth_service


async def get_current_user(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> Identity:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user. Missing, expired
    and invalid tokens raise distinct AuthenticationError subclasses, which
    the app turns into 401 responses.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Identity = Depends(get_current_user)):
            return {"user_id": user.subject_id}
    """
    identity = auth.authenticate(request.headers)
    request.state.identity = identity
    return identity


async def get_optional_user(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[Identity]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[Identity] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.email}"}
            return {"message": "Hello, anonymous"}
    """
    identity = auth.authenticate_optional(request.headers)
    request.state.identity = identity
    return identity


async def require_operator(
    x_operator_key: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Dependency guarding operator-only endpoints.

    Compares the ``X-Operator-Key`` header with AUTOSTYLE_OPERATOR_API_KEY.
    With no key configured the endpoints are closed to everyone.
    """
    if not settings.operator_api_key:
        raise OperatorAccessError("Operator access is not configured")

    if not x_operator_key or not secrets.compare_digest(
        x_operator_key.encode("utf-8"),
        settings.operator_api_key.encode("utf-8"),
    ):
        raise OperatorAccessError()


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireOperator = Depends(require_operator)
