"""
User-related endpoints.

Provides registration, login and management of the caller's own account.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from shared.models import Identity, MessageResponse

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create an account and return a token for it.

    Email is case-insensitive and must not be registered yet.
    """
    return await auth.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Exchange email and password for a token.

    Unknown email and wrong password produce the same 401 response.
    """
    return await auth.login(request)


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    user: Identity = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Get the current user's profile.

    Requires authentication.
    """
    profile = await auth.get_profile(user, user.subject_id)
    return UserResponse(user=profile)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    user: Identity = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """Get a user's profile. Only the user themselves may read it."""
    profile = await auth.get_profile(user, user_id)
    return UserResponse(user=profile)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UpdateProfileRequest,
    user: Identity = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """Update name and/or phone. Email and password cannot be changed."""
    profile = await auth.update_profile(user, user_id, request)
    return UserResponse(message="Profile updated", user=profile)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    user: Identity = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Delete the caller's account together with its orders."""
    await auth.delete_account(user, user_id)
    return MessageResponse(message="User deleted")
