"""
Service info and health check endpoints.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings
from shared.models import Identity

from ..dependencies import get_app_settings
from ..middleware.auth import get_optional_user

router = APIRouter()
# Root-only; not mounted under /api
info_router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    timestamp: datetime


class ServiceInfoResponse(BaseModel):
    """Service description returned from the root path."""

    message: str
    version: str
    endpoints: dict[str, str]
    authenticated_as: Optional[str] = None


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(
        status="ok",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc),
    )


@info_router.get("/", response_model=ServiceInfoResponse)
async def service_info(
    settings: Settings = Depends(get_app_settings),
    user: Optional[Identity] = Depends(get_optional_user),
) -> ServiceInfoResponse:
    """
    Describe the API.

    Works anonymously; with a valid token the caller's email is echoed back.
    """
    return ServiceInfoResponse(
        message=settings.app_name,
        version=settings.app_version,
        endpoints={
            "users": "/api/users",
            "orders": "/api/orders",
        },
        authenticated_as=user.email if user else None,
    )
