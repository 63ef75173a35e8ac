"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from pydantic import BaseModel, Field, model_validator


class Identity(BaseModel):
    """
    The identity claim set carried inside an access token.

    Populated from a verified token and made available to route handlers
    via dependency injection. Never persisted server-side.
    """

    subject_id: int = Field(..., description="User ID (users.id)")
    email: str = Field(..., description="User's email address")
    display_name: str = Field(..., description="User's display name")
    issued_at: datetime = Field(..., description="When the token was issued")
    expires_at: datetime = Field(..., description="When the token stops being valid")

    model_config = {
        "frozen": True,  # Claims are immutable once issued
    }

    @model_validator(mode="after")
    def _check_lifetime(self) -> "Identity":
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be later than issued_at")
        return self


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
