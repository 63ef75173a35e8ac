"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import Identity

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


class TokenClaims(BaseModel):
    """Identity fields a token is issued for, before timestamps are attached."""

    subject_id: int = Field(..., description="User ID")
    email: str = Field(..., description="User's email")
    display_name: str = Field(..., description="User's display name")

    model_config = {"frozen": True}


class JWTPayload(BaseModel):
    """
    Decoded JWT payload as it travels on the wire.

    ``sub`` is the user ID as a string, the way RFC 7519 requires.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    name: str = Field(..., description="User's display name")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    def to_identity(self) -> Identity:
        """Convert the wire payload into the Identity used by route handlers."""
        return Identity(
            subject_id=int(self.sub),
            email=self.email,
            display_name=self.name,
            issued_at=datetime.fromtimestamp(self.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(self.exp, tz=timezone.utc),
        )


class CredentialRecord(BaseModel):
    """
    A row of the users table, including the password hash.

    Never returned to clients; see UserProfile.
    """

    id: int
    email: str
    password_hash: str
    name: str
    phone: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_profile(self) -> "UserProfile":
        return UserProfile(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class UserProfile(BaseModel):
    """Public view of a user account."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    phone: Optional[str] = Field(None, description="Phone number")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class RegisterRequest(BaseModel):
    """Request to create a new account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Request to exchange credentials for a token."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    """Profile changes. Omitted fields keep their current value."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class AuthResponse(BaseModel):
    """Returned by register and login."""

    message: str
    token: str
    user: UserProfile


class UserResponse(BaseModel):
    """Envelope for a single user profile."""

    message: Optional[str] = None
    user: UserProfile
