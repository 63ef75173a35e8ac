"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel, Field
from typing import Any


class ErrorResponse(BaseModel):
    """Standard error response format, produced from AutostyleError.to_dict()."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ValidationErrorResponse(BaseModel):
    """Request body / query validation error response format."""

    error: str = "VALIDATION_ERROR"
    message: str = "Request validation failed"
    details: list[dict[str, Any]]
