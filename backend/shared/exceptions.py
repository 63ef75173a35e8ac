"""
Base exception classes for the AutoStyle backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to a single HTTP status code, so a new
exception only has to pick the right parent.
"""

from typing import Optional, Any


class AutostyleError(Exception):
    """
    Base exception for all AutoStyle errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AutostyleError):
    """Resource not found."""

    pass


class ValidationError(AutostyleError):
    """Input validation failed."""

    pass


class ConflictError(AutostyleError):
    """Resource already exists."""

    pass


class AuthenticationError(AutostyleError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AutostyleError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(AutostyleError):
    """The process is misconfigured and must not start."""

    pass
