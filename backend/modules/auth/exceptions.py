"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a token's signature, algorithm or structure cannot be verified."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised on a failed login.

    The message is identical for an unknown email and a wrong password.
    """

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "A user with this email already exists",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user record doesn't exist in the database."""

    def __init__(self, user_id: int):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class ForbiddenError(AuthorizationError):
    """Raised when the caller does not own the resource they are touching."""

    def __init__(self, subject_id: int, owner_id: int):
        # The owner id is kept off the response body.
        super().__init__("Access denied", code="FORBIDDEN")
        self.subject_id = subject_id
        self.owner_id = owner_id
