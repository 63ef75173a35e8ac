"""
Orders module exceptions.
"""

from typing import Iterable

from shared.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class OrderNotFoundError(NotFoundError):
    """Raised when an order is not found."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class InvalidStatusError(ValidationError):
    """Raised when a requested order status is not one of the known values."""

    def __init__(self, requested: object, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(
            f"Invalid status. Allowed values: {', '.join(allowed)}",
            code="INVALID_STATUS",
            details={"requested": requested, "allowed": allowed},
        )


class OperatorAccessError(AuthorizationError):
    """Raised when an operator-only endpoint is called without a valid operator key."""

    def __init__(self, message: str = "Operator access denied"):
        super().__init__(message, code="OPERATOR_ACCESS_DENIED")
