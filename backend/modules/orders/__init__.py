"""
Orders module.

Handles order placement, per-user access, status changes and the
operator-wide listing.

Public API:
- IOrderService / IOrderStore: Interfaces for order operations and storage
- Order, OrderStatus: Core models
- apply_status, parse_status: Status validation
- Order exceptions: OrderNotFoundError, InvalidStatusError, OperatorAccessError
"""

from .interfaces import IOrderService, IOrderStore
from .models import (
    CreateOrderRequest,
    OperatorOrderListResponse,
    Order,
    OrderListResponse,
    OrderResponse,
    OrderStatus,
    OrderWithOwner,
    UpdateStatusRequest,
)
from .status import ALLOWED_STATUSES, apply_status, parse_status
from .exceptions import (
    OrderNotFoundError,
    InvalidStatusError,
    OperatorAccessError,
)

__all__ = [
    # Interfaces
    "IOrderService",
    "IOrderStore",
    # Models
    "CreateOrderRequest",
    "OperatorOrderListResponse",
    "Order",
    "OrderListResponse",
    "OrderResponse",
    "OrderStatus",
    "OrderWithOwner",
    "UpdateStatusRequest",
    # Status
    "ALLOWED_STATUSES",
    "apply_status",
    "parse_status",
    # Exceptions
    "OrderNotFoundError",
    "InvalidStatusError",
    "OperatorAccessError",
]
