"""
Orders module interfaces.

The API layer depends on IOrderService for all order operations; the
service depends on IOrderStore for persistence.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import Identity

from .models import CreateOrderRequest, Order, OrderStatus, OrderWithOwner


@runtime_checkable
class IOrderStore(Protocol):
    """Persistence contract for orders."""

    def insert_order(
        self,
        owner_id: int,
        items: list[dict[str, Any]],
        total: Decimal,
        delivery_address: Optional[str] = None,
    ) -> Order:
        """Insert a new order in PENDING status."""
        ...

    def find_order(self, order_id: int) -> Optional[Order]:
        ...

    def list_by_owner(self, owner_id: int) -> list[Order]:
        """Orders of one user, newest first."""
        ...

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Optional[Order]:
        """Write status and updated_at; return None if the order doesn't exist."""
        ...

    def delete(self, order_id: int) -> bool:
        """Delete the order; return False if it doesn't exist."""
        ...

    def list_all(
        self,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[OrderWithOwner]:
        """Orders of every user with owner details, newest first."""
        ...


@runtime_checkable
class IOrderService(Protocol):
    """
    Interface for order operations.

    Every method taking an Identity enforces ownership: a missing order is
    reported before a foreign one.
    """

    async def create_order(self, identity: Identity, request: CreateOrderRequest) -> Order:
        """
        Place an order owned by the caller.

        Args:
            identity: The authenticated caller
            request: Items, total and delivery address

        Returns:
            The created order in PENDING status
        """
        ...

    async def list_my_orders(self, identity: Identity) -> list[Order]:
        ...

    async def list_user_orders(self, identity: Identity, user_id: int) -> list[Order]:
        """
        List a user's orders; only allowed for the user themselves.

        Raises:
            ForbiddenError: ``user_id`` is not the caller
        """
        ...

    async def get_order(self, identity: Identity, order_id: int) -> Order:
        """
        Raises:
            OrderNotFoundError: No such order
            ForbiddenError: The order belongs to someone else
        """
        ...

    async def update_status(self, identity: Identity, order_id: int, requested: object) -> Order:
        """
        Change the status of one of the caller's orders.

        Raises:
            InvalidStatusError: ``requested`` is not a known status
            OrderNotFoundError: No such order
            ForbiddenError: The order belongs to someone else
        """
        ...

    async def delete_order(self, identity: Identity, order_id: int) -> None:
        ...

    async def list_all_orders(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[OrderWithOwner]:
        """
        List every user's orders.

        Operator-only; callers must have checked the operator key. No
        ownership check is applied.
        """
        ...
