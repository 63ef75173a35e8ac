"""
Orders service implementation.

Routes every per-user operation through the ownership check and every
status change through the status module before the store is written.
"""

import logging
from typing import Optional

from modules.auth.ownership import authorize_owner
from shared.models import Identity

from .exceptions import OrderNotFoundError
from .interfaces import IOrderService, IOrderStore
from .models import CreateOrderRequest, Order, OrderWithOwner
from .status import apply_status, parse_status

logger = logging.getLogger(__name__)


class OrderService(IOrderService):
    """
    Order service over an injected IOrderStore.

    Implements IOrderService protocol.
    """

    def __init__(self, store: IOrderStore):
        self._store = store

    async def create_order(self, identity: Identity, request: CreateOrderRequest) -> Order:
        # The owner always comes from the token, never from the body
        order = self._store.insert_order(
            owner_id=identity.subject_id,
            items=request.items,
            total=request.total,
            delivery_address=request.delivery_address,
        )
        logger.info(f"User {identity.subject_id} created order {order.id}")
        return order

    async def list_my_orders(self, identity: Identity) -> list[Order]:
        return self._store.list_by_owner(identity.subject_id)

    async def list_user_orders(self, identity: Identity, user_id: int) -> list[Order]:
        authorize_owner(identity, user_id)
        return self._store.list_by_owner(user_id)

    async def get_order(self, identity: Identity, order_id: int) -> Order:
        return self._get_owned_order(identity, order_id)

    async def update_status(self, identity: Identity, order_id: int, requested: object) -> Order:
        # Reject unknown statuses before touching the store
        parse_status(requested)

        order = self._get_owned_order(identity, order_id)
        updated = apply_status(order, requested)

        stored = self._store.update_status(order_id, updated.status, updated.updated_at)
        if stored is None:
            # Deleted between the read and the write
            raise OrderNotFoundError(order_id)

        logger.info(
            f"Order {order_id} status {order.status.value} -> {stored.status.value} "
            f"by user {identity.subject_id}"
        )
        return stored

    async def delete_order(self, identity: Identity, order_id: int) -> None:
        self._get_owned_order(identity, order_id)

        if not self._store.delete(order_id):
            raise OrderNotFoundError(order_id)
        logger.info(f"User {identity.subject_id} deleted order {order_id}")

    async def list_all_orders(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[OrderWithOwner]:
        # An empty filter means no filter
        status_filter = parse_status(status) if status else None
        return self._store.list_all(status=status_filter, limit=limit, offset=offset)

    def _get_owned_order(self, identity: Identity, order_id: int) -> Order:
        """Existence first, then ownership."""
        order = self._store.find_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        authorize_owner(identity, order.user_id)
        return order
