"""
Order repository for database access.

Supabase implementation of IOrderStore over the ``orders`` table.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Order, OrderStatus, OrderWithOwner


class OrderRepository(BaseRepository[Order]):
    """
    Repository for order data access.

    All methods return Pydantic models with proper mapping from database rows.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying user ownership.
    """

    def insert_order(
        self,
        owner_id: int,
        items: list[dict[str, Any]],
        total: Decimal,
        delivery_address: Optional[str] = None,
    ) -> Order:
        data = {
            "user_id": owner_id,
            "items": items,
            # numeric column; sent as a string to keep the exact value
            "total": str(total),
            "delivery_address": delivery_address,
            "status": OrderStatus.PENDING.value,
        }
        result = self._db.table("orders").insert(data).execute()
        return self._map_to_order(result.data[0])

    def find_order(self, order_id: int) -> Optional[Order]:
        result = self._db.table("orders").select("*").eq("id", order_id).execute()
        if not result.data:
            return None
        return self._map_to_order(result.data[0])

    def list_by_owner(self, owner_id: int) -> list[Order]:
        result = (
            self._db.table("orders")
            .select("*")
            .eq("user_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_order(row) for row in result.data]

    def update_status(
        self,
        order_id: int,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Optional[Order]:
        data = {
            "status": status.value,
            "updated_at": updated_at.isoformat(),
        }
        result = self._db.table("orders").update(data).eq("id", order_id).execute()
        if not result.data:
            return None
        return self._map_to_order(result.data[0])

    def delete(self, order_id: int) -> bool:
        result = self._db.table("orders").delete().eq("id", order_id).execute()
        return bool(result.data)

    def list_all(
        self,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[OrderWithOwner]:
        query = self._db.table("orders").select("*, users(name, email)")
        if status:
            query = query.eq("status", status.value)

        result = query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()
        return [self._map_to_order_with_owner(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_order(self, data: dict[str, Any]) -> Order:
        return Order(
            id=data["id"],
            user_id=data["user_id"],
            items=data.get("items") or [],
            total=Decimal(str(data["total"])),
            status=OrderStatus(data["status"]),
            delivery_address=data.get("delivery_address"),
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
        )

    def _map_to_order_with_owner(self, data: dict[str, Any]) -> OrderWithOwner:
        owner = data.get("users") or {}
        order = self._map_to_order(data)
        return OrderWithOwner(
            **order.model_dump(),
            user_name=owner.get("name"),
            user_email=owner.get("email"),
        )
