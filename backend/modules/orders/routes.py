"""
Order API endpoints.

Provides REST endpoints for order CRUD operations. Every endpoint except the
operator listing requires a bearer token and acts on the caller's own orders.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from api.middleware.auth import get_current_user, require_operator
from api.dependencies import get_order_service
from shared.models import Identity, MessageResponse

from .interfaces import IOrderService
from .models import (
    CreateOrderRequest,
    OperatorOrderListResponse,
    OrderListResponse,
    OrderResponse,
    UpdateStatusRequest,
)

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    request: CreateOrderRequest,
    user: Identity = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> OrderResponse:
    """
    Place a new order for the current user.

    The order is created in 'pending' status.
    """
    order = await service.create_order(user, request)
    return OrderResponse(message="Order created", order=order)


@router.get("/my", response_model=OrderListResponse)
async def list_my_orders(
    user: Identity = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> OrderListResponse:
    """List the current user's orders, most recent first."""
    orders = await service.list_my_orders(user)
    return OrderListResponse(orders=orders, count=len(orders))


@router.get("/user/{user_id}", response_model=OrderListResponse, deprecated=True)
async def list_user_orders(
    user_id: int,
    user: Identity = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> OrderListResponse:
    """
    List a user's orders. Superseded by GET /my.

    Only allowed for the user themselves.
    """
    orders = await service.list_user_orders(user, user_id)
    return OrderListResponse(orders=orders, count=len(orders))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    user: Identity = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> OrderResponse:
    """Get one of the current user's orders."""
    order = await service.get_order(user, order_id)
    return OrderResponse(order=order)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    request: UpdateStatusRequest,
    user: Identity = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> OrderResponse:
    """
    Change the status of one of the current user's orders.

    Allowed values: pending, confirmed, processing, shipped, delivered,
    cancelled. Any of them may follow any other.
    """
    order = await service.update_status(user, order_id, request.status)
    return OrderResponse(message="Order status updated", order=order)


@router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(
    order_id: int,
    user: Identity = Depends(get_current_user),
    service: IOrderService = Depends(get_order_service),
) -> MessageResponse:
    """Delete one of the current user's orders."""
    await service.delete_order(user, order_id)
    return MessageResponse(message="Order deleted")


@router.get(
    "",
    response_model=OperatorOrderListResponse,
    dependencies=[Depends(require_operator)],
)
async def list_all_orders(
    status: Optional[str] = Query(default=None, description="Filter by status"),
    limit: int = Query(default=50, ge=1, le=200, description="Maximum number of orders"),
    offset: int = Query(default=0, ge=0, description="Number of orders to skip"),
    service: IOrderService = Depends(get_order_service),
) -> OperatorOrderListResponse:
    """
    List every user's orders with owner name and email.

    Operator-only: requires the X-Operator-Key header. No bearer token is
    involved and no ownership check applies.
    """
    orders = await service.list_all_orders(status=status, limit=limit, offset=offset)
    return OperatorOrderListResponse(orders=orders, count=len(orders))
