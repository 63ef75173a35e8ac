"""
Orders module data models.

These models define the core data structures for customer orders.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Order fulfilment status."""

    PENDING = "pending"          # Placed, awaiting confirmation
    CONFIRMED = "confirmed"      # Accepted by the shop
    PROCESSING = "processing"    # Being assembled
    SHIPPED = "shipped"          # Handed to the carrier
    DELIVERED = "delivered"      # Received by the customer
    CANCELLED = "cancelled"      # Cancelled by either side


class Order(BaseModel):
    """A customer order. Owned by the user who created it, forever."""

    id: int = Field(..., description="Order ID")
    user_id: int = Field(..., description="Owner user ID")
    items: list[dict[str, Any]] = Field(..., description="Line items, in cart order")
    total: Decimal = Field(..., description="Order total")
    status: OrderStatus = Field(..., description="Current status")
    delivery_address: Optional[str] = Field(None, description="Delivery address")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class OrderWithOwner(Order):
    """Order joined with its owner's contact details, for operators."""

    user_name: Optional[str] = Field(None, description="Owner's name")
    user_email: Optional[str] = Field(None, description="Owner's email")


class CreateOrderRequest(BaseModel):
    """Request to place a new order."""

    items: list[dict[str, Any]] = Field(
        ...,
        min_length=1,
        description="Line items; the cart may not be empty",
    )
    total: Decimal = Field(..., gt=0, description="Order total")
    delivery_address: Optional[str] = Field(
        None,
        max_length=1000,
        description="Delivery address",
    )


class UpdateStatusRequest(BaseModel):
    """
    Request to change an order's status.

    Kept as a plain string so unknown values reach the status check and get
    its error message rather than a generic schema error.
    """

    status: Optional[str] = Field(None, description="One of the OrderStatus values")


class OrderResponse(BaseModel):
    """Envelope for a single order."""

    message: Optional[str] = None
    order: Order


class OrderListResponse(BaseModel):
    """List of orders, newest first."""

    orders: list[Order]
    count: int


class OperatorOrderListResponse(BaseModel):
    """List of orders across all users."""

    orders: list[OrderWithOwner]
    count: int
