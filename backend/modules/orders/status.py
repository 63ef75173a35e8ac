"""
Order status changes.

A requested status is accepted iff it is exactly one of the OrderStatus
values: no trimming, no case folding. Any known status may follow any other;
there is no transition graph, so e.g. ``delivered -> pending`` is accepted.
"""

from datetime import datetime, timezone
from typing import Optional

from .exceptions import InvalidStatusError
from .models import Order, OrderStatus

ALLOWED_STATUSES: tuple[str, ...] = tuple(status.value for status in OrderStatus)


def parse_status(requested: object) -> OrderStatus:
    """
    Validate a raw status value from a request.

    Raises:
        InvalidStatusError: ``requested`` is not exactly one of ALLOWED_STATUSES.
    """
    if not isinstance(requested, str) or requested not in ALLOWED_STATUSES:
        raise InvalidStatusError(requested, ALLOWED_STATUSES)
    return OrderStatus(requested)


def apply_status(
    order: Order,
    requested: object,
    now: Optional[datetime] = None,
) -> Order:
    """
    Return a copy of ``order`` with the requested status and a fresh ``updated_at``.

    The input order is left untouched.

    Raises:
        InvalidStatusError: ``requested`` is not a known status.
    """
    status = parse_status(requested)
    return order.model_copy(
        update={
            "status": status,
            "updated_at": now or datetime.now(timezone.utc),
        }
    )
