"""Order lifecycle: new -> confirmed -> processing -> shipped -> completed, or cancelled."""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.common.exceptions import ValidationError
from apps.common.storage import storage_guard
from apps.customers.services import reverse_settlement
from ..models import Order, OrderStatus
from .exceptions import InvalidStatusTransitionError, OrderNotFoundError

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    OrderStatus.NEW: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}


def can_transition(from_status: str, to_status: str) -> bool:
    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


@storage_guard
@transaction.atomic
def transition_order_status(*, order_id: UUID, new_status: str) -> Order:
    """
    Move an order to ``new_status``.

    Requesting the status the order already has is a no-op, so retries are
    safe. Cancelling reverses the order's ledger settlement in the same
    transaction.

    Args:
        order_id: Order UUID
        new_status: Target status value

    Returns:
        Updated Order

    Raises:
        ValidationError: If ``new_status`` is not a known status
        OrderNotFoundError: If order doesn't exist
        InvalidStatusTransitionError: If the transition is not allowed
    """
    if new_status not in OrderStatus.values:
        raise ValidationError(f"Unknown order status: {new_status}")

    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except (Order.DoesNotExist, DjangoValidationError):
        raise OrderNotFoundError(f"Order {order_id} not found")

    if order.status == new_status:
        return order

    if not can_transition(order.status, new_status):
        raise InvalidStatusTransitionError(
            f"Cannot change order {order.order_number} from {order.status} to {new_status}"
        )

    previous = order.status
    order.status = new_status
    order.save(update_fields=['status', 'updated_at'])

    if new_status == OrderStatus.CANCELLED:
        reverse_settlement(order.id)

    logger.info("Order %s: %s -> %s", order.order_number, previous, new_status)
    return order
