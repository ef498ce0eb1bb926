"""Read-side order lookups."""

from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError

from ..models import Order
from .exceptions import OrderNotFoundError


def order_queryset():
    return (
        Order.objects
        .select_related('customer')
        .prefetch_related('items__product')
    )


def get_order_by_id(*, order_id: UUID) -> Order:
    """
    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        return order_queryset().get(id=order_id)
    except (Order.DoesNotExist, DjangoValidationError):
        raise OrderNotFoundError(f"Order {order_id} not found")


def get_recent_orders(*, limit: int = 5):
    """Latest orders first, any status."""
    return list(order_queryset().order_by('-created_at')[:limit])


def get_customer_orders(*, customer_id: UUID):
    return order_queryset().filter(customer_id=customer_id).order_by('-created_at')
