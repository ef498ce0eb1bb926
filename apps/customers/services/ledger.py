"""
Customer ledger: the only writer of a customer's loyalty counters.

Every counter change happens under a row lock on the customer
(``select_for_update``) with ``F()`` expressions, so concurrent orders for the
same customer serialize and no increment is lost. A ``LedgerEntry`` per order
records what was applied, which makes apply at-most-once and lets a
cancellation take back exactly the same amounts.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import DecimalField, F, IntegerField, Value
from django.db.models.functions import Greatest
from django.utils import timezone

from apps.common.exceptions import CustomerBlockedError, NotFoundError, ValidationError
from apps.common.storage import decimal_field_limit, storage_guard
from apps.configuration.store_config import StoreConfig, load_store_config
from apps.orders.models import Order, OrderStatus
from ..models import Customer, LedgerEntry
from .exceptions import CustomerNotFoundError

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


@dataclass(frozen=True)
class SettlementDelta:
    """What one order adds to its customer's counters."""

    customer_id: UUID
    order_id: UUID
    order_amount: Decimal
    loyalty_points_earned: int


def _lock_customer(customer_id) -> Customer:
    try:
        return Customer.objects.select_for_update().get(id=customer_id)
    except (Customer.DoesNotExist, DjangoValidationError):
        raise CustomerNotFoundError(f"Customer {customer_id} not found")


@storage_guard
@transaction.atomic
def apply_settlement(delta: SettlementDelta) -> Customer:
    """
    Add an order's amount and points to the customer's counters.

    Applying the same order twice, or an order that already left the ``new``
    status, changes nothing and returns the current customer.

    Args:
        delta: Settlement produced for a freshly created order

    Returns:
        Customer with refreshed counters

    Raises:
        CustomerNotFoundError: If the customer doesn't exist
        NotFoundError: If the order doesn't exist
        CustomerBlockedError: If the customer is blocked
        ValidationError: If the new total spent would not fit its column
    """
    customer = _lock_customer(delta.customer_id)

    if LedgerEntry.objects.filter(order_id=delta.order_id).exists():
        logger.debug("Settlement for order %s already applied", delta.order_id)
        return customer

    order_status = (
        Order.objects
        .filter(id=delta.order_id)
        .values_list('status', flat=True)
        .first()
    )
    if order_status is None:
        raise NotFoundError(f"Order {delta.order_id} not found")
    if order_status != OrderStatus.NEW:
        logger.info(
            "Order %s is %s, settlement not applied", delta.order_id, order_status
        )
        return customer

    if customer.is_blocked:
        raise CustomerBlockedError(f"Customer {customer.id} is blocked")

    spent_limit = decimal_field_limit(Customer, 'total_spent')
    if customer.total_spent + delta.order_amount > spent_limit:
        raise ValidationError(
            f"Customer {customer.id} total spent would exceed {spent_limit} UAH"
        )

    Customer.objects.filter(id=customer.id).update(
        total_orders=F('total_orders') + 1,
        total_spent=F('total_spent') + delta.order_amount,
        loyalty_points=F('loyalty_points') + delta.loyalty_points_earned,
    )
    LedgerEntry.objects.create(
        order_id=delta.order_id,
        customer=customer,
        order_amount=delta.order_amount,
        loyalty_points=delta.loyalty_points_earned,
    )

    customer.refresh_from_db()
    logger.info(
        "Applied order %s to customer %s: +%s UAH, +%d points",
        delta.order_id, customer.id, delta.order_amount, delta.loyalty_points_earned,
    )
    return customer


@storage_guard
@transaction.atomic
def reverse_settlement(order_id: UUID) -> Customer:
    """
    Take back exactly what ``apply_settlement`` added for an order.

    No entry, or an entry already reversed, is a no-op. Counters never go
    below zero.

    Args:
        order_id: Order whose settlement is being undone

    Returns:
        Customer with refreshed counters

    Raises:
        NotFoundError: If the order doesn't exist
    """
    customer_id = (
        Order.objects
        .filter(id=order_id)
        .values_list('customer_id', flat=True)
        .first()
    )
    if customer_id is None:
        raise NotFoundError(f"Order {order_id} not found")

    customer = _lock_customer(customer_id)

    entry = (
        LedgerEntry.objects
        .select_for_update()
        .filter(order_id=order_id)
        .first()
    )
    if entry is None or entry.is_reversed:
        logger.debug("Nothing to reverse for order %s", order_id)
        return customer

    Customer.objects.filter(id=customer.id).update(
        total_orders=Greatest(F('total_orders') - 1, Value(0), output_field=IntegerField()),
        total_spent=Greatest(
            F('total_spent') - entry.order_amount,
            Value(ZERO),
            output_field=DecimalField(max_digits=12, decimal_places=2),
        ),
        loyalty_points=Greatest(
            F('loyalty_points') - entry.loyalty_points,
            Value(0),
            output_field=IntegerField(),
        ),
    )
    entry.reversed_at = timezone.now()
    entry.save(update_fields=['reversed_at'])

    customer.refresh_from_db()
    logger.info(
        "Reversed order %s for customer %s: -%s UAH, -%d points",
        order_id, customer.id, entry.order_amount, entry.loyalty_points,
    )
    return customer


def is_discount_eligible(customer: Customer, config: Optional[StoreConfig] = None) -> bool:
    """True when the customer's order count is a positive multiple of ``discount_orders_count``."""
    config = config or load_store_config()
    return (
        customer.total_orders > 0
        and customer.total_orders % config.discount_orders_count == 0
    )


def get_next_order_discount(customer: Customer, config: Optional[StoreConfig] = None) -> Decimal:
    """
    Discount the customer has earned for their next order.

    Read-only: the amount is offered on the next order and never changes an
    existing order's total.
    """
    config = config or load_store_config()
    if is_discount_eligible(customer, config):
        return config.discount_amount
    return ZERO


def is_gift_eligible(customer: Customer, config: Optional[StoreConfig] = None) -> bool:
    config = config or load_store_config()
    return customer.loyalty_points >= config.loyalty_gift_points
