"""
Order settlement: price an order, persist it and credit the customer ledger.

``create_order`` is the single entry point. Order, items and the ledger
delta commit in one transaction, so a failure at any step leaves no order,
no items and untouched customer counters.

Example:
    Placing an order::

        from apps.orders.services import create_order

        order = create_order(
            customer_id=customer.id,
            lines=[{'product_id': rose.id, 'quantity': 100}],
            comment='Deliver before 9:00',
            idempotency_key=request.headers.get('Idempotency-Key'),
        )
"""

import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from apps.catalog.services import get_products_by_ids
from apps.common.exceptions import CustomerBlockedError, StorageUnavailable, ValidationError
from apps.common.storage import storage_guard
from apps.configuration.store_config import StoreConfig, load_store_config
from apps.customers.models import Customer
from apps.customers.services import CustomerNotFoundError, SettlementDelta, apply_settlement
from ..models import MAX_LINE_QUANTITY, Order, OrderItem
from .order_numbers import next_order_number
from .pricing import PricedLine, order_total, price_line

logger = logging.getLogger(__name__)


def _validate_lines(lines) -> List[dict]:
    if not lines:
        raise ValidationError("Order must contain at least one item")

    cleaned = []
    for index, line in enumerate(lines):
        product_id = line.get('product_id')
        quantity = line.get('quantity')
        if product_id in (None, ''):
            raise ValidationError(f"Item {index + 1}: product_id is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Item {index + 1}: quantity must be a positive integer")
        if quantity > MAX_LINE_QUANTITY:
            raise ValidationError(
                f"Item {index + 1}: quantity must not exceed {MAX_LINE_QUANTITY}"
            )
        cleaned.append({'product_id': product_id, 'quantity': quantity})
    return cleaned


def price_order(lines, config: StoreConfig) -> Tuple[List[PricedLine], Decimal]:
    """
    Resolve products and price every line.

    Args:
        lines: Validated ``{'product_id', 'quantity'}`` dicts
        config: Store configuration (USD rate, minimum order)

    Returns:
        (priced lines, order total) tuple

    Raises:
        ValidationError: Unknown product, product without price, or total
            below the minimum order amount
    """
    products = get_products_by_ids(line['product_id'] for line in lines)

    missing = [str(line['product_id']) for line in lines if str(line['product_id']) not in products]
    if missing:
        raise ValidationError(f"Unknown product(s): {', '.join(sorted(set(missing)))}")

    priced = [
        price_line(products[str(line['product_id'])], line['quantity'], config.usd_rate)
        for line in lines
    ]
    total = order_total(priced)

    if total < config.min_order:
        raise ValidationError(
            f"Order total {total} UAH is below the minimum order of {config.min_order} UAH"
        )
    return priced, total


def loyalty_points_for(amount, config: StoreConfig) -> int:
    """Whole points earned for ``amount``: one per full ``loyalty_threshold``."""
    return int(amount // config.loyalty_threshold)


def _insert_order(customer, total, comment, idempotency_key) -> Optional[Order]:
    """
    Insert the order row with a fresh number, retrying on number collisions.

    Returns None when another request already stored an order under the same
    idempotency key.
    """
    max_attempts = settings.ORDER_NUMBER_MAX_ATTEMPTS
    for attempt in range(max_attempts):
        order_number = next_order_number(skip=attempt)
        try:
            with transaction.atomic():
                return Order.objects.create(
                    order_number=order_number,
                    customer=customer,
                    total_uah=total,
                    comment=comment or '',
                    idempotency_key=idempotency_key,
                )
        except IntegrityError:
            if idempotency_key and Order.objects.filter(idempotency_key=idempotency_key).exists():
                return None
            logger.warning(
                "Order number %s collided (attempt %d/%d)", order_number, attempt + 1, max_attempts
            )

    logger.error("Could not allocate an order number after %d attempts", max_attempts)
    raise StorageUnavailable("Could not allocate an order number, please retry")


def settle_order(
    *,
    customer: Customer,
    priced_lines: List[PricedLine],
    total,
    config: StoreConfig,
    comment: Optional[str] = None,
    idempotency_key: Optional[str] = None,
) -> Tuple[Optional[Order], Optional[SettlementDelta]]:
    """
    Persist an order with its items and compute the ledger delta.

    Must run inside the caller's transaction; the customer itself is not
    modified here.

    Returns:
        (order, delta) tuple, or (None, None) when a concurrent request has
        already stored an order under ``idempotency_key``
    """
    order = _insert_order(customer, total, comment, idempotency_key)
    if order is None:
        return None, None

    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product=line.product,
            quantity=line.quantity,
            price_uah=line.unit_price_uah,
            total_uah=line.total_uah,
        )
        for line in priced_lines
    ])

    delta = SettlementDelta(
        customer_id=customer.id,
        order_id=order.id,
        order_amount=total,
        loyalty_points_earned=loyalty_points_for(total, config),
    )
    return order, delta


def _replay(order: Order, customer_id) -> Order:
    """Return the order stored under a repeated idempotency key."""
    try:
        same_customer = order.customer_id == UUID(str(customer_id))
    except ValueError:
        same_customer = False
    if not same_customer:
        raise ValidationError("Idempotency key was already used for another customer's order")
    logger.info("Idempotent replay of order %s", order.order_number)
    return order


@storage_guard
@transaction.atomic
def create_order(
    *,
    customer_id: UUID,
    lines,
    comment: Optional[str] = None,
    idempotency_key: Optional[str] = None,
) -> Order:
    """
    Validate, price and persist an order, then credit the customer's ledger.

    Args:
        customer_id: Ordering customer
        lines: Iterable of ``{'product_id': UUID, 'quantity': int}``
        comment: Optional free-text comment
        idempotency_key: Optional client key; repeating a request with the
            same key returns the originally created order

    Returns:
        The persisted Order (status ``new``)

    Raises:
        ValidationError: Empty order, bad quantity, unknown or unpriced
            product, total below minimum order or too large to store,
            idempotency key reused for another customer
        CustomerNotFoundError: If customer doesn't exist
        CustomerBlockedError: If customer is blocked
        ConfigurationError: If store settings are missing or malformed
        StorageUnavailable: On storage timeouts or order-number exhaustion
    """
    if idempotency_key:
        existing = Order.objects.filter(idempotency_key=idempotency_key).first()
        if existing is not None:
            return _replay(existing, customer_id)

    cleaned = _validate_lines(list(lines))

    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except (Customer.DoesNotExist, DjangoValidationError):
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    if customer.is_blocked:
        raise CustomerBlockedError(f"Customer {customer.id} is blocked")

    config = load_store_config()
    priced, total = price_order(cleaned, config)

    order, delta = settle_order(
        customer=customer,
        priced_lines=priced,
        total=total,
        config=config,
        comment=comment,
        idempotency_key=idempotency_key or None,
    )
    if order is None:
        return _replay(Order.objects.get(idempotency_key=idempotency_key), customer_id)

    apply_settlement(delta)

    logger.info(
        "Created order %s for customer %s: %s UAH, %d item(s)",
        order.order_number, customer.id, total, len(priced),
    )
    return order
