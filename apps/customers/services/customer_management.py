"""Customer lookup, registration and blocking."""

import logging
from typing import Optional, Tuple
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from apps.common.storage import storage_guard
from ..models import Customer, CustomerType, Language
from .exceptions import CustomerNotFoundError

logger = logging.getLogger(__name__)


def get_customer_by_id(*, customer_id: UUID) -> Customer:
    """
    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        return Customer.objects.get(id=customer_id)
    except (Customer.DoesNotExist, DjangoValidationError):
        raise CustomerNotFoundError(f"Customer {customer_id} not found")


@storage_guard
def get_or_create_customer(
    *,
    name: str,
    telegram_id: Optional[str] = None,
    phone: str = '',
    shop_name: str = '',
    city: str = '',
    customer_type: str = CustomerType.FLOWER_SHOP,
    language: str = Language.UA,
) -> Tuple[Customer, bool]:
    """
    Find a customer by ``telegram_id`` or create one on first contact.

    Without a ``telegram_id`` a new customer is always created.

    Returns:
        (customer, created) tuple
    """
    defaults = {
        'name': name,
        'phone': phone,
        'shop_name': shop_name,
        'city': city,
        'customer_type': customer_type,
        'language': language,
    }

    if telegram_id is None:
        return Customer.objects.create(**defaults), True

    try:
        with transaction.atomic():
            customer, created = Customer.objects.get_or_create(
                telegram_id=telegram_id,
                defaults=defaults,
            )
    except IntegrityError:
        # Two first contacts raced; the other one won
        customer, created = Customer.objects.get(telegram_id=telegram_id), False

    if created:
        logger.info("Registered customer %s (telegram %s)", customer.id, telegram_id)
    return customer, created


@storage_guard
@transaction.atomic
def set_customer_blocked(*, customer_id: UUID, is_blocked: bool) -> Customer:
    """
    Block or unblock a customer.

    A blocked customer cannot place orders; existing orders are untouched.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
    """
    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except (Customer.DoesNotExist, DjangoValidationError):
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    if customer.is_blocked != is_blocked:
        customer.is_blocked = is_blocked
        customer.save(update_fields=['is_blocked'])
        logger.info("Customer %s %s", customer.id, 'blocked' if is_blocked else 'unblocked')

    return customer
