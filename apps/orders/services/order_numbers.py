"""Human-readable order numbers: ``<PREFIX>-YYYYMMDD-NNNN``."""

from datetime import date
from typing import Optional

from django.conf import settings
from django.db.models.functions import Length
from django.utils import timezone

from ..models import Order


def order_number_prefix(day: Optional[date] = None) -> str:
    day = day or timezone.localdate()
    return f"{settings.ORDER_NUMBER_PREFIX}-{day:%Y%m%d}-"


def next_order_number(day: Optional[date] = None, skip: int = 0) -> str:
    """
    Next free number for the day, based on the highest one issued so far.

    The unique index on ``order_number`` is what guarantees uniqueness; a
    caller that loses a race retries with ``skip`` incremented.
    """
    prefix = order_number_prefix(day)
    last = (
        Order.objects
        .filter(order_number__startswith=prefix)
        .order_by(Length('order_number').desc(), '-order_number')
        .values_list('order_number', flat=True)
        .first()
    )
    sequence = 0
    if last:
        suffix = last[len(prefix):]
        if suffix.isdigit():
            sequence = int(suffix)
    return f"{prefix}{sequence + 1 + skip:04d}"
