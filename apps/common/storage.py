"""Storage guards: timeout translation and decimal column limits."""

import logging
from decimal import Decimal
from functools import wraps

from django.db import OperationalError

from .exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


def storage_guard(fn):
    """
    Convert driver-level timeouts and lock failures into ``StorageUnavailable``.

    Apply it outside ``transaction.atomic`` so the transaction has already
    rolled back by the time the error is translated::

        @storage_guard
        @transaction.atomic
        def create_order(...):
            ...
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except OperationalError as exc:
            logger.warning("Storage error in %s: %s", fn.__name__, exc)
            raise StorageUnavailable() from exc
    return wrapper


def decimal_field_limit(model, field_name) -> Decimal:
    """
    Largest value a ``DecimalField`` column can hold.

    ``max_digits=12, decimal_places=2`` gives ``9999999999.99``.
    """
    field = model._meta.get_field(field_name)
    whole_digits = field.max_digits - field.decimal_places
    step = Decimal(1).scaleb(-field.decimal_places)
    return Decimal(10) ** whole_digits - step
