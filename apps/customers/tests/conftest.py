import pytest
from decimal import Decimal
from itertools import count
from apps.orders.models import Order, OrderStatus


_numbers = count(1)


@pytest.fixture
def make_order(db):
    """Factory for bare orders (no items) used to drive the ledger directly."""
    def _make_order(customer, total_uah='2500.00', status=OrderStatus.NEW):
        return Order.objects.create(
            order_number=f'TEST-{next(_numbers):06d}',
            customer=customer,
            total_uah=Decimal(total_uah),
            status=status,
        )
    return _make_order
