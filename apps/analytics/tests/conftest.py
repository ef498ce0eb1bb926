import pytest
from datetime import timedelta
from django.utils import timezone
from apps.orders.models import Order, OrderStatus
from apps.orders.services import create_order


@pytest.fixture
def place_order(store_settings):
    """
    Factory that places a real order, then moves its status and creation
    time directly so tests can build any history.
    """
    def _place_order(customer, product, quantity, status=OrderStatus.COMPLETED, days_ago=0):
        order = create_order(
            customer_id=customer.id,
            lines=[{'product_id': product.id, 'quantity': quantity}],
        )
        Order.objects.filter(id=order.id).update(
            status=status,
            created_at=timezone.now() - timedelta(days=days_ago),
        )
        order.refresh_from_db()
        return order
    return _place_order
