# ==========================================
# apps/orders/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

# Largest quantity accepted on a single order line
MAX_LINE_QUANTITY = 1_000_000


class OrderStatus(models.TextChoices):
    NEW = 'new', 'New'
    CONFIRMED = 'confirmed', 'Confirmed'
    PROCESSING = 'processing', 'Processing'
    SHIPPED = 'shipped', 'Shipped'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


class Order(models.Model):
    """
    Customer order.

    ``total_uah`` is frozen at creation and always equals the sum of the
    items' ``total_uah``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=32, unique=True)
    customer = models.ForeignKey('customers.Customer', on_delete=models.PROTECT, related_name='orders')
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.NEW)
    total_uah = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    comment = models.TextField(blank=True)
    idempotency_key = models.CharField(max_length=128, unique=True, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='orders_status_created_idx'),
            models.Index(fields=['customer', 'created_at'], name='orders_customer_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.order_number

    @property
    def is_terminal(self):
        return self.status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class OrderItem(models.Model):
    """Order line with the unit price captured at order time."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('catalog.Product', on_delete=models.PROTECT, related_name='order_items')
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price_uah = models.DecimalField(max_digits=10, decimal_places=2)
    total_uah = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'order_items'

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"
