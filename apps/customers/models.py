# ==========================================
# apps/customers/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class CustomerType(models.TextChoices):
    FLOWER_SHOP = 'flower_shop', 'Flower shop'
    WHOLESALE = 'wholesale', 'Wholesale'


class Language(models.TextChoices):
    UA = 'ua', 'Українська'
    EN = 'en', 'English'
    RU = 'ru', 'Русский'


class Customer(models.Model):
    """
    Wholesale buyer.

    ``loyalty_points``, ``total_orders`` and ``total_spent`` are written only
    by the ledger services (``apps.customers.services.ledger``). Customers are
    blocked rather than deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    telegram_id = models.CharField(max_length=64, unique=True, null=True, blank=True)
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=32, blank=True)
    shop_name = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    customer_type = models.CharField(max_length=20, choices=CustomerType.choices, default=CustomerType.FLOWER_SHOP)
    language = models.CharField(max_length=2, choices=Language.choices, default=Language.UA)
    loyalty_points = models.PositiveIntegerField(default=0)
    total_orders = models.PositiveIntegerField(default=0)
    total_spent = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_blocked = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['total_spent'], name='customers_total_spent_idx'),
            models.Index(fields=['created_at'], name='customers_created_at_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        if self.shop_name:
            return f"{self.name} ({self.shop_name})"
        return self.name


class LedgerEntry(models.Model):
    """
    One settled order's contribution to a customer's counters.

    The unique ``order`` link makes applying a settlement at-most-once, and
    the stored amounts are exactly what a cancellation takes back.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.OneToOneField('orders.Order', on_delete=models.PROTECT, related_name='ledger_entry')
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='ledger_entries')
    order_amount = models.DecimalField(max_digits=12, decimal_places=2)
    loyalty_points = models.PositiveIntegerField(default=0)
    applied_at = models.DateTimeField(auto_now_add=True)
    reversed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'ledger_entries'
        ordering = ['-applied_at']
        verbose_name_plural = 'ledger entries'

    def __str__(self):
        return f"{self.customer_id}: {self.order_amount} UAH / {self.loyalty_points} pts"

    @property
    def is_reversed(self):
        return self.reversed_at is not None
