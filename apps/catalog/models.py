# ==========================================
# apps/catalog/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class FlowerCategory(models.TextChoices):
    SINGLE = 'single', 'Single stem'
    SPRAY = 'spray', 'Spray'


class ProductStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    PREORDER = 'preorder', 'Pre-order'
    EXPECTED = 'expected', 'Expected'


class CatalogType(models.TextChoices):
    PREORDER = 'preorder', 'Pre-order catalog'
    INSTOCK = 'instock', 'In stock'


class Country(models.Model):
    """Country of origin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=2, unique=True)
    name = models.CharField(max_length=100)
    flag = models.CharField(max_length=16)

    class Meta:
        db_table = 'countries'
        ordering = ['name']
        verbose_name_plural = 'countries'

    def __str__(self):
        return self.name


class Plantation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name='plantations')

    class Meta:
        db_table = 'plantations'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.country.code})"


class FlowerType(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    category = models.CharField(max_length=20, choices=FlowerCategory.choices, default=FlowerCategory.SINGLE)

    class Meta:
        db_table = 'flower_types'
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    Catalog product.

    ``price_uah`` takes precedence over ``price_usd`` when an order is priced;
    a product with neither cannot be ordered.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    variety = models.CharField(max_length=200)
    flower_type = models.ForeignKey(FlowerType, on_delete=models.PROTECT, related_name='products')
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name='products')
    plantation = models.ForeignKey(
        Plantation,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products'
    )
    flower_class = models.CharField(max_length=50)
    height_cm = models.PositiveIntegerField()
    color = models.CharField(max_length=50)
    price_usd = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    price_uah = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    pack_size = models.PositiveIntegerField(default=25)
    status = models.CharField(max_length=20, choices=ProductStatus.choices, default=ProductStatus.AVAILABLE)
    expected_date = models.DateField(null=True, blank=True)
    is_promo = models.BooleanField(default=False)
    catalog_type = models.CharField(max_length=20, choices=CatalogType.choices, default=CatalogType.PREORDER)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['catalog_type', 'status'], name='products_catalog_status_idx'),
            models.Index(fields=['created_at'], name='products_created_at_idx'),
        ]
        ordering = ['name', 'variety']

    def __str__(self):
        return f"{self.name} {self.variety}"

    @property
    def has_price(self):
        return self.price_uah is not None or self.price_usd is not None
