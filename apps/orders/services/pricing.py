"""
Order pricing in UAH.

All money is ``Decimal``. Each unit price and line total is rounded half-up
to kopecks, and the order total is the sum of the already-rounded line
totals, so ``order.total_uah == sum(item.total_uah)`` holds exactly.

Amounts that would not fit their database column are rejected with a
``ValidationError`` before anything is written.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from apps.catalog.models import Product
from apps.common.exceptions import ValidationError
from apps.common.storage import decimal_field_limit
from ..models import Order, OrderItem

CENT = Decimal('0.01')


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricedLine:
    product: Product
    quantity: int
    unit_price_uah: Decimal
    total_uah: Decimal


def unit_price_uah(product: Product, usd_rate: Decimal) -> Decimal:
    """
    UAH price per unit: ``price_uah`` when set, otherwise ``price_usd`` converted.

    Raises:
        ValidationError: If the product has no price, or the converted
            price is too large to store
    """
    if product.price_uah is not None:
        unit = to_money(product.price_uah)
    elif product.price_usd is not None:
        unit = to_money(product.price_usd * usd_rate)
    else:
        raise ValidationError(f"Product {product.id} has no price")

    if unit > decimal_field_limit(OrderItem, 'price_uah'):
        raise ValidationError(f"Product {product.id}: unit price {unit} UAH is too large")
    return unit


def price_line(product: Product, quantity: int, usd_rate: Decimal) -> PricedLine:
    unit = unit_price_uah(product, usd_rate)
    total = to_money(unit * quantity)
    if total > decimal_field_limit(OrderItem, 'total_uah'):
        raise ValidationError(f"Product {product.id}: line total {total} UAH is too large")
    return PricedLine(
        product=product,
        quantity=quantity,
        unit_price_uah=unit,
        total_uah=total,
    )


def order_total(lines: List[PricedLine]) -> Decimal:
    total = to_money(sum((line.total_uah for line in lines), Decimal('0')))
    if total > decimal_field_limit(Order, 'total_uah'):
        raise ValidationError(f"Order total {total} UAH is too large")
    return total
