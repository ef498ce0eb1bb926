"""Services for catalog lookups and reference data."""

from .exceptions import ProductNotFoundError
from .product_lookup import get_product, get_products_by_ids
from .catalog_seeding import (
    seed_countries,
    seed_flower_types,
    DEFAULT_COUNTRIES,
    DEFAULT_FLOWER_TYPES,
)

__all__ = [
    # Exceptions
    'ProductNotFoundError',
    # Lookups
    'get_product',
    'get_products_by_ids',
    # Seeding
    'seed_countries',
    'seed_flower_types',
    'DEFAULT_COUNTRIES',
    'DEFAULT_FLOWER_TYPES',
]
