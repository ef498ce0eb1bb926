"""Domain-specific exceptions for catalog services."""

from apps.common.exceptions import NotFoundError


class ProductNotFoundError(NotFoundError):
    """Raised when product does not exist."""
    default_code = 'product_not_found'
    default_detail = 'Product not found.'
