"""Domain-specific exceptions for customer services."""

from apps.common.exceptions import NotFoundError


class CustomerNotFoundError(NotFoundError):
    """Raised when customer does not exist."""
    default_code = 'customer_not_found'
    default_detail = 'Customer not found.'
