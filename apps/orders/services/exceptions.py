"""Domain-specific exceptions for order services."""

from apps.common.exceptions import NotFoundError, ValidationError


class OrderNotFoundError(NotFoundError):
    """Raised when order does not exist."""
    default_code = 'order_not_found'
    default_detail = 'Order not found.'


class InvalidStatusTransitionError(ValidationError):
    """Raised when the requested status is not reachable from the current one."""
    default_code = 'invalid_status_transition'
    default_detail = 'Status transition is not allowed.'
