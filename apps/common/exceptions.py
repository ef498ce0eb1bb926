"""
Domain exceptions shared by the settlement, ledger and configuration layers.

Exception Hierarchy:
    DomainError (base)
    ├── ValidationError          400 - bad input, surfaced to caller verbatim
    ├── NotFoundError            404 - unknown product/customer/order
    ├── CustomerBlockedError     409 - terminal for the attempted order
    ├── ConfigurationError       500 - missing/malformed store settings
    └── StorageUnavailable       503 - transient, retry with the same key

Services raise these; the DRF exception handler in
``apps.common.exception_handler`` turns them into HTTP responses using the
``status_code`` and ``default_code`` attributes below.

Usage:
    from apps.common.exceptions import ValidationError

    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
"""


class DomainError(Exception):
    """Base exception for all back-office domain errors."""

    status_code = 400
    default_code = 'domain_error'
    default_detail = 'Request could not be processed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_detail)


class ValidationError(DomainError):
    """Input shape, quantities or totals are not acceptable."""

    status_code = 400
    default_code = 'validation_error'
    default_detail = 'Invalid input.'


class NotFoundError(DomainError):
    """Referenced entity does not exist."""

    status_code = 404
    default_code = 'not_found'
    default_detail = 'Not found.'


class CustomerBlockedError(DomainError):
    """
    Customer is blocked and cannot place or settle orders.

    Not retryable until an administrator unblocks the customer.
    """

    status_code = 409
    default_code = 'customer_blocked'
    default_detail = 'Customer is blocked.'


class ConfigurationError(DomainError):
    """
    Store settings are missing or malformed.

    Indicates a deployment defect rather than a user error, so it is
    logged for operator attention wherever it is raised.
    """

    status_code = 500
    default_code = 'configuration_error'
    default_detail = 'Store configuration is invalid.'


class StorageUnavailable(DomainError):
    """
    Storage timed out or refused the operation.

    Safe to retry with the same idempotency key (order idempotency key or
    order id); the failed attempt committed nothing.
    """

    status_code = 503
    default_code = 'storage_unavailable'
    default_detail = 'Storage is temporarily unavailable. Please retry.'
    retry_after = 1
