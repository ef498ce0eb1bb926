"""DRF exception handler that maps domain errors onto HTTP responses."""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import ConfigurationError, DomainError, StorageUnavailable

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    """
    Render ``DomainError`` subclasses as ``{'error': ..., 'code': ...}``.

    Anything else falls through to DRF's default handler.
    """
    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown'

    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error in %s: %s", view_name, exc)
    elif isinstance(exc, StorageUnavailable):
        logger.warning("Storage unavailable in %s: %s", view_name, exc)

    response = Response(
        {'error': str(exc), 'code': exc.default_code},
        status=exc.status_code,
    )
    if isinstance(exc, StorageUnavailable):
        response['Retry-After'] = str(exc.retry_after)
    return response
