"""Login failures, rendered by the shared domain exception handler."""

from apps.common.exceptions import DomainError


class InvalidCredentialsError(DomainError):
    """Unknown username or wrong password."""

    status_code = 401
    default_code = 'invalid_credentials'
    default_detail = 'Invalid username or password.'


class InactiveAccountError(DomainError):
    status_code = 403
    default_code = 'account_inactive'
    default_detail = 'Account is deactivated.'


class BackOfficeAccessDenied(DomainError):
    """Valid account without staff access to the dashboard."""

    status_code = 403
    default_code = 'back_office_access_denied'
    default_detail = 'Account has no access to the back office.'
