"""Dashboard login: credential verification for staff accounts."""

from .user_authentication import authenticate_user
from .exceptions import (
    BackOfficeAccessDenied,
    InvalidCredentialsError,
    InactiveAccountError,
)

__all__ = [
    'authenticate_user',
    'BackOfficeAccessDenied',
    'InvalidCredentialsError',
    'InactiveAccountError',
]
