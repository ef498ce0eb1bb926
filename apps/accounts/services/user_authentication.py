"""Credential check for dashboard logins."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login

from .exceptions import BackOfficeAccessDenied, InactiveAccountError, InvalidCredentialsError

User = get_user_model()
logger = logging.getLogger(__name__)


def authenticate_user(*, username: str, password: str) -> User:
    """
    Verify a back-office login and stamp ``last_login``.

    Unknown usernames and wrong passwords raise the same error so a caller
    cannot tell which accounts exist.

    Raises:
        InvalidCredentialsError: Unknown username or wrong password
        InactiveAccountError: Account is deactivated
        BackOfficeAccessDenied: Account is not staff
    """
    user = User.objects.filter(username=username).first()
    if user is None or not user.check_password(password):
        logger.info("Rejected login for %r", username)
        raise InvalidCredentialsError()

    if not user.is_active:
        raise InactiveAccountError()
    if not user.is_staff:
        logger.warning("Non-staff account %r tried to log in", username)
        raise BackOfficeAccessDenied()

    update_last_login(None, user)
    return user
