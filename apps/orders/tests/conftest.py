import pytest
from apps.accounts.models import User


@pytest.fixture
def manager_account(db):
    """Authenticated account without staff access."""
    return User.objects.create_user(
        username='outsider',
        password='TestPass123!',
        display_name='No Staff',
    )
