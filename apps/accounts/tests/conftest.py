import pytest
from apps.accounts.models import User


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username='manager',
        password='TestPass123!',
        display_name='Sales Manager',
        is_staff=True,
    )


@pytest.fixture
def inactive_user(db):
    return User.objects.create_user(
        username='inactive',
        password='TestPass123!',
        is_staff=True,
        is_active=False,
    )


@pytest.fixture
def non_staff_user(db):
    return User.objects.create_user(username='courier', password='TestPass123!')
