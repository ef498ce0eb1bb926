"""Project-wide fixtures: API clients, store settings, catalog and customers."""

import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.catalog.models import Country, FlowerCategory, FlowerType, Product
from apps.configuration.models import Setting
from apps.customers.models import Customer


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def back_office_user(db):
    """Create the dashboard administrator."""
    return User.objects.create_user(
        username='admin',
        password='TestPass123!',
        display_name='Back Office',
        is_staff=True,
    )


@pytest.fixture
def auth_client(api_client, back_office_user):
    """Return API client authenticated as the dashboard administrator."""
    refresh = RefreshToken.for_user(back_office_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store_settings(db):
    """Seed a complete, valid set of store settings."""
    values = {
        'usd_rate': '41.50',
        'min_order': '1000',
        'loyalty_threshold': '1000',
        'loyalty_gift_points': '100',
        'discount_orders_count': '10',
        'discount_amount': '1000',
    }
    for key, value in values.items():
        Setting.objects.update_or_create(key=key, defaults={'value': value})
    return values


# =============================================================================
# Catalog
# =============================================================================

@pytest.fixture
def kenya(db):
    return Country.objects.create(code='KE', name='Kenya', flag='KE')


@pytest.fixture
def ecuador(db):
    return Country.objects.create(code='EC', name='Ecuador', flag='EC')


@pytest.fixture
def rose_type(db):
    return FlowerType.objects.create(name='Rose', category=FlowerCategory.SINGLE)


@pytest.fixture
def make_product(rose_type, kenya):
    """Factory for products; defaults to a Kenyan rose priced in UAH."""
    def _make_product(name='Rose', variety='Explorer', price_uah=None, price_usd=None, country=None):
        return Product.objects.create(
            name=name,
            variety=variety,
            flower_type=rose_type,
            country=country or kenya,
            flower_class='Premium',
            height_cm=60,
            color='red',
            price_uah=price_uah,
            price_usd=price_usd,
        )
    return _make_product


@pytest.fixture
def rose(make_product):
    """Rose priced directly in UAH (50.00 per stem)."""
    return make_product(name='Rose', variety='Explorer', price_uah=Decimal('50.00'))


@pytest.fixture
def usd_rose(make_product, ecuador):
    """Rose priced only in USD (1.25 per stem)."""
    return make_product(name='Rose', variety='Freedom', price_usd=Decimal('1.25'), country=ecuador)


# =============================================================================
# Customers
# =============================================================================

@pytest.fixture
def make_customer(db):
    """Factory for customers."""
    def _make_customer(name='Olena', shop_name='Kvitka', **kwargs):
        return Customer.objects.create(name=name, shop_name=shop_name, phone='+380501112233', **kwargs)
    return _make_customer


@pytest.fixture
def customer(make_customer):
    return make_customer()


@pytest.fixture
def blocked_customer(make_customer):
    return make_customer(name='Blocked', shop_name='Closed', is_blocked=True)
