"""API tests for /api/customers/."""

import csv
import io
import pytest
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.customers.models import Customer
from apps.customers.services import get_or_create_customer, set_customer_blocked, CustomerNotFoundError


@pytest.mark.django_db
class TestCustomerServices:

    def test_get_or_create_by_telegram_id(self):
        first, created = get_or_create_customer(name='Olena', telegram_id='1001')
        again, created_again = get_or_create_customer(name='Other name', telegram_id='1001')

        assert created is True
        assert created_again is False
        assert again.id == first.id
        assert again.name == 'Olena'

    def test_create_without_telegram_id(self):
        _, created = get_or_create_customer(name='Walk-in', city='Kyiv')
        assert created is True
        assert Customer.objects.get(name='Walk-in').city == 'Kyiv'

    def test_set_blocked(self, customer):
        updated = set_customer_blocked(customer_id=customer.id, is_blocked=True)
        assert updated.is_blocked is True

    def test_set_blocked_unknown(self):
        with pytest.raises(CustomerNotFoundError):
            set_customer_blocked(customer_id=uuid4(), is_blocked=True)


@pytest.mark.django_db
class TestCustomerAPI:

    def test_list_requires_auth(self, api_client):
        response = api_client.get(reverse('customers:customer-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_customers(self, auth_client, store_settings, customer):
        response = auth_client.get(reverse('customers:customer-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == customer.name

    def test_search(self, auth_client, store_settings, make_customer):
        make_customer(name='Iryna', shop_name='Lviv Roses')
        make_customer(name='Petro', shop_name='Odesa Tulips')

        response = auth_client.get(reverse('customers:customer-list'), {'search': 'lviv'})

        assert [row['name'] for row in response.data['results']] == ['Iryna']

    def test_detail_has_eligibility_flags(self, auth_client, store_settings, make_customer):
        customer = make_customer(total_orders=10, loyalty_points=120, total_spent=Decimal('25000'))

        response = auth_client.get(reverse('customers:customer-detail', args=[customer.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['discount_eligible'] is True
        assert response.data['next_order_discount'] == Decimal('1000')
        assert response.data['gift_eligible'] is True

    def test_detail_not_found(self, auth_client, store_settings):
        response = auth_client.get(reverse('customers:customer-detail', args=[uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'customer_not_found'

    def test_block_and_unblock(self, auth_client, store_settings, customer):
        url = reverse('customers:customer-block', args=[customer.id])

        response = auth_client.patch(url, {'is_blocked': True}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_blocked'] is True

        response = auth_client.patch(url, {'is_blocked': False}, format='json')
        assert response.data['is_blocked'] is False

    def test_customer_orders(self, auth_client, store_settings, customer, rose):
        from apps.orders.services import create_order

        order = create_order(customer_id=customer.id, lines=[{'product_id': rose.id, 'quantity': 50}])

        response = auth_client.get(reverse('customers:customer-orders', args=[customer.id]))

        assert response.status_code == status.HTTP_200_OK
        assert [row['order_number'] for row in response.data['results']] == [order.order_number]

    def test_broken_config_is_500(self, auth_client, customer):
        response = auth_client.get(reverse('customers:customer-detail', args=[customer.id]))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'configuration_error'


def read_csv(response):
    return list(csv.reader(io.StringIO(response.content.decode('utf-8'))))


@pytest.mark.django_db
class TestCustomerCreateAPI:
    """Tests for POST /api/customers/"""

    def test_register_new_customer(self, auth_client, store_settings):
        response = auth_client.post(
            reverse('customers:customer-list'),
            {'name': 'Oksana', 'shop_name': 'Bloom', 'city': 'Kyiv', 'telegram_id': '777'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['telegram_id'] == '777'
        assert response.data['total_orders'] == 0
        assert Customer.objects.filter(telegram_id='777').count() == 1

    def test_known_telegram_id_returns_existing(self, auth_client, store_settings, make_customer):
        existing = make_customer(telegram_id='777')

        response = auth_client.post(
            reverse('customers:customer-list'),
            {'name': 'Someone Else', 'telegram_id': '777'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(existing.id)
        assert Customer.objects.count() == 1

    def test_name_required(self, auth_client, store_settings):
        response = auth_client.post(reverse('customers:customer-list'), {'city': 'Kyiv'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Customer.objects.exists()


@pytest.mark.django_db
class TestCustomerExportAPI:
    """Tests for GET /api/customers/export/"""

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('customers:customer-export'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_csv_has_ledger_counters(self, auth_client, make_customer):
        customer = make_customer(
            city='Lviv',
            total_orders=3,
            total_spent=Decimal('7500.00'),
            loyalty_points=7,
        )

        response = auth_client.get(reverse('customers:customer-export'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert 'customers.csv' in response['Content-Disposition']
        rows = read_csv(response)
        assert rows[0] == ['ID', 'Name', 'Shop', 'Phone', 'City', 'Type', 'Orders', 'Spent', 'Points']
        assert rows[1] == [
            str(customer.id), 'Olena', 'Kvitka', '+380501112233', 'Lviv',
            'flower_shop', '3', '7500.00', '7',
        ]

    def test_quotes_commas_in_names(self, auth_client, make_customer):
        make_customer(name='Roses, Tulips & Co', shop_name='Shop "Flora"')

        rows = read_csv(auth_client.get(reverse('customers:customer-export')))

        assert rows[1][1] == 'Roses, Tulips & Co'
        assert rows[1][2] == 'Shop "Flora"'

    def test_respects_list_filters(self, auth_client, make_customer):
        make_customer(name='Iryna', shop_name='Lviv Roses')
        make_customer(name='Petro', shop_name='Odesa Tulips')

        rows = read_csv(auth_client.get(reverse('customers:customer-export'), {'search': 'odesa'}))

        assert [row[1] for row in rows[1:]] == ['Petro']
