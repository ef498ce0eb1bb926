"""
Tests for AnalyticsQueries.

Tests cover:
- Cancelled orders excluded from every aggregate
- Today vs. yesterday percentage changes
- Deterministic ranking tie-breakers
- Zero-filled daily trend buckets
- Sales by country of origin
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from apps.analytics.analytics import AnalyticsQueries
from apps.analytics.exceptions import (
    AnalyticsServiceError,
    InvalidDateRangeError,
    InvalidPeriodError,
)
from apps.common.exceptions import ValidationError
from apps.orders.models import OrderStatus


# =============================================================================
# Dashboard
# =============================================================================

@pytest.mark.django_db
class TestDashboardStats:

    def test_empty_store(self, db):
        stats = AnalyticsQueries.dashboard_stats()

        assert stats['total_orders'] == 0
        assert stats['total_revenue'] == Decimal('0.00')
        assert stats['orders_change'] == Decimal('0.00')
        assert stats['revenue_change'] == Decimal('0.00')

    def test_cancelled_orders_excluded(self, place_order, customer, rose):
        # 100 * 50 = 5000 cancelled, 60 * 50 = 3000 completed
        place_order(customer, rose, 100, status=OrderStatus.CANCELLED)
        place_order(customer, rose, 60, status=OrderStatus.COMPLETED)

        stats = AnalyticsQueries.dashboard_stats()

        assert stats['total_orders'] == 1
        assert stats['total_revenue'] == Decimal('3000.00')
        assert stats['new_orders_today'] == 1
        assert stats['revenue_today'] == Decimal('3000.00')

    def test_counts_customers_and_products(self, customer, make_customer, rose, usd_rose):
        make_customer(name='Second')

        stats = AnalyticsQueries.dashboard_stats()

        assert stats['total_customers'] == 2
        assert stats['total_products'] == 2

    def test_change_is_zero_without_yesterday(self, place_order, customer, rose):
        place_order(customer, rose, 60)

        stats = AnalyticsQueries.dashboard_stats()

        assert stats['revenue_change'] == Decimal('0.00')
        assert stats['orders_change'] == Decimal('0.00')

    def test_change_against_yesterday(self, place_order, customer, rose):
        place_order(customer, rose, 40, days_ago=1)
        place_order(customer, rose, 60)

        stats = AnalyticsQueries.dashboard_stats()

        # (3000 - 2000) / 2000 * 100
        assert stats['revenue_change'] == Decimal('50.00')
        assert stats['orders_change'] == Decimal('0.00')

    def test_change_rounded_to_two_places(self, place_order, customer, rose):
        for _ in range(3):
            place_order(customer, rose, 20, days_ago=1)
        place_order(customer, rose, 20)

        stats = AnalyticsQueries.dashboard_stats()

        # (1 - 3) / 3 * 100
        assert stats['orders_change'] == Decimal('-66.67')

    def test_date_range(self, place_order, customer, rose):
        place_order(customer, rose, 20, days_ago=10)
        place_order(customer, rose, 40, days_ago=2)
        today = timezone.localdate()

        stats = AnalyticsQueries.dashboard_stats(start_date=today - timedelta(days=5), end_date=today)

        assert stats['total_orders'] == 1
        assert stats['total_revenue'] == Decimal('2000.00')

    def test_inverted_range(self, db):
        today = timezone.localdate()

        with pytest.raises(InvalidDateRangeError):
            AnalyticsQueries.dashboard_stats(start_date=today, end_date=today - timedelta(days=1))


# =============================================================================
# Rankings
# =============================================================================

@pytest.mark.django_db
class TestTopProducts:

    def test_ranked_by_quantity_then_revenue_then_id(self, place_order, customer, make_product):
        cheap = make_product(variety='Cheap', price_uah=Decimal('50.00'))
        pricey = make_product(variety='Pricey', price_uah=Decimal('60.00'))
        twin_a = make_product(variety='Twin A', price_uah=Decimal('40.00'))
        twin_b = make_product(variety='Twin B', price_uah=Decimal('40.00'))

        place_order(customer, cheap, 100)
        place_order(customer, pricey, 100)
        place_order(customer, twin_a, 30)
        place_order(customer, twin_b, 30)

        rows = AnalyticsQueries.top_products()

        twins = sorted([twin_a.id, twin_b.id])
        assert [row['id'] for row in rows] == [pricey.id, cheap.id] + twins
        assert rows[0]['total_sold'] == 100
        assert rows[0]['revenue'] == Decimal('6000.00')
        assert rows[0]['variety'] == 'Pricey'

    def test_limit(self, place_order, customer, rose, usd_rose):
        place_order(customer, rose, 30)
        place_order(customer, usd_rose, 30)

        assert len(AnalyticsQueries.top_products(limit=1)) == 1

    def test_cancelled_sales_ignored(self, place_order, customer, rose):
        place_order(customer, rose, 100, status=OrderStatus.CANCELLED)

        assert AnalyticsQueries.top_products() == []


@pytest.mark.django_db
class TestTopCustomers:

    def test_ranked_by_spent_then_orders_then_id(self, make_customer):
        big = make_customer(name='Big', total_orders=2, total_spent=Decimal('9000'))
        frequent = make_customer(name='Frequent', total_orders=5, total_spent=Decimal('4000'))
        rare = make_customer(name='Rare', total_orders=1, total_spent=Decimal('4000'))
        tie_a = make_customer(name='Tie A', total_orders=1, total_spent=Decimal('1000'))
        tie_b = make_customer(name='Tie B', total_orders=1, total_spent=Decimal('1000'))
        make_customer(name='Never ordered')

        rows = AnalyticsQueries.top_customers()

        ties = sorted([tie_a.id, tie_b.id])
        assert [row['id'] for row in rows] == [big.id, frequent.id, rare.id] + ties
        assert set(rows[0]) == {'id', 'name', 'shop_name', 'total_orders', 'total_spent'}

    def test_limit(self, make_customer):
        for i in range(7):
            make_customer(name=f'C{i}', total_orders=1, total_spent=Decimal(1000 + i))

        rows = AnalyticsQueries.top_customers(limit=5)

        assert len(rows) == 5
        assert rows[0]['name'] == 'C6'


# =============================================================================
# Trend and countries
# =============================================================================

@pytest.mark.django_db
class TestSalesTrend:

    def test_quiet_week_is_seven_zero_days(self, db):
        trend = AnalyticsQueries.sales_trend(period='week')

        assert len(trend) == 7
        assert all(row['sales'] == Decimal('0.00') and row['orders'] == 0 for row in trend)
        dates = [row['date'] for row in trend]
        assert dates == sorted(dates)
        assert dates[-1] == timezone.localdate().isoformat()

    @pytest.mark.parametrize('period, days', [
        ('day', 1),
        ('week', 7),
        ('month', 30),
        ('quarter', 90),
        ('year', 365),
    ])
    def test_period_lengths(self, db, period, days):
        assert len(AnalyticsQueries.sales_trend(period=period)) == days

    def test_orders_land_in_their_day(self, place_order, customer, rose):
        place_order(customer, rose, 20)
        place_order(customer, rose, 40)
        place_order(customer, rose, 60, days_ago=2)
        place_order(customer, rose, 100, status=OrderStatus.CANCELLED)

        trend = AnalyticsQueries.sales_trend(period='week')

        assert trend[-1]['orders'] == 2
        assert trend[-1]['sales'] == Decimal('3000.00')
        assert trend[-3]['orders'] == 1
        assert trend[-3]['sales'] == Decimal('3000.00')
        assert trend[-2]['orders'] == 0

    def test_label_format(self, db):
        today = timezone.localdate()
        trend = AnalyticsQueries.sales_trend(period='day')

        assert trend == [{
            'date': today.isoformat(),
            'label': today.strftime('%d.%m'),
            'sales': Decimal('0.00'),
            'orders': 0,
        }]

    def test_invalid_period(self, db):
        with pytest.raises(InvalidPeriodError):
            AnalyticsQueries.sales_trend(period='decade')

    def test_analytics_errors_are_validation_errors(self):
        assert issubclass(AnalyticsServiceError, ValidationError)


@pytest.mark.django_db
class TestSalesByCountry:

    def test_grouped_by_origin(self, place_order, customer, rose, usd_rose):
        # Kenya: 40 * 50.00 = 2000; Ecuador: 30 * 51.88 = 1556.40
        place_order(customer, rose, 40)
        place_order(customer, usd_rose, 30)
        place_order(customer, rose, 100, status=OrderStatus.CANCELLED)

        rows = AnalyticsQueries.sales_by_country()

        assert rows == [
            {'country': 'Kenya', 'sales': Decimal('2000.00')},
            {'country': 'Ecuador', 'sales': Decimal('1556.40')},
        ]

    def test_ties_ordered_by_name(self, place_order, customer, make_product, kenya, ecuador):
        place_order(customer, make_product(variety='K', price_uah=Decimal('50.00'), country=kenya), 30)
        place_order(customer, make_product(variety='E', price_uah=Decimal('50.00'), country=ecuador), 30)

        rows = AnalyticsQueries.sales_by_country()

        assert [row['country'] for row in rows] == ['Ecuador', 'Kenya']


@pytest.mark.django_db
class TestRecentOrders:

    def test_newest_first(self, place_order, customer, rose):
        old = place_order(customer, rose, 20, days_ago=3)
        new = place_order(customer, rose, 20)

        orders = AnalyticsQueries.recent_orders(limit=5)

        assert [o.id for o in orders] == [new.id, old.id]
