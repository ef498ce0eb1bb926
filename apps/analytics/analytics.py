"""
Analytics Module
=================

Read-only aggregate queries that power the back-office dashboard: KPI tiles,
product and customer rankings, the daily sales trend and sales by country of
origin.

Classes:
    AnalyticsQueries: Static methods for the dashboard queries.

Key Features:
    - Cancelled orders never count toward revenue or order counts
    - Deterministic tie-breakers on every ranking
    - Daily trend buckets are zero-filled, so a quiet week still yields
      seven rows
    - "Today" is the local date in ``settings.TIME_ZONE``

Example:
    Getting dashboard data::

        from apps.analytics.analytics import AnalyticsQueries

        stats = AnalyticsQueries.dashboard_stats()
        print(f"Revenue today: {stats['revenue_today']} UAH ({stats['revenue_change']}%)")

        trend = AnalyticsQueries.sales_trend(period='week')

Note:
    This module is read-only and takes no locks. All methods return plain
    dictionaries or lists, making them suitable for JSON serialization.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, DecimalField, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from apps.catalog.models import Product
from apps.customers.models import Customer
from apps.orders.models import Order, OrderItem, OrderStatus
from apps.orders.services import get_recent_orders
from .exceptions import InvalidDateRangeError, InvalidPeriodError

ZERO = Decimal('0.00')

TREND_PERIOD_DAYS = {
    'day': 1,
    'week': 7,
    'month': 30,
    'quarter': 90,
    'year': 365,
}

MONEY = DecimalField(max_digits=14, decimal_places=2)


def _day_start(day: date) -> datetime:
    """Aware datetime at local midnight of ``day``."""
    return timezone.make_aware(datetime.combine(day, time.min))


def _percent_change(today, yesterday) -> Decimal:
    if not yesterday:
        return ZERO
    change = (Decimal(today) - Decimal(yesterday)) / Decimal(yesterday) * 100
    return change.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def _settled_orders():
    return Order.objects.exclude(status=OrderStatus.CANCELLED)


def _settled_items():
    return OrderItem.objects.exclude(order__status=OrderStatus.CANCELLED)


class AnalyticsQueries:
    """
    Aggregate queries for the analytics endpoints.

    Methods:
        dashboard_stats: KPI totals plus today vs. yesterday changes.
        top_products: Best sellers by quantity.
        top_customers: Customers by total spent.
        sales_trend: Daily sales and order counts for a period.
        sales_by_country: Revenue per country of origin.
        recent_orders: Latest orders for the dashboard feed.
    """

    @staticmethod
    def _day_totals(day: date) -> dict:
        start = _day_start(day)
        end = _day_start(day + timedelta(days=1))
        return _settled_orders().filter(
            created_at__gte=start,
            created_at__lt=end,
        ).aggregate(
            orders=Count('id'),
            revenue=Coalesce(Sum('total_uah'), ZERO, output_field=MONEY),
        )

    @staticmethod
    def dashboard_stats(start_date=None, end_date=None):
        """
        Calculate the dashboard KPI tiles.

        Args:
            start_date (date, optional): First local day included in
                ``total_orders``/``total_revenue``. Defaults to no lower bound.
            end_date (date, optional): Last local day included. Defaults to
                no upper bound.

        Returns:
            dict: A dictionary containing:
                - total_orders (int): Non-cancelled orders in range.
                - total_revenue (Decimal): Their summed ``total_uah``.
                - total_customers (int): All customers.
                - total_products (int): All catalog products.
                - new_orders_today (int): Non-cancelled orders placed today.
                - revenue_today (Decimal): Revenue placed today.
                - orders_change (Decimal): Percent change vs. yesterday.
                - revenue_change (Decimal): Percent change vs. yesterday.

        Raises:
            InvalidDateRangeError: If start_date is after end_date.

        Note:
            Changes are ``(today - yesterday) / yesterday * 100`` rounded to
            two places, and 0 when yesterday had nothing.
        """
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeError("Start date must be before end date")

        orders = _settled_orders()
        if start_date:
            orders = orders.filter(created_at__gte=_day_start(start_date))
        if end_date:
            orders = orders.filter(created_at__lt=_day_start(end_date + timedelta(days=1)))

        totals = orders.aggregate(
            count=Count('id'),
            revenue=Coalesce(Sum('total_uah'), ZERO, output_field=MONEY),
        )

        today = timezone.localdate()
        today_totals = AnalyticsQueries._day_totals(today)
        yesterday_totals = AnalyticsQueries._day_totals(today - timedelta(days=1))

        return {
            'total_orders': totals['count'],
            'total_revenue': totals['revenue'],
            'total_customers': Customer.objects.count(),
            'total_products': Product.objects.count(),
            'new_orders_today': today_totals['orders'],
            'revenue_today': today_totals['revenue'],
            'orders_change': _percent_change(today_totals['orders'], yesterday_totals['orders']),
            'revenue_change': _percent_change(today_totals['revenue'], yesterday_totals['revenue']),
        }

    @staticmethod
    def top_products(limit=None):
        """
        Rank products by units sold.

        Ties are broken by revenue (descending), then product id (ascending).
        Products that never sold are left out.

        Args:
            limit (int, optional): Maximum rows. None returns all.

        Returns:
            list[dict]: Rows with ``id``, ``name``, ``variety``,
            ``total_sold`` and ``revenue``.
        """
        rows = (
            _settled_items()
            .values('product_id', 'product__name', 'product__variety')
            .annotate(
                total_sold=Sum('quantity'),
                revenue=Coalesce(Sum('total_uah'), ZERO, output_field=MONEY),
            )
            .filter(total_sold__gt=0)
            .order_by('-total_sold', '-revenue', 'product_id')
        )
        if limit is not None:
            rows = rows[:limit]

        return [
            {
                'id': row['product_id'],
                'name': row['product__name'],
                'variety': row['product__variety'],
                'total_sold': row['total_sold'],
                'revenue': row['revenue'],
            }
            for row in rows
        ]

    @staticmethod
    def top_customers(limit=None):
        """
        Rank customers who ordered at least once by total spent.

        Ties: ``total_orders`` descending, then id ascending.
        """
        customers = (
            Customer.objects
            .filter(total_orders__gt=0)
            .order_by('-total_spent', '-total_orders', 'id')
            .values('id', 'name', 'shop_name', 'total_orders', 'total_spent')
        )
        if limit is not None:
            customers = customers[:limit]
        return list(customers)

    @staticmethod
    def sales_trend(period='month', end_date=None):
        """
        Daily sales and order counts for a trailing window.

        Args:
            period (str): One of ``day``, ``week``, ``month``, ``quarter``,
                ``year`` (1, 7, 30, 90 and 365 days).
            end_date (date, optional): Last day of the window. Defaults to
                today's local date.

        Returns:
            list[dict]: One row per day in ascending order with ``date``
            (ISO), ``label`` (DD.MM), ``sales`` and ``orders``. Days without
            orders are present with zeros.

        Raises:
            InvalidPeriodError: If the period is not recognised.
        """
        days = TREND_PERIOD_DAYS.get(period)
        if days is None:
            raise InvalidPeriodError(
                f"Invalid period: '{period}'. Valid options: {', '.join(TREND_PERIOD_DAYS)}"
            )

        end_date = end_date or timezone.localdate()
        start_date = end_date - timedelta(days=days - 1)

        buckets = (
            _settled_orders()
            .filter(
                created_at__gte=_day_start(start_date),
                created_at__lt=_day_start(end_date + timedelta(days=1)),
            )
            .annotate(day=TruncDate('created_at', tzinfo=timezone.get_current_timezone()))
            .values('day')
            .annotate(
                sales=Coalesce(Sum('total_uah'), ZERO, output_field=MONEY),
                orders=Count('id'),
            )
            .order_by('day')
        )
        by_day = {row['day']: row for row in buckets}

        trend = []
        for offset in range(days):
            day = start_date + timedelta(days=offset)
            row = by_day.get(day)
            trend.append({
                'date': day.isoformat(),
                'label': day.strftime('%d.%m'),
                'sales': row['sales'] if row else ZERO,
                'orders': row['orders'] if row else 0,
            })
        return trend

    @staticmethod
    def sales_by_country():
        """
        Revenue per country of origin of the products sold.

        Returns:
            list[dict]: ``{'country': name, 'sales': Decimal}`` rows, highest
            sales first, then country name.
        """
        rows = (
            _settled_items()
            .values('product__country__name')
            .annotate(sales=Coalesce(Sum('total_uah'), ZERO, output_field=MONEY))
            .order_by('-sales', 'product__country__name')
        )
        return [
            {'country': row['product__country__name'], 'sales': row['sales']}
            for row in rows
        ]

    @staticmethod
    def recent_orders(limit=5):
        """Latest orders of any status, newest first."""
        return get_recent_orders(limit=limit)
