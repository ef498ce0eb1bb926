"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DateRangeQuerySerializer - Validates the optional dashboard date range
    LimitQuerySerializer - Validates ranking limits
    SalesTrendQuerySerializer - Validates the trend period

Response Serializers:
    DashboardStatsSerializer - KPI tiles
    TopProductSerializer - Product ranking row
    TopCustomerSerializer - Customer ranking row
    SalesTrendPointSerializer - One day of the sales trend
    CountrySalesSerializer - Revenue per country
"""

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DateRangeQuerySerializer(serializers.Serializer):
    """
    Validate the optional dashboard date range.

    Query Parameters:
        start_date (date): First day included
        end_date (date): Last day included
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'end_date': 'End date must be after start date'
            })
        return attrs


class LimitQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False,
        default=5,
        min_value=1,
        max_value=100,
        help_text='Number of rows to return'
    )


class SalesTrendQuerySerializer(serializers.Serializer):
    # Unknown periods are rejected by AnalyticsQueries.sales_trend
    period = serializers.CharField(required=False, default='month', help_text='day, week, month, quarter or year')


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class DashboardStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_customers = serializers.IntegerField()
    total_products = serializers.IntegerField()
    new_orders_today = serializers.IntegerField()
    revenue_today = serializers.DecimalField(max_digits=14, decimal_places=2)
    orders_change = serializers.DecimalField(max_digits=10, decimal_places=2)
    revenue_change = serializers.DecimalField(max_digits=10, decimal_places=2)


class TopProductSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    variety = serializers.CharField()
    total_sold = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class TopCustomerSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    shop_name = serializers.CharField()
    total_orders = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)


class SalesTrendPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    label = serializers.CharField()
    sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    orders = serializers.IntegerField()


class CountrySalesSerializer(serializers.Serializer):
    country = serializers.CharField()
    sales = serializers.DecimalField(max_digits=14, decimal_places=2)
