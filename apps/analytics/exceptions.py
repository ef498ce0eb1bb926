"""
Domain exceptions for analytics app.

These exceptions are raised by ``AnalyticsQueries`` when a query parameter
makes no sense. They are ``ValidationError`` subclasses, so the API's
exception handler answers them with 400.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidPeriodError
    └── InvalidDateRangeError

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    if period not in TREND_PERIOD_DAYS:
        raise InvalidPeriodError(f"Invalid period: {period}")
"""

from apps.common.exceptions import ValidationError


class AnalyticsServiceError(ValidationError):
    """
    Base exception for all analytics service errors.

    Example:
        try:
            trend = AnalyticsQueries.sales_trend(period='decade')
        except AnalyticsServiceError as e:
            ...
    """

    default_code = 'analytics_error'


class InvalidPeriodError(AnalyticsServiceError):
    """
    Raised when the trend period is not one of day, week, month, quarter, year.

    Example:
        raise InvalidPeriodError("Invalid period: 'decade'")
    """

    default_code = 'invalid_period'


class InvalidDateRangeError(AnalyticsServiceError):
    """
    Raised when start_date is after end_date.

    Example:
        raise InvalidDateRangeError("Start date must be before end date")
    """

    default_code = 'invalid_date_range'
