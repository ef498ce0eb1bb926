"""CSV export of the order history."""

import csv

from django.utils import timezone

from ..models import Order

ORDER_CSV_HEADER = ['Order Number', 'Customer', 'Status', 'Total', 'Date']


def write_orders_csv(stream, orders=None):
    """
    Write one row per order to ``stream``, dates in local time.

    Returns:
        Number of order rows written
    """
    if orders is None:
        orders = Order.objects.select_related('customer').order_by('-created_at')

    writer = csv.writer(stream)
    writer.writerow(ORDER_CSV_HEADER)
    rows = 0
    for order in orders:
        writer.writerow([
            order.order_number,
            order.customer.name,
            order.status,
            order.total_uah,
            timezone.localtime(order.created_at).isoformat(timespec='seconds'),
        ])
        rows += 1
    return rows
