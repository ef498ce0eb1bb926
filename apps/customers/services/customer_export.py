"""CSV export of customers with their ledger counters."""

import csv

from ..models import Customer

CUSTOMER_CSV_HEADER = ['ID', 'Name', 'Shop', 'Phone', 'City', 'Type', 'Orders', 'Spent', 'Points']


def write_customers_csv(stream, customers=None):
    """
    Write one row per customer to ``stream``.

    Args:
        stream: Any object with ``write()`` (file, ``HttpResponse``)
        customers: Queryset or iterable; defaults to every customer, newest first

    Returns:
        Number of customer rows written
    """
    if customers is None:
        customers = Customer.objects.order_by('-created_at')

    writer = csv.writer(stream)
    writer.writerow(CUSTOMER_CSV_HEADER)
    rows = 0
    for customer in customers:
        writer.writerow([
            customer.id,
            customer.name,
            customer.shop_name,
            customer.phone,
            customer.city,
            customer.customer_type,
            customer.total_orders,
            customer.total_spent,
            customer.loyalty_points,
        ])
        rows += 1
    return rows
