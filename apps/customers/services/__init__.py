"""Services for customers and the loyalty ledger."""

from .exceptions import CustomerNotFoundError
from .ledger import (
    SettlementDelta,
    apply_settlement,
    reverse_settlement,
    is_discount_eligible,
    get_next_order_discount,
    is_gift_eligible,
)
from .customer_management import (
    get_customer_by_id,
    get_or_create_customer,
    set_customer_blocked,
)
from .customer_export import CUSTOMER_CSV_HEADER, write_customers_csv

__all__ = [
    # Exceptions
    'CustomerNotFoundError',
    # Ledger
    'SettlementDelta',
    'apply_settlement',
    'reverse_settlement',
    'is_discount_eligible',
    'get_next_order_discount',
    'is_gift_eligible',
    # Customer Management
    'get_customer_by_id',
    'get_or_create_customer',
    'set_customer_blocked',
    # Export
    'CUSTOMER_CSV_HEADER',
    'write_customers_csv',
]
