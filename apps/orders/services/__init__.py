"""Services for order settlement and lifecycle."""

from .exceptions import OrderNotFoundError, InvalidStatusTransitionError
from .pricing import PricedLine, unit_price_uah, price_line, order_total
from .order_numbers import next_order_number
from .settlement import (
    create_order,
    settle_order,
    price_order,
    loyalty_points_for,
)
from .status_machine import (
    ALLOWED_TRANSITIONS,
    can_transition,
    transition_order_status,
)
from .order_queries import (
    get_order_by_id,
    get_recent_orders,
    get_customer_orders,
)
from .order_export import ORDER_CSV_HEADER, write_orders_csv

__all__ = [
    # Exceptions
    'OrderNotFoundError',
    'InvalidStatusTransitionError',
    # Pricing
    'PricedLine',
    'unit_price_uah',
    'price_line',
    'order_total',
    # Settlement
    'next_order_number',
    'create_order',
    'settle_order',
    'price_order',
    'loyalty_points_for',
    # Status Machine
    'ALLOWED_TRANSITIONS',
    'can_transition',
    'transition_order_status',
    # Queries
    'get_order_by_id',
    'get_recent_orders',
    'get_customer_orders',
    # Export
    'ORDER_CSV_HEADER',
    'write_orders_csv',
]
