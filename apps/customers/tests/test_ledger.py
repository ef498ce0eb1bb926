"""
Service tests for the customer ledger.

Tests cover:
- Applying a settlement exactly once per order
- Reversal restoring counters exactly
- Discount and gift eligibility
- Concurrent settlements for one customer (no lost updates)
"""

import threading
import time
import pytest
from decimal import Decimal
from uuid import uuid4
from django.db import connection
from django.test import TransactionTestCase

from apps.common.exceptions import CustomerBlockedError, NotFoundError, StorageUnavailable, ValidationError
from apps.configuration.store_config import load_store_config
from apps.customers.models import Customer, LedgerEntry
from apps.customers.services import (
    SettlementDelta,
    apply_settlement,
    reverse_settlement,
    is_discount_eligible,
    get_next_order_discount,
    is_gift_eligible,
)
from apps.orders.models import Order, OrderStatus


def delta_for(order, points=2):
    return SettlementDelta(
        customer_id=order.customer_id,
        order_id=order.id,
        order_amount=order.total_uah,
        loyalty_points_earned=points,
    )


# =============================================================================
# Apply / Reverse
# =============================================================================

@pytest.mark.django_db
class TestApplySettlement:

    def test_apply_increments_counters(self, customer, make_order):
        order = make_order(customer, '2500.00')

        updated = apply_settlement(delta_for(order, points=2))

        assert updated.total_orders == 1
        assert updated.total_spent == Decimal('2500.00')
        assert updated.loyalty_points == 2

        entry = LedgerEntry.objects.get(order=order)
        assert entry.order_amount == Decimal('2500.00')
        assert entry.loyalty_points == 2
        assert entry.reversed_at is None

    def test_reapply_is_noop(self, customer, make_order):
        order = make_order(customer, '2500.00')
        apply_settlement(delta_for(order))

        updated = apply_settlement(delta_for(order))

        assert updated.total_orders == 1
        assert updated.total_spent == Decimal('2500.00')
        assert updated.loyalty_points == 2
        assert LedgerEntry.objects.filter(order=order).count() == 1

    def test_total_spent_overflow_rejected(self, make_customer, make_order):
        big_spender = make_customer(total_spent=Decimal('9999999000.00'))
        order = make_order(big_spender, '2500.00')

        with pytest.raises(ValidationError):
            apply_settlement(delta_for(order))

        big_spender.refresh_from_db()
        assert big_spender.total_spent == Decimal('9999999000.00')
        assert big_spender.total_orders == 0
        assert not LedgerEntry.objects.filter(order=order).exists()

    def test_apply_skips_order_past_new(self, customer, make_order):
        order = make_order(customer, status=OrderStatus.CONFIRMED)

        updated = apply_settlement(delta_for(order))

        assert updated.total_orders == 0
        assert not LedgerEntry.objects.filter(order=order).exists()

    def test_apply_blocked_customer(self, blocked_customer, make_order):
        order = make_order(blocked_customer)

        with pytest.raises(CustomerBlockedError):
            apply_settlement(delta_for(order))

        blocked_customer.refresh_from_db()
        assert blocked_customer.total_orders == 0

    def test_apply_unknown_order(self, customer):
        delta = SettlementDelta(
            customer_id=customer.id,
            order_id=uuid4(),
            order_amount=Decimal('100.00'),
            loyalty_points_earned=0,
        )

        with pytest.raises(NotFoundError):
            apply_settlement(delta)


@pytest.mark.django_db
class TestReverseSettlement:

    def test_reverse_restores_counters(self, customer, make_order):
        first = make_order(customer, '1200.00')
        second = make_order(customer, '3400.50')
        apply_settlement(delta_for(first, points=1))
        apply_settlement(delta_for(second, points=3))

        updated = reverse_settlement(second.id)

        assert updated.total_orders == 1
        assert updated.total_spent == Decimal('1200.00')
        assert updated.loyalty_points == 1
        assert LedgerEntry.objects.get(order=second).reversed_at is not None

    def test_double_reverse_is_noop(self, customer, make_order):
        order = make_order(customer, '2500.00')
        apply_settlement(delta_for(order))
        reverse_settlement(order.id)

        updated = reverse_settlement(order.id)

        assert updated.total_orders == 0
        assert updated.total_spent == Decimal('0.00')
        assert updated.loyalty_points == 0

    def test_reverse_without_entry_is_noop(self, customer, make_order):
        order = make_order(customer)

        updated = reverse_settlement(order.id)

        assert updated.total_orders == 0

    def test_reverse_never_goes_below_zero(self, customer, make_order):
        order = make_order(customer, '2500.00')
        apply_settlement(delta_for(order, points=2))
        Customer.objects.filter(id=customer.id).update(
            total_spent=Decimal('100.00'),
            loyalty_points=1,
        )

        updated = reverse_settlement(order.id)

        assert updated.total_orders == 0
        assert updated.total_spent == Decimal('0.00')
        assert updated.loyalty_points == 0

    def test_reverse_unknown_order(self):
        with pytest.raises(NotFoundError):
            reverse_settlement(uuid4())


# =============================================================================
# Eligibility
# =============================================================================

@pytest.mark.django_db
class TestEligibility:

    @pytest.mark.parametrize('total_orders, eligible', [
        (0, False),
        (9, False),
        (10, True),
        (11, False),
        (20, True),
    ])
    def test_discount_eligibility(self, store_settings, make_customer, total_orders, eligible):
        customer = make_customer(total_orders=total_orders)

        assert is_discount_eligible(customer) is eligible

    def test_next_order_discount(self, store_settings, make_customer):
        config = load_store_config()

        assert get_next_order_discount(make_customer(total_orders=10), config) == Decimal('1000')
        assert get_next_order_discount(make_customer(total_orders=11), config) == Decimal('0.00')

    def test_gift_eligibility(self, store_settings, make_customer):
        config = load_store_config()

        assert is_gift_eligible(make_customer(loyalty_points=100), config)
        assert not is_gift_eligible(make_customer(loyalty_points=99), config)


# =============================================================================
# Concurrency
# =============================================================================

class TestLedgerConcurrency(TransactionTestCase):
    """
    Concurrent settlements for the same customer must not lose updates.

    TransactionTestCase is required so each thread commits real transactions.
    """

    def setUp(self):
        self.customer = Customer.objects.create(name='Busy Shop')
        self.orders = [
            Order.objects.create(
                order_number=f'CONC-{i:04d}',
                customer=self.customer,
                total_uah=Decimal('1500.00'),
            )
            for i in range(5)
        ]

    def test_concurrent_applies_no_lost_updates(self):
        errors = []

        def settle(order):
            try:
                # StorageUnavailable is the retryable outcome of lock contention
                for _ in range(50):
                    try:
                        apply_settlement(delta_for(order, points=1))
                        return
                    except StorageUnavailable:
                        time.sleep(0.05)
                errors.append((order.order_number, 'retries exhausted'))
            except Exception as e:
                errors.append((order.order_number, f"Unexpected error: {e}"))
            finally:
                connection.close()

        threads = [threading.Thread(target=settle, args=(order,)) for order in self.orders]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []

        self.customer.refresh_from_db()
        assert self.customer.total_orders == 5
        assert self.customer.total_spent == Decimal('7500.00')
        assert self.customer.loyalty_points == 5
        assert LedgerEntry.objects.filter(customer=self.customer).count() == 5
