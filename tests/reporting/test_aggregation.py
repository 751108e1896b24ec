"""
Tests for the pure aggregation functions.

NO database, NO session. All inputs are plain PaymentRecord lists.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from payment_reporting.aggregation import (
    aggregate_payments,
    average_daily_value,
    round_money,
    sum_amounts,
    total_by_direction,
    totals_by_category,
    totals_by_counterparty,
    totals_by_employee,
)
from payment_reporting.models import (
    PaymentCategory,
    PaymentDirection,
    PeriodKind,
    ReportPeriod,
)

JANUARY = ReportPeriod(date(2024, 1, 1), date(2024, 1, 31), PeriodKind.MONTHLY)


class TestRoundMoney:

    def test_half_up(self):
        assert round_money(Decimal("0.005")) == Decimal("0.01")
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("-2.675")) == Decimal("-2.68")

    def test_below_half(self):
        assert round_money(Decimal("45.1612903")) == Decimal("45.16")


class TestTotals:

    def test_direction_totals(self, january_payments):
        assert total_by_direction(january_payments, PaymentDirection.INCOMING) == Decimal("1000.00")
        assert total_by_direction(january_payments, PaymentDirection.OUTGOING) == Decimal("400.00")

    def test_sum_of_nothing_is_zero(self):
        assert sum_amounts([]) == Decimal("0")

    def test_category_totals_first_seen_order(self, payment_factory):
        payments = [
            payment_factory(1, "5.00", PaymentDirection.OUTGOING, PaymentCategory.VENDOR_PAYMENT,
                            datetime(2024, 1, 1), counterparty_id=1),
            payment_factory(2, "7.00", PaymentDirection.OUTGOING, PaymentCategory.SALARY,
                            datetime(2024, 1, 2), employee_id=1),
            payment_factory(3, "1.50", PaymentDirection.OUTGOING, PaymentCategory.VENDOR_PAYMENT,
                            datetime(2024, 1, 3), counterparty_id=2),
        ]
        totals = totals_by_category(payments)
        assert list(totals) == [PaymentCategory.VENDOR_PAYMENT, PaymentCategory.SALARY]
        assert totals[PaymentCategory.VENDOR_PAYMENT] == Decimal("6.50")

    def test_party_totals_ignore_direction(self, payment_factory):
        payments = [
            payment_factory(1, "100.00", PaymentDirection.INCOMING, PaymentCategory.CLIENT_INVOICE,
                            datetime(2024, 1, 1), counterparty_id=7),
            payment_factory(2, "30.00", PaymentDirection.OUTGOING, PaymentCategory.VENDOR_PAYMENT,
                            datetime(2024, 1, 2), counterparty_id=7),
            payment_factory(3, "50.00", PaymentDirection.OUTGOING, PaymentCategory.SALARY,
                            datetime(2024, 1, 3), employee_id=3),
        ]
        assert totals_by_counterparty(payments) == {7: Decimal("130.00")}
        assert totals_by_employee(payments) == {3: Decimal("50.00")}


class TestAverageDailyValue:

    def test_includes_both_directions(self, january_payments):
        # (1000 + 400) / 31 = 45.1612...
        assert average_daily_value(january_payments, 31) == Decimal("45.16")

    def test_rounds_half_up(self, payment_factory):
        payments = [
            payment_factory(1, "0.05", PaymentDirection.INCOMING, PaymentCategory.CLIENT_INVOICE,
                            datetime(2024, 1, 1), counterparty_id=1),
        ]
        # 0.05 / 2 = 0.025 -> 0.03
        assert average_daily_value(payments, 2) == Decimal("0.03")


class TestAggregatePayments:

    def test_january_scenario(self, january_payments):
        result = aggregate_payments(JANUARY, january_payments)

        assert result.transaction_count == 2
        assert result.total_inflow == Decimal("1000.00")
        assert result.total_outflow == Decimal("400.00")
        assert result.net_balance == Decimal("600.00")
        assert result.average_daily_value == Decimal("45.16")
        assert dict(result.category_totals) == {
            PaymentCategory.CLIENT_INVOICE: Decimal("1000.00"),
            PaymentCategory.SALARY: Decimal("400.00"),
        }
        assert dict(result.employee_totals) == {3: Decimal("400.00")}
        assert dict(result.counterparty_totals) == {7: Decimal("1000.00")}
        assert result.transactions == tuple(january_payments)

    def test_negative_net_balance(self, payment_factory):
        payments = [
            payment_factory(1, "250.00", PaymentDirection.OUTGOING, PaymentCategory.VENDOR_PAYMENT,
                            datetime(2024, 1, 4), counterparty_id=2),
        ]
        result = aggregate_payments(JANUARY, payments)
        assert result.net_balance == Decimal("-250.00")
        assert result.total_inflow == Decimal("0")

    def test_keeps_source_order(self, january_payments):
        reversed_input = list(reversed(january_payments))
        result = aggregate_payments(JANUARY, reversed_input)
        assert [p.payment_id for p in result.transactions] == [2, 1]

    def test_deterministic(self, january_payments):
        assert aggregate_payments(JANUARY, january_payments) == aggregate_payments(
            JANUARY, list(january_payments),
        )
