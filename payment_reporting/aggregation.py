"""
Pure payment aggregation functions.

These functions turn a list of payment records into a ``ReportResult``.
ZERO I/O. ZERO side effects.

- All monetary values are Decimal; sums never pass through float.
- Deterministic: same inputs always produce equal outputs.
- Grouped totals keep the order in which keys are first seen.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import TypeVar

from payment_reporting.models import (
    PaymentCategory,
    PaymentDirection,
    PaymentRecord,
    ReportPeriod,
    ReportResult,
)

K = TypeVar("K", bound=Hashable)

ZERO = Decimal("0")
CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Quantize to two decimal places, rounding half up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_amounts(payments: Iterable[PaymentRecord]) -> Decimal:
    return sum((p.amount for p in payments), ZERO)


def total_by_direction(
    payments: Iterable[PaymentRecord],
    direction: PaymentDirection,
) -> Decimal:
    return sum_amounts(p for p in payments if p.direction == direction)


def average_daily_value(payments: Sequence[PaymentRecord], days: int) -> Decimal:
    """
    Sum of ALL amounts (incoming and outgoing alike) divided by the number
    of days in the period, rounded half up to cents.
    """
    assert days > 0, "a report period always spans at least one day"
    return round_money(sum_amounts(payments) / Decimal(days))


def _group_totals(
    payments: Iterable[PaymentRecord],
    key: Callable[[PaymentRecord], K | None],
) -> dict[K, Decimal]:
    totals: dict[K, Decimal] = {}
    for payment in payments:
        group = key(payment)
        if group is None:
            continue
        totals[group] = totals.get(group, ZERO) + payment.amount
    return totals


def totals_by_category(
    payments: Iterable[PaymentRecord],
) -> dict[PaymentCategory, Decimal]:
    return _group_totals(payments, lambda p: p.category)


def totals_by_employee(payments: Iterable[PaymentRecord]) -> dict[int, Decimal]:
    """Employee-linked payments only; direction does not matter."""
    return _group_totals(payments, lambda p: p.employee_id)


def totals_by_counterparty(payments: Iterable[PaymentRecord]) -> dict[int, Decimal]:
    """Counterparty-linked payments only; direction does not matter."""
    return _group_totals(payments, lambda p: p.counterparty_id)


def aggregate_payments(
    period: ReportPeriod,
    payments: Sequence[PaymentRecord],
) -> ReportResult:
    """
    Build the report for ``period`` from already-fetched payments.

    The payment list is kept in the given order.  Callers are responsible
    for rejecting an empty list before calling.
    """
    total_inflow = total_by_direction(payments, PaymentDirection.INCOMING)
    total_outflow = total_by_direction(payments, PaymentDirection.OUTGOING)

    return ReportResult(
        period=period,
        transaction_count=len(payments),
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        net_balance=total_inflow - total_outflow,
        average_daily_value=average_daily_value(payments, period.days),
        category_totals=MappingProxyType(totals_by_category(payments)),
        employee_totals=MappingProxyType(totals_by_employee(payments)),
        counterparty_totals=MappingProxyType(totals_by_counterparty(payments)),
        transactions=tuple(payments),
    )
