"""Formatting helpers shared by the report renderers."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from payment_kernel.selectors.base import EntityNameResolver

from payment_reporting.aggregation import round_money
from payment_reporting.models import PaymentRecord

ELLIPSIS = "..."


def format_amount(amount: Decimal, width: int = 0) -> str:
    """Two decimals, thousands separators, right-aligned to ``width``."""
    text = f"{round_money(amount):,.2f}"
    return text.rjust(width)


def format_money(amount: Decimal, symbol: str, width: int = 0) -> str:
    return f"{symbol}{format_amount(amount, width)}"


def plain_amount(amount: Decimal) -> str:
    """
    No separators, at least two decimals, never rounded: the
    machine-readable form used by CSV.
    """
    if amount.as_tuple().exponent >= -2:
        return f"{amount:.2f}"
    return f"{amount:f}"


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to ``width`` characters, ending in an ellipsis when cut."""
    if len(text) <= width:
        return text
    return text[: width - len(ELLIPSIS)] + ELLIPSIS


def format_timestamp(moment: datetime) -> str:
    return moment.replace(microsecond=0).isoformat()


def resolve_party_name(payment: PaymentRecord, resolver: EntityNameResolver) -> str:
    """
    Employee name for salary payments, counterparty name otherwise.

    Resolution failures propagate: a payment pointing at a missing party
    means the payment and party tables disagree.
    """
    if payment.employee_id is not None:
        return resolver.resolve_employee_name(payment.employee_id)
    name, _ = resolver.resolve_counterparty(payment.counterparty_id)
    return name
