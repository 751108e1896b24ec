"""
Payment Reporting Domain Models (``payment_reporting.models``).

Responsibility
--------------
Frozen value objects describing a report request (``ReportPeriod``) and its
computed output (``ReportResult``).  The payment-level types are defined in
``payment_kernel.domain.payment`` and re-exported here.

Invariants enforced
-------------------
* All models are ``frozen=True``; mappings inside ``ReportResult`` are
  read-only views.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* ``ReportPeriod.end_date >= ReportPeriod.start_date``.

Failure modes
-------------
* ``InvalidPeriodError`` when a period ends before it starts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from payment_kernel.domain.payment import (
    PartyType,
    PaymentCategory,
    PaymentDirection,
    PaymentRecord,
    PaymentStatus,
)
from payment_kernel.exceptions import InvalidPeriodError

__all__ = [
    "PartyType",
    "PaymentCategory",
    "PaymentDirection",
    "PaymentRecord",
    "PaymentStatus",
    "PeriodKind",
    "ExportFormat",
    "ReportPeriod",
    "ReportResult",
]


class PeriodKind(str, Enum):
    """How a report period was requested."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    CUSTOM = "custom"


class ExportFormat(str, Enum):
    """Supported report outputs."""

    CONSOLE = "console"
    CSV = "csv"
    HTML = "html"
    PDF = "pdf"


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive calendar date range covered by a report."""

    start_date: date
    end_date: date
    kind: PeriodKind = PeriodKind.CUSTOM

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise InvalidPeriodError(self.start_date, self.end_date)

    @property
    def days(self) -> int:
        """Number of calendar days, both ends included."""
        return (self.end_date - self.start_date).days + 1

    @property
    def quarter(self) -> int:
        return (self.start_date.month - 1) // 3 + 1

    @property
    def label(self) -> str:
        """Short human label: ``JANUARY 2024``, ``Q1 2024`` or a date range."""
        if self.kind == PeriodKind.MONTHLY:
            return f"{self.start_date.strftime('%B').upper()} {self.start_date.year}"
        if self.kind == PeriodKind.QUARTERLY:
            return f"Q{self.quarter} {self.start_date.year}"
        return self.range_text

    @property
    def range_text(self) -> str:
        return f"{self.start_date.isoformat()} to {self.end_date.isoformat()}"

    @property
    def heading(self) -> str:
        if self.kind == PeriodKind.MONTHLY:
            return "MONTHLY FINANCIAL REPORT"
        if self.kind == PeriodKind.QUARTERLY:
            return "QUARTERLY FINANCIAL REPORT"
        return "FINANCIAL REPORT"

    @property
    def default_title(self) -> str:
        if self.kind == PeriodKind.MONTHLY:
            return f"Monthly Report for {self.start_date.strftime('%Y-%m')}"
        if self.kind == PeriodKind.QUARTERLY:
            return f"Quarterly Report for Q{self.quarter} {self.start_date.year}"
        return f"Financial Report for {self.range_text}"


@dataclass(frozen=True)
class ReportResult:
    """
    Aggregated payments for one period.

    Built once by the calculator; renderers only read it.  The three
    breakdown mappings keep first-seen order from the aggregation pass.
    """

    period: ReportPeriod
    transaction_count: int
    total_inflow: Decimal
    total_outflow: Decimal
    net_balance: Decimal
    average_daily_value: Decimal
    category_totals: Mapping[PaymentCategory, Decimal]
    employee_totals: Mapping[int, Decimal]
    counterparty_totals: Mapping[int, Decimal]
    transactions: tuple[PaymentRecord, ...]

    @property
    def start_date(self) -> date:
        return self.period.start_date

    @property
    def end_date(self) -> date:
        return self.period.end_date

    @property
    def total_amount(self) -> Decimal:
        """Sum of all amounts regardless of direction."""
        return self.total_inflow + self.total_outflow
