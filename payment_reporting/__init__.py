"""
Payment Reporting (``payment_reporting``).

Responsibility
--------------
Read-only report engine: aggregates payment transactions over a monthly,
quarterly or custom period and renders the result as console text, CSV,
HTML or PDF.

Architecture position
---------------------
Sits on top of ``payment_kernel``.  Payments arrive through the
``PaymentSource`` protocol and party names through ``EntityNameResolver``;
nothing in this package writes to the database.

Invariants enforced
-------------------
* All amounts are ``Decimal``; averages round half up to cents.
* A period with no payments raises ``EmptyResultError`` instead of
  producing a zero-filled report.
* PDF output is always derived from the HTML rendering.

Failure modes
-------------
* ``InvalidPeriodError`` / ``InvalidDateError`` for impossible periods.
* ``EntityResolutionError`` when a payment references a missing party.
* ``ExportError`` when writing or converting a report fails.
"""

from payment_reporting.aggregation import aggregate_payments
from payment_reporting.calculator import ReportCalculator
from payment_reporting.config import ReportingConfig
from payment_reporting.models import (
    ExportFormat,
    PeriodKind,
    ReportPeriod,
    ReportResult,
)
from payment_reporting.periods import custom_period, monthly_period, quarterly_period
from payment_reporting.renderers import (
    CsvReportRenderer,
    HtmlReportRenderer,
    PdfReportExporter,
    TextReportRenderer,
    parse_csv_totals,
)
from payment_reporting.service import ReportService

__all__ = [
    "ReportingConfig",
    "ExportFormat",
    "PeriodKind",
    "ReportPeriod",
    "ReportResult",
    "aggregate_payments",
    "ReportCalculator",
    "monthly_period",
    "quarterly_period",
    "custom_period",
    "TextReportRenderer",
    "CsvReportRenderer",
    "HtmlReportRenderer",
    "PdfReportExporter",
    "parse_csv_totals",
    "ReportService",
]
