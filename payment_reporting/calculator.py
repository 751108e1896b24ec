"""
Report Calculator (``payment_reporting.calculator``).

Responsibility
--------------
Fetches the payments for a period from a ``PaymentSource`` and hands them
to the pure aggregation functions in ``aggregation.py``.

Failure modes
-------------
* ``end_date < start_date``  -> ``InvalidPeriodError`` before any query.
* No payments in range  -> ``EmptyResultError``; a zero-filled report is
  never produced.
* Source failures propagate unchanged.
"""

from __future__ import annotations

from datetime import date

from payment_kernel.exceptions import EmptyResultError
from payment_kernel.logging_config import get_logger
from payment_kernel.selectors.base import PaymentSource

from payment_reporting.aggregation import aggregate_payments
from payment_reporting.models import PeriodKind, ReportPeriod, ReportResult

logger = get_logger("reporting.calculator")


class ReportCalculator:
    """Aggregates one period of payments into a ``ReportResult``."""

    def __init__(self, source: PaymentSource):
        self._source = source

    def calculate_report(
        self,
        start_date: date,
        end_date: date,
        kind: PeriodKind = PeriodKind.CUSTOM,
    ) -> ReportResult:
        """
        Compute the report for the inclusive range [start_date, end_date].

        Raises:
            InvalidPeriodError: end_date is before start_date.
            EmptyResultError: the source has no payments in the range.
        """
        period = ReportPeriod(start_date=start_date, end_date=end_date, kind=kind)
        return self.calculate_period(period)

    def calculate_period(self, period: ReportPeriod) -> ReportResult:
        payments = self._source.fetch_by_date_range(period.start_date, period.end_date)
        if not payments:
            logger.warning(
                "report_period_empty",
                extra={
                    "start_date": period.start_date.isoformat(),
                    "end_date": period.end_date.isoformat(),
                },
            )
            raise EmptyResultError(period.start_date, period.end_date)

        result = aggregate_payments(period, payments)

        logger.info(
            "report_calculated",
            extra={
                "start_date": period.start_date.isoformat(),
                "end_date": period.end_date.isoformat(),
                "period_kind": period.kind.value,
                "transaction_count": result.transaction_count,
                "total_inflow": str(result.total_inflow),
                "total_outflow": str(result.total_outflow),
                "net_balance": str(result.net_balance),
            },
        )
        return result
