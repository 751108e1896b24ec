"""
Tests for ReportCalculator.

Uses the in-memory payment source; verifies query bounds, error
behaviour and logging.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from payment_kernel.exceptions import EmptyResultError, InvalidPeriodError
from payment_reporting.calculator import ReportCalculator
from payment_reporting.models import PeriodKind


class TestCalculateReport:

    def test_january_totals(self, payment_source):
        result = ReportCalculator(payment_source).calculate_report(
            date(2024, 1, 1), date(2024, 1, 31), PeriodKind.MONTHLY,
        )

        assert result.transaction_count == 2
        assert result.total_inflow == Decimal("1000.00")
        assert result.total_outflow == Decimal("400.00")
        assert result.net_balance == Decimal("600.00")
        assert result.average_daily_value == Decimal("45.16")
        assert result.period.kind == PeriodKind.MONTHLY

    def test_queries_requested_range(self, payment_source):
        ReportCalculator(payment_source).calculate_report(date(2024, 1, 1), date(2024, 1, 31))
        assert payment_source.calls == [(date(2024, 1, 1), date(2024, 1, 31))]

    def test_empty_range_raises(self, payment_source):
        with pytest.raises(EmptyResultError) as exc_info:
            ReportCalculator(payment_source).calculate_report(date(2024, 3, 1), date(2024, 3, 31))
        assert exc_info.value.start_date == date(2024, 3, 1)
        assert exc_info.value.end_date == date(2024, 3, 31)

    def test_reversed_range_never_queries(self, payment_source):
        with pytest.raises(InvalidPeriodError):
            ReportCalculator(payment_source).calculate_report(date(2024, 1, 31), date(2024, 1, 1))
        assert payment_source.calls == []

    def test_idempotent(self, payment_source):
        calculator = ReportCalculator(payment_source)
        first = calculator.calculate_report(date(2024, 1, 1), date(2024, 1, 31))
        second = calculator.calculate_report(date(2024, 1, 1), date(2024, 1, 31))
        assert first == second

    def test_source_errors_propagate(self):
        class BrokenSource:
            def fetch_by_date_range(self, start_date, end_date):
                raise ConnectionError("database unavailable")

        with pytest.raises(ConnectionError):
            ReportCalculator(BrokenSource()).calculate_report(date(2024, 1, 1), date(2024, 1, 31))


class TestCalculatorLogging:

    def test_report_calculated_logged(self, payment_source, captured_logs):
        ReportCalculator(payment_source).calculate_report(date(2024, 1, 1), date(2024, 1, 31))

        [record] = [r for r in captured_logs() if r["message"] == "report_calculated"]
        assert record["transaction_count"] == 2
        assert record["net_balance"] == "600.00"
        assert record["period_kind"] == "custom"

    def test_empty_period_logged(self, payment_source, captured_logs):
        with pytest.raises(EmptyResultError):
            ReportCalculator(payment_source).calculate_report(date(2024, 3, 1), date(2024, 3, 31))

        assert any(
            r["message"] == "report_period_empty" and r["level"] == "WARNING"
            for r in captured_logs()
        )
