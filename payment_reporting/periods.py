"""
Report period arithmetic.

Pure functions mapping (year, month) and (year, quarter) requests onto
inclusive calendar date ranges.
"""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date

from payment_kernel.exceptions import InvalidDateError
from payment_reporting.models import PeriodKind, ReportPeriod


def _check_year(year: int, *, month: int | None = None, quarter: int | None = None) -> None:
    if not isinstance(year, int) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidDateError(year, month=month, quarter=quarter, reason="year out of range")


def monthly_period(year: int, month: int) -> ReportPeriod:
    """First through last calendar day of ``month``."""
    _check_year(year, month=month)
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidDateError(year, month=month, reason="month must be 1-12")
    last_day = calendar.monthrange(year, month)[1]
    return ReportPeriod(
        start_date=date(year, month, 1),
        end_date=date(year, month, last_day),
        kind=PeriodKind.MONTHLY,
    )


def quarterly_period(year: int, quarter: int) -> ReportPeriod:
    """Three calendar months starting at month ``(quarter - 1) * 3 + 1``."""
    _check_year(year, quarter=quarter)
    if not isinstance(quarter, int) or not 1 <= quarter <= 4:
        raise InvalidDateError(year, quarter=quarter, reason="quarter must be 1-4")
    start_month = (quarter - 1) * 3 + 1
    end_month = start_month + 2
    last_day = calendar.monthrange(year, end_month)[1]
    return ReportPeriod(
        start_date=date(year, start_month, 1),
        end_date=date(year, end_month, last_day),
        kind=PeriodKind.QUARTERLY,
    )


def custom_period(start_date: date, end_date: date) -> ReportPeriod:
    """Arbitrary inclusive range; raises InvalidPeriodError if reversed."""
    return ReportPeriod(start_date=start_date, end_date=end_date)
