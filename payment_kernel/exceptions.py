"""
Typed exception hierarchy for payment reporting.

Every error raised by the report engine carries a ``code`` class attribute
(machine-readable, stable across message rewording) and the structured data
needed to act on it, so callers catch by type instead of parsing messages:

    try:
        result = service.generate_monthly_report(2024, 1)
    except EmptyResultError as e:
        print(f"No payments between {e.start_date} and {e.end_date}")
    except PaymentReportError as e:
        print(f"Report failed: {e.code}")

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PaymentReportError (base)
    |
    +-- PeriodError
    |   +-- InvalidPeriodError
    |   +-- InvalidDateError
    |
    +-- EmptyResultError
    |
    +-- EntityResolutionError
    |   +-- EmployeeNotFoundError
    |   +-- CounterpartyNotFoundError
    |
    +-- ExportError
        +-- UnsupportedExportFormatError

===============================================================================
ERROR CODES
===============================================================================

Category     | Code                       | When Raised
-------------|----------------------------|------------------------------------
Period       | INVALID_PERIOD             | end date before start date
             | INVALID_DATE               | month/quarter/year out of range
-------------|----------------------------|------------------------------------
Query        | EMPTY_RESULT               | no payments in the requested range
-------------|----------------------------|------------------------------------
Entity       | ENTITY_RESOLUTION_FAILURE  | referenced party cannot be resolved
             | EMPLOYEE_NOT_FOUND         | employee id unknown
             | COUNTERPARTY_NOT_FOUND     | counterparty id unknown
-------------|----------------------------|------------------------------------
Export       | EXPORT_FAILURE             | I/O or conversion failure
             | UNSUPPORTED_EXPORT_FORMAT  | format not one of console/csv/html/pdf

EntityResolutionError means payments reference parties that do not exist.
It is never recovered from: the report is aborted.
"""

from __future__ import annotations

from datetime import date


class PaymentReportError(Exception):
    """
    Base exception for all payment reporting errors.

    All subclasses define a ``code`` class attribute.
    """

    code: str = "PAYMENT_REPORT_ERROR"


# Period errors


class PeriodError(PaymentReportError):
    """Base exception for report period errors."""

    code: str = "PERIOD_ERROR"


class InvalidPeriodError(PeriodError):
    """Report period ends before it starts."""

    code: str = "INVALID_PERIOD"

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"End date {end_date.isoformat()} is before start date "
            f"{start_date.isoformat()}"
        )


class InvalidDateError(PeriodError):
    """Year, month or quarter does not name a real calendar period."""

    code: str = "INVALID_DATE"

    def __init__(
        self,
        year: int,
        month: int | None = None,
        quarter: int | None = None,
        reason: str = "",
    ):
        self.year = year
        self.month = month
        self.quarter = quarter
        self.reason = reason
        if quarter is not None:
            target = f"quarter {quarter} of {year}"
        else:
            target = f"month {month} of {year}"
        message = f"Invalid date: {target}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# Query errors


class EmptyResultError(PaymentReportError):
    """
    The payment source returned no records for the range.

    Raised instead of building a zero-filled report, which would hide
    a broken query.
    """

    code: str = "EMPTY_RESULT"

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"No payments found between {start_date.isoformat()} "
            f"and {end_date.isoformat()}"
        )


# Entity resolution errors


class EntityResolutionError(PaymentReportError):
    """A payment references an employee or counterparty that does not exist."""

    code: str = "ENTITY_RESOLUTION_FAILURE"


class EmployeeNotFoundError(EntityResolutionError):
    """Employee id is unknown to the resolver."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


class CounterpartyNotFoundError(EntityResolutionError):
    """Counterparty id is unknown to the resolver."""

    code: str = "COUNTERPARTY_NOT_FOUND"

    def __init__(self, counterparty_id: int):
        self.counterparty_id = counterparty_id
        super().__init__(f"Counterparty not found: {counterparty_id}")


# Export errors


class ExportError(PaymentReportError):
    """
    Writing or converting a report failed.

    The underlying exception is chained as ``__cause__``.
    """

    code: str = "EXPORT_FAILURE"

    def __init__(self, destination: str | None, export_format: str, reason: str):
        self.destination = destination
        self.export_format = export_format
        self.reason = reason
        target = destination if destination is not None else "<no destination>"
        super().__init__(f"{export_format} export to {target} failed: {reason}")


class UnsupportedExportFormatError(ExportError):
    """Requested export format is not one of console/csv/html/pdf."""

    code: str = "UNSUPPORTED_EXPORT_FORMAT"

    def __init__(self, export_format: str):
        super().__init__(None, export_format, "unsupported export format")
