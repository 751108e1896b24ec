"""
CSV report renderer.

Layout: labelled ``Section,Key,Value`` blocks (REPORT, AGGREGATE, CATEGORY,
EMPLOYEE, COUNTERPARTY) separated by blank lines, followed by the
transaction table headed ``Date,Amount,Direction,Category,Description,Party,Status``.
Amounts are written as plain two-decimal numbers so that re-reading the
file reproduces the report totals exactly.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path

from payment_kernel.domain.clock import Clock, SystemClock
from payment_kernel.exceptions import ExportError
from payment_kernel.logging_config import get_logger
from payment_kernel.selectors.base import EntityNameResolver

from payment_reporting.config import ReportingConfig
from payment_reporting.models import ExportFormat, PaymentCategory, ReportResult
from payment_reporting.renderers.common import (
    format_timestamp,
    plain_amount,
    resolve_party_name,
)
from payment_reporting.renderers.files import write_atomically

logger = get_logger("reporting.renderers.csv")

SECTION_HEADER = ("Section", "Key", "Value")
TRANSACTION_HEADER = (
    "Date",
    "Amount",
    "Direction",
    "Category",
    "Description",
    "Party",
    "Status",
)

AGGREGATE_KEYS = {
    "Total Inflow": "total_inflow",
    "Total Outflow": "total_outflow",
    "Net Balance": "net_balance",
    "Avg Daily Value": "average_daily_value",
}


class CsvReportRenderer:
    """Renders a ``ReportResult`` as sectioned CSV."""

    def __init__(
        self,
        resolver: EntityNameResolver,
        config: ReportingConfig | None = None,
        clock: Clock | None = None,
    ):
        self._resolver = resolver
        self._config = config or ReportingConfig.with_defaults()
        self._clock = clock or SystemClock()

    def render(self, result: ReportResult) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")

        self._section(writer, [
            ("REPORT", "Period", result.period.range_text),
            ("REPORT", "Transactions", str(result.transaction_count)),
            ("REPORT", "Report Generated", format_timestamp(self._clock.now())),
        ])
        self._section(writer, [
            ("AGGREGATE", label, plain_amount(getattr(result, attr)))
            for label, attr in AGGREGATE_KEYS.items()
        ])
        self._section(writer, [
            ("CATEGORY", category.value, plain_amount(amount))
            for category, amount in result.category_totals.items()
        ])
        self._section(writer, [
            ("EMPLOYEE", self._resolver.resolve_employee_name(employee_id), plain_amount(amount))
            for employee_id, amount in result.employee_totals.items()
        ])
        self._section(writer, [
            ("COUNTERPARTY", self._resolver.resolve_counterparty(cp_id)[0], plain_amount(amount))
            for cp_id, amount in result.counterparty_totals.items()
        ])

        writer.writerow(TRANSACTION_HEADER)
        for payment in result.transactions:
            writer.writerow([
                payment.created_on.isoformat(),
                plain_amount(payment.amount),
                payment.direction.value,
                payment.category.value,
                payment.description or "",
                resolve_party_name(payment, self._resolver),
                payment.status.value,
            ])
        return buffer.getvalue()

    def write(self, result: ReportResult, destination: Path | str) -> Path:
        """Render and write to ``destination``; raises ExportError on failure."""
        path = Path(destination)
        content = self.render(result)
        try:
            write_atomically(path, content.encode(self._config.csv_encoding))
        except (OSError, UnicodeError) as exc:
            logger.error(
                "export_failed",
                extra={"destination": str(path), "export_format": ExportFormat.CSV.value},
                exc_info=True,
            )
            raise ExportError(str(path), ExportFormat.CSV.value, str(exc)) from exc

        logger.info(
            "report_exported",
            extra={
                "destination": str(path),
                "export_format": ExportFormat.CSV.value,
                "transaction_count": result.transaction_count,
            },
        )
        return path

    @staticmethod
    def _section(writer, rows: Iterable[tuple[str, str, str]]) -> None:
        writer.writerow(SECTION_HEADER)
        writer.writerows(rows)
        writer.writerow([])


def parse_csv_totals(text: str) -> dict[str, object]:
    """
    Read the numeric sections of a rendered CSV report back.

    Returns ``{"aggregate": {label: Decimal}, "category": {PaymentCategory:
    Decimal}, "employee": {name: Decimal}, "counterparty": {name: Decimal},
    "transactions": [row dicts]}``.  Party sections are keyed by display
    name, so parties sharing a name are summed into one entry.
    """
    parsed: dict[str, object] = {
        "aggregate": {},
        "category": {},
        "employee": {},
        "counterparty": {},
        "transactions": [],
    }
    reader = csv.reader(io.StringIO(text, newline=""))
    in_table = False
    for row in reader:
        if not row:
            continue
        if tuple(row) == TRANSACTION_HEADER:
            in_table = True
            continue
        if in_table:
            parsed["transactions"].append(dict(zip(TRANSACTION_HEADER, row)))
            continue
        if tuple(row) == SECTION_HEADER:
            continue
        section, key, value = row
        if section == "AGGREGATE":
            parsed["aggregate"][key] = Decimal(value)
        elif section == "CATEGORY":
            parsed["category"][PaymentCategory(key)] = Decimal(value)
        elif section in ("EMPLOYEE", "COUNTERPARTY"):
            totals = parsed[section.lower()]
            totals[key] = totals.get(key, Decimal("0")) + Decimal(value)
    return parsed
