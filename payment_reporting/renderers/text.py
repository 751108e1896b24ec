"""
Console report renderer.

Builds the full fixed-width text report in memory; ``write`` is the only
method that touches a stream.
"""

from __future__ import annotations

import sys
from typing import TextIO

from payment_kernel.domain.clock import Clock, SystemClock
from payment_kernel.logging_config import get_logger
from payment_kernel.selectors.base import EntityNameResolver

from payment_reporting.config import ReportingConfig
from payment_reporting.models import ReportResult
from payment_reporting.renderers.common import (
    format_money,
    format_timestamp,
    resolve_party_name,
    truncate,
)

logger = get_logger("reporting.renderers.text")

LABEL_WIDTH = 20
AMOUNT_WIDTH = 12


class TextReportRenderer:
    """Renders a ``ReportResult`` as console text."""

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
        lines: list[str] = []
        lines += self._header(result)
        lines += self._basic_info(result)
        lines += self._aggregates(result)
        lines += self._category_breakdown(result)
        lines += self._entity_breakdown(result)
        lines += self._transaction_details(result)
        return "\n".join(lines) + "\n"

    def write(self, result: ReportResult, stream: TextIO | None = None) -> None:
        text = self.render(result)
        out = stream if stream is not None else sys.stdout
        out.write(text)
        out.flush()
        logger.info(
            "report_printed",
            extra={"line_count": text.count("\n")},
        )

    # -------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------

    @property
    def _border(self) -> str:
        return "=" * self._config.console_width

    @property
    def _section_border(self) -> str:
        return "-" * self._config.console_width

    def _center(self, text: str) -> str:
        return text.rjust((self._config.console_width + len(text)) // 2)

    def _money(self, amount, width: int = AMOUNT_WIDTH) -> str:
        return format_money(amount, self._config.currency_symbol, width)

    def _date(self, value) -> str:
        return value.strftime(self._config.date_format)

    def _header(self, result: ReportResult) -> list[str]:
        return [
            self._border,
            self._center(self._config.entity_name.upper()),
            self._center(result.period.heading),
            self._center(result.period.label),
            self._border,
        ]

    def _basic_info(self, result: ReportResult) -> list[str]:
        generated = format_timestamp(self._clock.now())
        return [
            "",
            self._section_border,
            f"PERIOD: {self._date(result.start_date)} to {self._date(result.end_date)}",
            f"TRANSACTIONS: {result.transaction_count}",
            f"REPORT GENERATED: {generated}",
            self._section_border,
        ]

    def _aggregates(self, result: ReportResult) -> list[str]:
        rows = [
            ("Total Inflow:", result.total_inflow),
            ("Total Outflow:", result.total_outflow),
            ("Net Balance:", result.net_balance),
            ("Avg Daily Value:", result.average_daily_value),
        ]
        return [
            "",
            "AGGREGATE TOTALS",
            self._section_border,
            *(f"{label:<{LABEL_WIDTH}} {self._money(amount)}" for label, amount in rows),
            self._section_border,
        ]

    def _category_breakdown(self, result: ReportResult) -> list[str]:
        lines = ["", "CATEGORY BREAKDOWN", self._section_border]
        for category, amount in result.category_totals.items():
            label = f"{category.value}:"
            lines.append(f"{label:<{LABEL_WIDTH}} {self._money(amount)}")
        lines.append(self._section_border)
        return lines

    def _entity_breakdown(self, result: ReportResult) -> list[str]:
        lines = ["", "ENTITY BREAKDOWN", self._section_border, "EMPLOYEES:"]
        for employee_id, amount in result.employee_totals.items():
            name = self._resolver.resolve_employee_name(employee_id)
            lines.append(f"- {name + ':':<{LABEL_WIDTH}} {self._money(amount)}")

        lines += ["", "COUNTERPARTIES:"]
        for counterparty_id, amount in result.counterparty_totals.items():
            name, party_type = self._resolver.resolve_counterparty(counterparty_id)
            lines.append(
                f"- {name:<{LABEL_WIDTH}} ({party_type.value}) {self._money(amount)}"
            )
        lines.append(self._section_border)
        return lines

    def _transaction_details(self, result: ReportResult) -> list[str]:
        width = self._config.truncate_width
        lines = [
            "",
            "TRANSACTION DETAILS",
            self._section_border,
            f"{'Date':<10} {'Amount':>{AMOUNT_WIDTH}} {'Direction':<10} "
            f"{'Category':<15} {'Description':<20} {'Party':<20} {'Status':<10}".rstrip(),
        ]
        for payment in result.transactions:
            party = resolve_party_name(payment, self._resolver)
            description = payment.description or "-"
            amount = self._money(payment.amount, AMOUNT_WIDTH - len(self._config.currency_symbol))
            lines.append(
                f"{self._date(payment.created_on):<10} {amount} "
                f"{payment.direction.value:<10} {payment.category.value:<15} "
                f"{truncate(description, width):<20} {truncate(party, width):<20} "
                f"{payment.status.value:<10}".rstrip()
            )
        lines.append(self._section_border)
        return lines
