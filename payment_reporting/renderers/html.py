"""
HTML report renderer.

Produces one self-contained document: the stylesheet is embedded, there are
no scripts, images or links.  Markup is XHTML-style (void elements
self-closed, every element closed) so the same string can be fed to the PDF
exporter, which rejects anything that does not parse as well-formed XML.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from html import escape
from pathlib import Path

from payment_kernel.domain.clock import Clock, SystemClock
from payment_kernel.exceptions import ExportError
from payment_kernel.logging_config import get_logger
from payment_kernel.selectors.base import EntityNameResolver

from payment_reporting.config import ReportingConfig
from payment_reporting.models import ExportFormat, ReportResult
from payment_reporting.renderers.common import (
    format_amount,
    format_timestamp,
    resolve_party_name,
)
from payment_reporting.renderers.files import write_atomically

logger = get_logger("reporting.renderers.html")

STYLESHEET = (
    "body{font-family:Arial,sans-serif;font-size:11px;margin:20px;}"
    "table{border-collapse:collapse;width:100%;margin-bottom:15px;}"
    "th,td{border:1px solid #333;padding:4px 6px;text-align:left;}"
    "th{background:#f6f6f6;}"
    "h3{margin:18px 0 8px 0;font-size:14px;border-bottom:1px solid #aaa;}"
)

TRANSACTION_COLUMNS = (
    "Date",
    "Amount",
    "Direction",
    "Category",
    "Description",
    "Party",
    "Status",
)


# Characters outside the XML 1.0 Char production; the PDF exporter parses
# this document as XML and rejects them.
_NON_XML_CHARS = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _text(value: str) -> str:
    """Escape ``value`` for element content, replacing non-XML characters with a space."""
    return escape(_NON_XML_CHARS.sub(" ", value))


def _cell(tag: str, text: str) -> str:
    return f"<{tag}>{_text(text)}</{tag}>"


def _row(cells: Iterable[str], tag: str = "td") -> str:
    return "<tr>" + "".join(_cell(tag, c) for c in cells) + "</tr>"


def _table(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    body = "".join(_row(r) for r in rows)
    return f'<table border="1" width="100%">{_row(header, "th")}{body}</table>'


class HtmlReportRenderer:
    """Renders a ``ReportResult`` as a standalone HTML document."""

    def __init__(
        self,
        resolver: EntityNameResolver,
        config: ReportingConfig | None = None,
        clock: Clock | None = None,
    ):
        self._resolver = resolver
        self._config = config or ReportingConfig.with_defaults()
        self._clock = clock or SystemClock()

    def _money(self, amount) -> str:
        return f"{self._config.currency_symbol}{format_amount(amount)}"

    def render(self, result: ReportResult, title: str | None = None) -> str:
        title = title or result.period.default_title
        generated = format_timestamp(self._clock.now())

        parts = [
            f'<h2 align="center">{_text(title)}</h2>',
            f'<h4 align="center">{_text(result.period.label)}</h4>',
            "<hr />",
            "<p>"
            f"<b>PERIOD:</b> {_text(result.period.range_text)}<br />"
            f"<b>TRANSACTIONS:</b> {result.transaction_count}<br />"
            f"<b>REPORT GENERATED:</b> {_text(generated)}"
            "</p>",
            "<hr />",
            "<h3>AGGREGATE TOTALS</h3>",
            _table(
                ("Total Inflow", "Total Outflow", "Net Balance", "Avg Daily Value"),
                [(
                    self._money(result.total_inflow),
                    self._money(result.total_outflow),
                    self._money(result.net_balance),
                    self._money(result.average_daily_value),
                )],
            ),
            "<h3>CATEGORY BREAKDOWN</h3>",
            _table(
                [category.value for category in result.category_totals],
                [[self._money(amount) for amount in result.category_totals.values()]],
            ),
            "<h3>ENTITY BREAKDOWN</h3>",
            _table(
                ("EMPLOYEES", "AMOUNT"),
                [
                    (self._resolver.resolve_employee_name(employee_id), self._money(amount))
                    for employee_id, amount in result.employee_totals.items()
                ],
            ),
            _table(
                ("COUNTERPARTIES", "AMOUNT"),
                [
                    (self._resolver.resolve_counterparty(cp_id)[0], self._money(amount))
                    for cp_id, amount in result.counterparty_totals.items()
                ],
            ),
            "<h3>TRANSACTION DETAILS</h3>",
            _table(
                TRANSACTION_COLUMNS,
                [
                    (
                        payment.created_on.isoformat(),
                        self._money(payment.amount),
                        payment.direction.value,
                        payment.category.value,
                        payment.description or "-",
                        resolve_party_name(payment, self._resolver),
                        payment.status.value,
                    )
                    for payment in result.transactions
                ],
            ),
        ]

        return (
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="utf-8" />\n'
            f"<title>{_text(title)}</title>\n"
            f"<style>{STYLESHEET}</style>\n"
            "</head>\n"
            "<body>" + "".join(parts) + "</body>\n"
            "</html>\n"
        )

    def write(
        self,
        result: ReportResult,
        destination: Path | str,
        title: str | None = None,
    ) -> Path:
        """Render and write UTF-8 HTML; raises ExportError on failure."""
        path = Path(destination)
        document = self.render(result, title)
        try:
            write_atomically(path, document.encode("utf-8"))
        except OSError as exc:
            logger.error(
                "export_failed",
                extra={"destination": str(path), "export_format": ExportFormat.HTML.value},
                exc_info=True,
            )
            raise ExportError(str(path), ExportFormat.HTML.value, str(exc)) from exc

        logger.info(
            "report_exported",
            extra={"destination": str(path), "export_format": ExportFormat.HTML.value},
        )
        return path
