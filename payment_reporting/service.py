"""
Report Service (``payment_reporting.service``).

Responsibility
--------------
Single entry point for the presentation layer: turns monthly and quarterly
requests into report periods, runs the calculator, and dispatches a
computed ``ReportResult`` to the requested output.

Invariants enforced
-------------------
* Read-only -- payments are never modified.
* Calculator and renderer errors propagate unchanged; the caller decides
  what to show the user.
* PDF output is always rendered from the HTML document.

Failure modes
-------------
* ``InvalidDateError`` for impossible month/quarter requests.
* ``InvalidPeriodError`` / ``EmptyResultError`` from the calculator.
* ``EntityResolutionError`` from any renderer.
* ``ExportError`` (or ``UnsupportedExportFormatError``) from ``export``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from payment_kernel.domain.clock import Clock, SystemClock
from payment_kernel.exceptions import ExportError, UnsupportedExportFormatError
from payment_kernel.logging_config import LogContext, get_logger
from payment_kernel.selectors.base import EntityNameResolver, PaymentSource

from payment_reporting.calculator import ReportCalculator
from payment_reporting.config import ReportingConfig
from payment_reporting.models import ExportFormat, ReportPeriod, ReportResult
from payment_reporting.periods import monthly_period, quarterly_period
from payment_reporting.renderers import (
    CsvReportRenderer,
    HtmlReportRenderer,
    PdfReportExporter,
    TextReportRenderer,
)

logger = get_logger("reporting.service")


class ReportService:
    """
    Period computation, report generation and export dispatch.

    Constructor: ``source`` + ``resolver`` + optional ``clock`` / ``config``.
    All four renderers share the same resolver, clock and config.
    """

    def __init__(
        self,
        source: PaymentSource,
        resolver: EntityNameResolver,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._config = config or ReportingConfig.with_defaults()
        self._clock = clock or SystemClock()
        self.calculator = ReportCalculator(source)
        self.text_renderer = TextReportRenderer(resolver, self._config, self._clock)
        self.csv_renderer = CsvReportRenderer(resolver, self._config, self._clock)
        self.html_renderer = HtmlReportRenderer(resolver, self._config, self._clock)
        self.pdf_exporter = PdfReportExporter(self._config)

    # =========================================================================
    # Periods
    # =========================================================================

    @staticmethod
    def monthly_period(year: int, month: int) -> ReportPeriod:
        return monthly_period(year, month)

    @staticmethod
    def quarterly_period(year: int, quarter: int) -> ReportPeriod:
        return quarterly_period(year, quarter)

    # =========================================================================
    # Generation
    # =========================================================================

    def generate_report(self, period: ReportPeriod) -> ReportResult:
        """Compute the report for ``period``."""
        with LogContext.bind(report_period=period.range_text):
            return self.calculator.calculate_period(period)

    def generate_monthly_report(self, year: int, month: int) -> ReportResult:
        return self.generate_report(monthly_period(year, month))

    def generate_quarterly_report(self, year: int, quarter: int) -> ReportResult:
        return self.generate_report(quarterly_period(year, quarter))

    # =========================================================================
    # Export
    # =========================================================================

    def export(
        self,
        result: ReportResult,
        export_format: ExportFormat | str,
        destination: Path | str | TextIO | None = None,
        title: str | None = None,
    ) -> Path | None:
        """
        Write ``result`` in ``export_format``.

        ``console`` writes to ``destination`` when it is a text stream,
        otherwise to stdout, and returns None.  File formats require a path
        and return it.
        """
        fmt = self._parse_format(export_format)

        with LogContext.bind(
            report_period=result.period.range_text,
            export_format=fmt.value,
        ):
            if fmt == ExportFormat.CONSOLE:
                stream = destination if hasattr(destination, "write") else None
                self.text_renderer.write(result, stream)
                return None

            if destination is None or hasattr(destination, "write"):
                raise ExportError(None, fmt.value, "a file path is required")
            path = Path(destination)

            if fmt == ExportFormat.CSV:
                return self.csv_renderer.write(result, path)
            if fmt == ExportFormat.HTML:
                return self.html_renderer.write(result, path, title)

            html = self.html_renderer.render(result, title)
            return self.pdf_exporter.convert(html, path)

    @staticmethod
    def _parse_format(export_format: ExportFormat | str) -> ExportFormat:
        if isinstance(export_format, ExportFormat):
            return export_format
        try:
            return ExportFormat(str(export_format).lower())
        except ValueError:
            logger.warning(
                "unsupported_export_format",
                extra={"export_format": str(export_format)},
            )
            raise UnsupportedExportFormatError(str(export_format)) from None
