"""
Tests for ReportService.

Period computation, generation and export dispatch over the in-memory
payment source.
"""

from __future__ import annotations

import io
from datetime import date

import pytest

from payment_kernel.exceptions import (
    CounterpartyNotFoundError,
    EmptyResultError,
    ExportError,
    InvalidDateError,
    UnsupportedExportFormatError,
)
from payment_reporting.models import ExportFormat, PeriodKind
from payment_reporting.renderers.csv_export import parse_csv_totals
from payment_reporting.service import ReportService


@pytest.fixture
def service(payment_source, resolver, deterministic_clock, reporting_config):
    return ReportService(payment_source, resolver, deterministic_clock, reporting_config)


class TestPeriods:

    def test_monthly_period(self, service):
        period = service.monthly_period(2024, 2)
        assert (period.start_date, period.end_date) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_quarterly_period(self, service):
        period = service.quarterly_period(2024, 4)
        assert (period.start_date, period.end_date) == (date(2024, 10, 1), date(2024, 12, 31))

    def test_invalid_month(self, service, payment_source):
        with pytest.raises(InvalidDateError):
            service.generate_monthly_report(2024, 13)
        assert payment_source.calls == []


class TestGenerate:

    def test_monthly_report(self, service, payment_source):
        result = service.generate_monthly_report(2024, 1)
        assert result.period.kind == PeriodKind.MONTHLY
        assert result.transaction_count == 2
        assert payment_source.calls == [(date(2024, 1, 1), date(2024, 1, 31))]

    def test_quarterly_report(self, service, payment_source):
        result = service.generate_quarterly_report(2024, 1)
        assert result.period.kind == PeriodKind.QUARTERLY
        assert result.period.label == "Q1 2024"
        # (1000 + 400) / 91 days
        assert str(result.average_daily_value) == "15.38"
        assert payment_source.calls == [(date(2024, 1, 1), date(2024, 3, 31))]

    def test_empty_period_propagates(self, service):
        with pytest.raises(EmptyResultError):
            service.generate_quarterly_report(2024, 2)

    def test_generate_report_matches_calculator(self, service):
        period = service.monthly_period(2024, 1)
        assert service.generate_report(period) == service.calculator.calculate_period(period)


class TestExport:

    def test_console_to_stream(self, service, january_result):
        stream = io.StringIO()
        assert service.export(january_result, ExportFormat.CONSOLE, stream) is None
        assert stream.getvalue() == service.text_renderer.render(january_result)

    def test_console_defaults_to_stdout(self, service, january_result, capsys):
        service.export(january_result, "console")
        assert "MONTHLY FINANCIAL REPORT" in capsys.readouterr().out

    def test_csv(self, service, january_result, tmp_path):
        path = service.export(january_result, "csv", tmp_path / "r.csv")
        parsed = parse_csv_totals(path.read_text(encoding="utf-8"))
        assert parsed["aggregate"]["Net Balance"] == january_result.net_balance

    def test_html_title(self, service, january_result, tmp_path):
        path = service.export(january_result, ExportFormat.HTML, str(tmp_path / "r.html"), title="Q")
        assert "<title>Q</title>" in path.read_text(encoding="utf-8")

    def test_pdf_rendered_from_html(self, service, january_result, tmp_path, monkeypatch):
        seen = {}
        convert = service.pdf_exporter.convert

        def spy(html, destination):
            seen["html"] = html
            return convert(html, destination)

        monkeypatch.setattr(service.pdf_exporter, "convert", spy)
        path = service.export(january_result, "PDF", tmp_path / "r.pdf")

        assert path.read_bytes().startswith(b"%PDF-")
        assert seen["html"] == service.html_renderer.render(january_result)

    def test_pdf_resolution_failure_writes_nothing(self, service, january_result,
                                                   resolver, tmp_path):
        del resolver.counterparties[7]
        with pytest.raises(CounterpartyNotFoundError):
            service.export(january_result, "pdf", tmp_path / "r.pdf")
        assert list(tmp_path.iterdir()) == []

    def test_unknown_format(self, service, january_result, captured_logs):
        with pytest.raises(UnsupportedExportFormatError) as exc_info:
            service.export(january_result, "xlsx", "r.xlsx")
        assert exc_info.value.export_format == "xlsx"
        assert any(r["message"] == "unsupported_export_format" for r in captured_logs())

    @pytest.mark.parametrize("fmt", ["csv", "html", "pdf"])
    def test_file_format_requires_destination(self, service, january_result, fmt):
        with pytest.raises(ExportError, match="a file path is required"):
            service.export(january_result, fmt)

    def test_export_logs_carry_context(self, service, january_result, tmp_path, captured_logs):
        service.export(january_result, "csv", tmp_path / "r.csv")
        [record] = [r for r in captured_logs() if r["message"] == "report_exported"]
        assert record["export_format"] == "csv"
        assert record["report_period"] == "2024-01-01 to 2024-01-31"
