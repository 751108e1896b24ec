"""Report renderers: console text, CSV, HTML and HTML-derived PDF."""

from payment_reporting.renderers.csv_export import CsvReportRenderer, parse_csv_totals
from payment_reporting.renderers.html import HtmlReportRenderer
from payment_reporting.renderers.pdf import PdfReportExporter
from payment_reporting.renderers.text import TextReportRenderer

__all__ = [
    "TextReportRenderer",
    "CsvReportRenderer",
    "HtmlReportRenderer",
    "PdfReportExporter",
    "parse_csv_totals",
]
