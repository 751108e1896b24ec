"""
HTML to PDF conversion.

The PDF is always derived from the HTML report so both outputs show the same
figures.  Conversion goes through fpdf2's HTML support:

1. The document must parse as well-formed XML; a malformed document raises
   ``ExportError`` instead of producing a silently truncated PDF.
2. The ``<body>`` markup is laid out on A4 pages with automatic page breaks.
3. Without a configured TTF font only latin-1 text can be drawn, so the
   currency symbol is replaced by ``pdf_currency_fallback`` and any other
   non latin-1 character by ``?`` (logged).
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from payment_kernel.exceptions import ExportError
from payment_kernel.logging_config import get_logger

from payment_reporting.config import ReportingConfig
from payment_reporting.models import ExportFormat
from payment_reporting.renderers.files import write_atomically

logger = get_logger("reporting.renderers.pdf")

_BODY_RE = re.compile(r"<body[^>]*>(.*)</body>", re.DOTALL | re.IGNORECASE)

CORE_FONT = "helvetica"
CUSTOM_FONT = "ReportFont"


class PdfReportExporter:
    """Converts a rendered HTML report into a paginated PDF file."""

    def __init__(self, config: ReportingConfig | None = None):
        self._config = config or ReportingConfig.with_defaults()

    def convert(self, html: str, destination: Path | str) -> Path:
        """
        Convert ``html`` and write the PDF to ``destination``.

        Raises:
            ExportError: the document is malformed, fpdf2 cannot lay it out,
                or the file cannot be written.  No partial file is left.
        """
        path = Path(destination)
        try:
            data = self.to_bytes(html)
            write_atomically(path, data)
        except (ET.ParseError, FPDFException, ValueError, OSError) as exc:
            logger.error(
                "export_failed",
                extra={"destination": str(path), "export_format": ExportFormat.PDF.value},
                exc_info=True,
            )
            raise ExportError(str(path), ExportFormat.PDF.value, str(exc)) from exc

        logger.info(
            "report_exported",
            extra={
                "destination": str(path),
                "export_format": ExportFormat.PDF.value,
                "size_bytes": len(data),
            },
        )
        return path

    def to_bytes(self, html: str) -> bytes:
        return bytes(self.layout(html).output())

    def layout(self, html: str) -> FPDF:
        """Lay out the body of ``html`` on A4 pages without writing anything."""
        body = extract_body(html)

        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.set_margins(12, 12, 12)

        if self._config.pdf_font_path:
            for style in ("", "B", "I", "BI"):
                pdf.add_font(CUSTOM_FONT, style=style, fname=self._config.pdf_font_path)
            family = CUSTOM_FONT
        else:
            body = self._sanitize(body)
            family = CORE_FONT

        pdf.add_page()
        pdf.set_font(family, size=9)
        pdf.write_html(body)
        return pdf

    def _sanitize(self, text: str) -> str:
        text = text.replace(
            self._config.currency_symbol, self._config.pdf_currency_fallback
        )
        encoded = text.encode("latin-1", errors="replace")
        replaced = sum(
            1 for original, kept in zip(text, encoded.decode("latin-1"))
            if original != kept
        )
        if replaced:
            logger.warning(
                "pdf_characters_replaced",
                extra={"replaced_count": replaced},
            )
        return encoded.decode("latin-1")


def extract_body(html: str) -> str:
    """
    Validate ``html`` as well-formed markup and return the body contents.

    Raises:
        xml.etree.ElementTree.ParseError: the document is not well formed.
        ValueError: the document has no body.
    """
    ET.fromstring(html)
    match = _BODY_RE.search(html)
    if match is None:
        raise ValueError("HTML document has no <body> element")
    return match.group(1)
