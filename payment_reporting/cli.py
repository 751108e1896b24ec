"""
Command-line report generation.

Usage:
    payment-report --database-url sqlite:///payments.db monthly 2024 1
    payment-report --database-url ... quarterly 2024 1 --format csv --format pdf --output reports/

Console output is the default.  File formats are written to ``--output``
as ``payment_report_<period>.<ext>``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from payment_kernel.db.engine import init_engine_from_url, session_scope
from payment_kernel.exceptions import EmptyResultError, PaymentReportError
from payment_kernel.logging_config import configure_logging, get_logger
from payment_kernel.selectors import PartySelector, PaymentSelector

from payment_reporting.config import ReportingConfig
from payment_reporting.models import ExportFormat, PeriodKind, ReportPeriod
from payment_reporting.service import ReportService

logger = get_logger("reporting.cli")

EMPTY_MESSAGE = "No payments found for the selected period."

FILE_EXTENSIONS = {
    ExportFormat.CSV: "csv",
    ExportFormat.HTML: "html",
    ExportFormat.PDF: "pdf",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payment-report",
        description="Generate monthly or quarterly payment reports.",
    )
    parser.add_argument(
        "--database-url", required=True,
        help="SQLAlchemy database URL, e.g. sqlite:///payments.db",
    )
    parser.add_argument(
        "--format", dest="formats", action="append",
        choices=[f.value for f in ExportFormat],
        help="Output format; repeat for several (default: console)",
    )
    parser.add_argument(
        "--output", type=Path, default=Path("."),
        help="Directory for csv/html/pdf files (default: current directory)",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="YAML file with reporting options",
    )
    parser.add_argument(
        "--title", default=None,
        help="Document title for html/pdf output",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Emit structured debug logs on stderr",
    )

    periods = parser.add_subparsers(dest="period", required=True)
    monthly = periods.add_parser("monthly", help="Report for one calendar month")
    monthly.add_argument("year", type=int)
    monthly.add_argument("month", type=int)
    quarterly = periods.add_parser("quarterly", help="Report for one calendar quarter")
    quarterly.add_argument("year", type=int)
    quarterly.add_argument("quarter", type=int)
    return parser


def output_name(period: ReportPeriod) -> str:
    """``payment_report_2024-01`` / ``payment_report_2024-Q1`` / a date range."""
    if period.kind == PeriodKind.MONTHLY:
        return f"payment_report_{period.start_date.strftime('%Y-%m')}"
    if period.kind == PeriodKind.QUARTERLY:
        return f"payment_report_{period.start_date.year}-Q{period.quarter}"
    return (
        f"payment_report_{period.start_date.isoformat()}"
        f"_{period.end_date.isoformat()}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    formats = [ExportFormat(f) for f in (args.formats or [ExportFormat.CONSOLE.value])]

    try:
        config = (
            ReportingConfig.from_yaml(args.config)
            if args.config is not None
            else ReportingConfig.with_defaults()
        )
    except (OSError, ValueError) as exc:
        print(f"ERROR: Invalid configuration: {exc}", file=sys.stderr)
        return 1

    try:
        init_engine_from_url(args.database_url)
        with session_scope() as session:
            service = ReportService(
                PaymentSelector(session),
                PartySelector(session),
                config=config,
            )
            if args.period == "monthly":
                period = service.monthly_period(args.year, args.month)
            else:
                period = service.quarterly_period(args.year, args.quarter)

            result = service.generate_report(period)

            if any(fmt in FILE_EXTENSIONS for fmt in formats):
                args.output.mkdir(parents=True, exist_ok=True)
            for fmt in formats:
                if fmt == ExportFormat.CONSOLE:
                    service.export(result, fmt, sys.stdout)
                    continue
                path = args.output / f"{output_name(period)}.{FILE_EXTENSIONS[fmt]}"
                service.export(result, fmt, path, title=args.title)
                print(f"{fmt.value.upper()} report written to {path}")
    except EmptyResultError:
        print(EMPTY_MESSAGE)
        return 0
    except PaymentReportError as exc:
        logger.error("report_command_failed", extra={"error_code": exc.code})
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except SQLAlchemyError as exc:
        logger.error("report_database_error", extra={"error_type": type(exc).__name__})
        print(f"ERROR: Database error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
