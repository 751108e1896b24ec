"""
Structured JSON logging for payment reporting.

Each record becomes one JSON line: timestamp, level, logger name, message,
the report fields bound through ``LogContext.bind`` and the ``extra`` fields
of the call.  Records logged with ``exc_info`` also carry the exception type
and message; ``PaymentReportError`` subclasses add their ``code`` and
structured attributes as ``exc_<name>`` keys.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, TextIO

from payment_kernel.exceptions import PaymentReportError

_LOGGER_PREFIX = "payment_kernel"

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "report_period": ContextVar("log_report_period", default=None),
    "export_format": ContextVar("log_export_format", default=None),
}


class LogContext:
    """Report fields attached to every record logged while they are bound."""

    FIELDS = tuple(_CONTEXT_VARS)

    @staticmethod
    def current() -> dict[str, str]:
        values = {name: var.get() for name, var in _CONTEXT_VARS.items()}
        return {name: value for name, value in values.items() if value is not None}

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT_VARS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[None]:
        """
        Bind ``report_period`` / ``export_format`` for the enclosed block.

        None values leave the current binding alone.  Previous values are
        restored on exit, also when the block raises.
        """
        unknown = sorted(set(fields) - set(_CONTEXT_VARS))
        if unknown:
            raise TypeError(f"Unknown log context fields: {unknown}")
        tokens = [
            (_CONTEXT_VARS[name], _CONTEXT_VARS[name].set(value))
            for name, value in fields.items()
            if value is not None
        ]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}


def _to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, PaymentReportError):
        fields["exc_code"] = exc.code
        fields.update(
            (f"exc_{name}", value)
            for name, value in vars(exc).items()
            if not name.startswith("_")
        )
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.current(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``payment_kernel`` namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: TextIO | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """Install the JSON handler on the ``payment_kernel`` logger; later calls are no-ops."""
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level)
    root.propagate = False

    target = handler or logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(StructuredFormatter())
    root.addHandler(target)


def reset_logging() -> None:
    """Drop the installed handler so ``configure_logging`` runs again. FOR TESTING ONLY."""
    global _configured
    _configured = False
    root = logging.getLogger(_LOGGER_PREFIX)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
