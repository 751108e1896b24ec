"""
Pytest fixtures for the payment reporting test suite.

Provides:
- Structured logging configuration and log capture
- Deterministic clock
- In-memory payment source and entity name resolver
- SQLite in-memory sessions for selector tests
- The January 2024 reference scenario
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

import payment_kernel.models  # noqa: F401  registers mappers
from payment_kernel.db.base import Base
from payment_kernel.domain.clock import DeterministicClock
from payment_kernel.domain.payment import (
    PartyType,
    PaymentCategory,
    PaymentDirection,
    PaymentRecord,
    PaymentStatus,
)
from payment_kernel.exceptions import CounterpartyNotFoundError, EmployeeNotFoundError
from payment_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

from payment_reporting.calculator import ReportCalculator
from payment_reporting.config import ReportingConfig
from payment_reporting.models import PeriodKind

FIXED_NOW = datetime(2024, 2, 1, 9, 30, 0, tzinfo=timezone.utc)

EMPLOYEE_ID = 3
COUNTERPARTY_ID = 7


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture payment_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, payment_source):
            ReportCalculator(payment_source).calculate_report(...)
            logs = captured_logs()
            assert any(r["message"] == "report_calculated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payment_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock / config fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def reporting_config() -> ReportingConfig:
    return ReportingConfig(entity_name="Acme Payments")


# =============================================================================
# In-memory collaborators
# =============================================================================


class FakePaymentSource:
    """PaymentSource over a fixed list; records every query."""

    def __init__(self, payments: list[PaymentRecord] | None = None):
        self.payments = list(payments or [])
        self.calls: list[tuple[date, date]] = []

    def fetch_by_date_range(self, start_date: date, end_date: date) -> list[PaymentRecord]:
        self.calls.append((start_date, end_date))
        return [
            p for p in self.payments
            if start_date <= p.created_on <= end_date
        ]


class FakeResolver:
    """EntityNameResolver over dicts; unknown ids raise like PartySelector."""

    def __init__(
        self,
        employees: dict[int, str] | None = None,
        counterparties: dict[int, tuple[str, PartyType]] | None = None,
    ):
        self.employees = dict(employees or {})
        self.counterparties = dict(counterparties or {})

    def resolve_employee_name(self, employee_id: int) -> str:
        if employee_id not in self.employees:
            raise EmployeeNotFoundError(employee_id)
        return self.employees[employee_id]

    def resolve_counterparty(self, counterparty_id: int) -> tuple[str, PartyType]:
        if counterparty_id not in self.counterparties:
            raise CounterpartyNotFoundError(counterparty_id)
        return self.counterparties[counterparty_id]


def make_payment(
    payment_id: int,
    amount: str,
    direction: PaymentDirection,
    category: PaymentCategory,
    created_at: datetime,
    *,
    employee_id: int | None = None,
    counterparty_id: int | None = None,
    description: str | None = None,
    status: PaymentStatus = PaymentStatus.COMPLETED,
) -> PaymentRecord:
    return PaymentRecord(
        payment_id=payment_id,
        amount=Decimal(amount),
        direction=direction,
        category=category,
        status=status,
        created_by=1,
        created_at=created_at,
        description=description,
        employee_id=employee_id,
        counterparty_id=counterparty_id,
    )


@pytest.fixture
def payment_factory():
    """Build PaymentRecord instances with test defaults."""
    return make_payment


@pytest.fixture
def january_payments() -> list[PaymentRecord]:
    """1000.00 incoming client invoice and 400.00 outgoing salary."""
    return [
        make_payment(
            1, "1000.00", PaymentDirection.INCOMING, PaymentCategory.CLIENT_INVOICE,
            datetime(2024, 1, 10, 11, 15),
            counterparty_id=COUNTERPARTY_ID,
            description="Invoice INV-001",
        ),
        make_payment(
            2, "400.00", PaymentDirection.OUTGOING, PaymentCategory.SALARY,
            datetime(2024, 1, 31, 18, 0),
            employee_id=EMPLOYEE_ID,
            description="January salary",
        ),
    ]


@pytest.fixture
def payment_source(january_payments) -> FakePaymentSource:
    return FakePaymentSource(january_payments)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver(
        employees={EMPLOYEE_ID: "Asha Verma"},
        counterparties={COUNTERPARTY_ID: ("Acme Traders", PartyType.CLIENT)},
    )


@pytest.fixture
def january_result(payment_source):
    return ReportCalculator(payment_source).calculate_report(
        date(2024, 1, 1), date(2024, 1, 31), PeriodKind.MONTHLY,
    )


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """SQLite in-memory session with all payment tables created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    db = factory()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
