"""
Module: payment_kernel.selectors.base
Responsibility: Read-side contracts consumed by the report engine and the
    base class for SQLAlchemy selectors implementing them.
Architecture position: Kernel > Selectors.  Selectors NEVER create, modify
    or delete data.

Contracts:
    PaymentSource.fetch_by_date_range -- inclusive, day-granularity range;
        stable ordering that callers preserve verbatim.
    EntityNameResolver -- unknown identifiers raise EmployeeNotFoundError /
        CounterpartyNotFoundError.  Callers treat these as fatal.
"""

from abc import ABC
from datetime import date
from typing import Protocol

from sqlalchemy.orm import Session

from payment_kernel.domain.payment import PartyType, PaymentRecord


class PaymentSource(Protocol):
    """Provides payment records created within a date range."""

    def fetch_by_date_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[PaymentRecord]:
        ...


class EntityNameResolver(Protocol):
    """Resolves party identifiers to display names."""

    def resolve_employee_name(self, employee_id: int) -> str:
        ...

    def resolve_counterparty(self, counterparty_id: int) -> tuple[str, PartyType]:
        ...


class BaseSelector(ABC):
    """
    Base class for read-only selectors.

    The caller owns the session and its transaction scope; selectors never
    commit, flush, add or delete.
    """

    def __init__(self, session: Session):
        self.session = session
