"""
Payment value objects (``payment_kernel.domain.payment``).

Responsibility
--------------
Immutable snapshot of a payment transaction as consumed by the reporting
engine, plus the enums shared by persistence and reporting.  Selectors
convert ORM rows into ``PaymentRecord`` so that nothing downstream holds a
live reference to a database session.

Invariants enforced
-------------------
* ``amount`` is a ``Decimal`` -- NEVER ``float``.
* Exactly one of ``employee_id`` / ``counterparty_id`` is set:
  ``employee_id`` for SALARY payments, ``counterparty_id`` otherwise.

Failure modes
-------------
* ``TypeError`` when ``amount`` is not a ``Decimal``.
* ``ValueError`` when the party references violate the invariant above.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class PaymentDirection(str, Enum):
    """Whether money comes in or goes out."""

    INCOMING = "INCOMING"
    OUTGOING = "OUTGOING"


class PaymentCategory(str, Enum):
    """Business purpose of a payment."""

    SALARY = "SALARY"
    VENDOR_PAYMENT = "VENDOR_PAYMENT"
    CLIENT_INVOICE = "CLIENT_INVOICE"


class PaymentStatus(str, Enum):
    """Payment lifecycle status."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"


class PartyType(str, Enum):
    """Kind of external counterparty."""

    VENDOR = "VENDOR"
    CLIENT = "CLIENT"


@dataclass(frozen=True)
class PaymentRecord:
    """A single payment transaction."""

    payment_id: int
    amount: Decimal
    direction: PaymentDirection
    category: PaymentCategory
    status: PaymentStatus
    created_by: int
    created_at: datetime
    description: str | None = None
    updated_at: datetime | None = None
    employee_id: int | None = None
    counterparty_id: int | None = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise TypeError(
                f"Payment {self.payment_id}: amount must be Decimal, "
                f"got {type(self.amount).__name__}"
            )
        has_employee = self.employee_id is not None
        has_counterparty = self.counterparty_id is not None
        if has_employee and has_counterparty:
            raise ValueError(
                f"Payment {self.payment_id}: employee and counterparty "
                "references are mutually exclusive"
            )
        if self.category == PaymentCategory.SALARY and not has_employee:
            raise ValueError(
                f"Payment {self.payment_id}: SALARY payments require an employee"
            )
        if self.category != PaymentCategory.SALARY and not has_counterparty:
            raise ValueError(
                f"Payment {self.payment_id}: {self.category.value} payments "
                "require a counterparty"
            )

    @property
    def is_employee_payment(self) -> bool:
        return self.employee_id is not None

    @property
    def party_id(self) -> int:
        """Employee id for salary payments, counterparty id otherwise."""
        if self.employee_id is not None:
            return self.employee_id
        return self.counterparty_id

    @property
    def created_on(self) -> date:
        """Calendar day of creation."""
        return self.created_at.date()
