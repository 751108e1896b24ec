"""
Module: payment_kernel.models.payment
Responsibility: ORM persistence for payment transactions.
Architecture position: Kernel > Models.  May import from db/ and domain/ only.

Invariants enforced:
    - amount is Numeric(19, 2) -- never float.
    - ck_payment_single_party: exactly one of employee_id / counterparty_id
      is set.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Text, func
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from payment_kernel.db.base import Base
from payment_kernel.domain.payment import (
    PaymentCategory,
    PaymentDirection,
    PaymentRecord,
    PaymentStatus,
)


class Payment(Base):
    """A recorded payment."""

    __tablename__ = "payments"

    __table_args__ = (
        CheckConstraint(
            "(employee_id IS NULL) <> (counterparty_id IS NULL)",
            name="ck_payment_single_party",
        ),
        Index("idx_payment_created_at", "created_at"),
    )

    amount: Mapped[Decimal] = mapped_column(nullable=False)
    direction: Mapped[PaymentDirection] = mapped_column(
        SAEnum(PaymentDirection, native_enum=False, length=20),
        nullable=False,
    )
    category: Mapped[PaymentCategory] = mapped_column(
        SAEnum(PaymentCategory, native_enum=False, length=20),
        nullable=False,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(PaymentStatus, native_enum=False, length=20),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(nullable=True)
    employee_id: Mapped[int | None] = mapped_column(
        ForeignKey("employees.id"),
        nullable=True,
    )
    counterparty_id: Mapped[int | None] = mapped_column(
        ForeignKey("counterparties.id"),
        nullable=True,
    )

    def to_record(self) -> PaymentRecord:
        """Snapshot this row as an immutable PaymentRecord."""
        return PaymentRecord(
            payment_id=self.id,
            amount=Decimal(self.amount),
            direction=self.direction,
            category=self.category,
            status=self.status,
            created_by=self.created_by,
            created_at=self.created_at,
            description=self.description,
            updated_at=self.updated_at,
            employee_id=self.employee_id,
            counterparty_id=self.counterparty_id,
        )

    def __repr__(self) -> str:
        return (
            f"<Payment {self.id}: {self.direction.value} {self.amount} "
            f"{self.category.value}>"
        )
