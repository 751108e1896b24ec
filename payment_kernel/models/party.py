"""
Module: payment_kernel.models.party
Responsibility: ORM persistence for the parties a payment can reference:
    employees (salary payments) and counterparties (vendors and clients).
Architecture position: Kernel > Models.  May import from db/ and domain/ only.

Audit relevance:
    Reports print party names resolved from these tables.  A payment whose
    employee_id or counterparty_id has no row here is a referential integrity
    fault and aborts report rendering.
"""

from datetime import datetime

from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column

from payment_kernel.db.base import Base
from payment_kernel.domain.payment import PartyType


class Employee(Base):
    """An employee who receives salary payments."""

    __tablename__ = "employees"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    def __repr__(self) -> str:
        return f"<Employee {self.id}: {self.name}>"


class Counterparty(Base):
    """External vendor or client."""

    __tablename__ = "counterparties"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    party_type: Mapped[PartyType] = mapped_column(
        SAEnum(PartyType, native_enum=False, length=20),
        nullable=False,
    )
    mobile: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    def __repr__(self) -> str:
        return f"<Counterparty {self.id}: {self.name} ({self.party_type.value})>"
