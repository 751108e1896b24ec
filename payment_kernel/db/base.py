"""
Module: payment_kernel.db.base
Responsibility: Declarative base for the payment ORM models.
Architecture position: Kernel > DB.  Lowest-level import target for models/.
    MUST NOT import from models/, selectors/ or the reporting package.

Invariants enforced:
    - Decimal maps to Numeric(19, 2): payment amounts are stored with exactly
      two decimal places and read back as Decimal.  NEVER use float.
    - Integer primary keys, matching the identifiers users see in reports.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import DateTime, Integer, Numeric
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for all payment models.

    Guarantees:
        - id is an integer primary key.
        - Decimal columns are Numeric(19, 2) with Decimal results.
        - datetime columns are naive local timestamps, as recorded by the
          payment entry screens.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(19, 2, asdecimal=True),
        datetime: DateTime(timezone=False),
    }

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
