"""
Module: payment_kernel.selectors.payment_selector
Responsibility: Read-only payment queries.  The authoritative Payment Source
    for report generation.
Architecture position: Kernel > Selectors.

Guarantees:
    - Range queries are inclusive at day granularity: the calendar date of
      created_at is compared, so a payment stamped at 00:00:00 on start_date
      or at any time on end_date is included, whatever text format the
      backend stored the timestamp in.
    - Results are ordered by created_at, then id, so repeated queries over an
      unchanged table return identical lists.
    - Rows are returned as immutable PaymentRecord snapshots, never as ORM
      instances.
"""

from datetime import date

from sqlalchemy import Date, func, select
from sqlalchemy.orm import Session

from payment_kernel.domain.payment import PaymentRecord
from payment_kernel.logging_config import get_logger
from payment_kernel.models.payment import Payment
from payment_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.payment")


class PaymentSelector(BaseSelector):
    """Selector for payment queries."""

    def __init__(self, session: Session):
        super().__init__(session)

    def fetch_by_date_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[PaymentRecord]:
        """All payments created within [start_date, end_date], oldest first."""
        created_on = func.date(Payment.created_at, type_=Date)
        query = (
            select(Payment)
            .where(created_on.between(start_date, end_date))
            .order_by(Payment.created_at, Payment.id)
        )
        records = [row.to_record() for row in self.session.scalars(query)]

        logger.debug(
            "payments_fetched",
            extra={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "payment_count": len(records),
            },
        )
        return records
