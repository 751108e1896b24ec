"""
Module: payment_kernel.selectors.party_selector
Responsibility: Resolve employee and counterparty identifiers to display
    names.  Implements the EntityNameResolver contract.
Architecture position: Kernel > Selectors.

Failure modes:
    - EmployeeNotFoundError / CounterpartyNotFoundError for unknown ids.
      These are referential integrity faults, not user errors.
"""

from sqlalchemy.orm import Session

from payment_kernel.domain.payment import PartyType
from payment_kernel.exceptions import CounterpartyNotFoundError, EmployeeNotFoundError
from payment_kernel.logging_config import get_logger
from payment_kernel.models.party import Counterparty, Employee
from payment_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.party")


class PartySelector(BaseSelector):
    """
    Name lookups for report rendering.

    Lookups are memoised per selector instance; a report resolves the same
    party once per section.
    """

    def __init__(self, session: Session):
        super().__init__(session)
        self._employee_names: dict[int, str] = {}
        self._counterparties: dict[int, tuple[str, PartyType]] = {}

    def resolve_employee_name(self, employee_id: int) -> str:
        if employee_id not in self._employee_names:
            employee = self.session.get(Employee, employee_id)
            if employee is None:
                logger.error(
                    "employee_resolution_failed",
                    extra={"employee_id": employee_id},
                )
                raise EmployeeNotFoundError(employee_id)
            self._employee_names[employee_id] = employee.name
        return self._employee_names[employee_id]

    def resolve_counterparty(self, counterparty_id: int) -> tuple[str, PartyType]:
        if counterparty_id not in self._counterparties:
            counterparty = self.session.get(Counterparty, counterparty_id)
            if counterparty is None:
                logger.error(
                    "counterparty_resolution_failed",
                    extra={"counterparty_id": counterparty_id},
                )
                raise CounterpartyNotFoundError(counterparty_id)
            self._counterparties[counterparty_id] = (
                counterparty.name,
                PartyType(counterparty.party_type),
            )
        return self._counterparties[counterparty_id]
