"""ORM models for payments and the parties they reference."""

from payment_kernel.models.party import Counterparty, Employee
from payment_kernel.models.payment import Payment

__all__ = ["Employee", "Counterparty", "Payment"]
