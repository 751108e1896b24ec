"""Selectors for the payment kernel (read side)."""

from payment_kernel.selectors.base import EntityNameResolver, PaymentSource
from payment_kernel.selectors.party_selector import PartySelector
from payment_kernel.selectors.payment_selector import PaymentSelector

__all__ = [
    "PaymentSource",
    "EntityNameResolver",
    "PaymentSelector",
    "PartySelector",
]
