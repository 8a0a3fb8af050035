"""
Enums for Stock Ledger models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementKind(models.TextChoices):
    """
    Direction of a stock movement.

    RECEIPT: Stock enters the warehouse (purchase, return from customer).
             Counterparty, if any, is a supplier.
    ISSUE:   Stock leaves the warehouse (sale, write-off).
             Counterparty, if any, is a customer.
    """
    RECEIPT = 'receipt', _('Receipt')
    ISSUE = 'issue', _('Issue')

    @property
    def sign(self) -> int:
        return 1 if self is MovementKind.RECEIPT else -1

    def signed(self, quantity: int) -> int:
        """Quantity with the sign this kind contributes to the balance."""
        return self.sign * quantity
