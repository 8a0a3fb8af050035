"""
Movement model — Immutable ledger of stock receipts and issues.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import MovementKind


IMMUTABLE_MESSAGE = (
    "Movements are immutable. "
    "To correct stock, record a new movement in the opposite direction."
)


class MovementQuerySet(models.QuerySet):
    """Append-only queryset: bulk update and delete are refused."""

    def update(self, **kwargs):
        raise ValueError(IMMUTABLE_MESSAGE)

    def delete(self):
        raise ValueError(IMMUTABLE_MESSAGE)

    def for_product(self, product_id):
        return self.filter(product_id=product_id)

    def in_commit_order(self):
        return self.order_by('sequence')

    def newest_first(self):
        return self.order_by('-sequence')


class Movement(models.Model):
    """
    Immutable record of a quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new Movements in the opposite direction
    - Created only inside StockMovements.record_movement(), in the same
      transaction that updates Product._quantity

    sequence is the product's commit position (1, 2, 3, ...) and equals
    Product.version right after this movement committed.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        'stockledger.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Product'),
    )
    kind = models.CharField(
        max_length=10,
        choices=MovementKind.choices,
        verbose_name=_('Kind'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))
    balance_after = models.PositiveIntegerField(
        verbose_name=_('Balance after'),
        help_text=_('Product quantity right after this movement committed'),
    )
    sequence = models.PositiveIntegerField(verbose_name=_('Sequence'))

    note = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Note'))
    # Supplier (receipt) or customer (issue); owned by an external directory
    counterparty_id = models.UUIDField(null=True, blank=True, verbose_name=_('Counterparty'))

    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Timestamp'))
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Created by'),
    )

    objects = MovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movement')
        verbose_name_plural = _('Movements')
        ordering = ['product', 'sequence']
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'sequence'],
                name='stockledger_movement_unique_sequence',
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='stockledger_movement_quantity_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(kind__in=MovementKind.values),
                name='stockledger_movement_kind_valid',
            ),
        ]

    @property
    def kind_enum(self) -> MovementKind:
        return MovementKind(self.kind)

    @property
    def signed_change(self) -> int:
        return self.kind_enum.signed(self.quantity)

    def save(self, *args, **kwargs):
        """Insert only."""
        if not self._state.adding:
            raise ValueError(IMMUTABLE_MESSAGE)
        kwargs['force_insert'] = True
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError(IMMUTABLE_MESSAGE)

    def __str__(self) -> str:
        change = self.signed_change
        signal = '+' if change > 0 else ''
        return f"{signal}{change} → {self.balance_after}"
