"""
Product model — On-hand quantity cache per product.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


# Written only by StockMovements.record_movement()
GUARDED_FIELDS = frozenset({'_quantity', 'version'})


class ProductQuerySet(models.QuerySet):

    def low_stock(self):
        """Products at or below their minimum stock threshold."""
        return self.filter(_quantity__lte=models.F('min_stock'))


class Product(models.Model):
    """
    Stock-bearing product.

    Performance:
    - _quantity is a cache of the signed sum of the product's Movements
    - version counts committed Movements and doubles as the CAS token
    - Read is O(1), not O(N)

    Catalog data (categories, prices, images) lives elsewhere; this model
    only carries what the ledger needs.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sku = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('SKU'),
    )
    name = models.CharField(max_length=100, verbose_name=_('Name'))
    min_stock = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Minimum stock'),
        help_text=_('Informational. Never blocks a movement.'),
    )

    # Quantity cache (written only by the quantity guard)
    _quantity = models.IntegerField(default=0, editable=False, verbose_name=_('Quantity'))
    version = models.PositiveIntegerField(default=0, editable=False, verbose_name=_('Version'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['sku']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(_quantity__gte=0),
                name='stockledger_product_quantity_non_negative',
            ),
        ]

    @property
    def quantity(self) -> int:
        """On-hand quantity — O(1) cache read."""
        return self._quantity

    @property
    def is_low_stock(self) -> bool:
        return self._quantity <= self.min_stock

    def save(self, *args, **kwargs):
        """Save catalog fields. Quantity and version are never written here."""
        if self._state.adding:
            if self._quantity != 0 or self.version != 0:
                raise ValueError(
                    "Products start empty. Record a receipt for opening stock."
                )
            return super().save(*args, **kwargs)

        update_fields = kwargs.get('update_fields')
        if update_fields is None:
            update_fields = [
                f.name for f in self._meta.concrete_fields
                if not f.primary_key
            ]
        kwargs['update_fields'] = [
            name for name in update_fields if name not in GUARDED_FIELDS
        ]
        return super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.sku} — {self.name}"
