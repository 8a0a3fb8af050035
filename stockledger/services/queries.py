"""
Stock queries — read-only operations.

All methods are classmethod on Stock and use no locking.
"""

from stockledger.models.product import Product
from stockledger.validation import coerce_id
from stockledger.values import ProductSnapshot


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def get_product(cls, product_id) -> ProductSnapshot | None:
        """Snapshot of a product's stock state, or None if unknown."""
        pk = coerce_id(product_id)
        if pk is None:
            return None
        product = Product.objects.filter(pk=pk).first()
        return ProductSnapshot.from_product(product) if product else None

    @classmethod
    def quantity(cls, product_id) -> int:
        """
        On-hand quantity.

        Returns 0 for unknown products, like an empty one.
        """
        pk = coerce_id(product_id)
        if pk is None:
            return 0
        value = Product.objects.filter(pk=pk).values_list('_quantity', flat=True).first()
        return value or 0

    @classmethod
    def list_products(cls, include_empty: bool = True) -> list[ProductSnapshot]:
        """All products, by SKU."""
        qs = Product.objects.all()
        if not include_empty:
            qs = qs.filter(_quantity__gt=0)
        return [ProductSnapshot.from_product(p) for p in qs]
