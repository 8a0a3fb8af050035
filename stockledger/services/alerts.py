"""
Stock alerts — products at or below their minimum stock.

Usage:
    from stockledger.services.alerts import check_low_stock

    # Run periodically (celery beat, cron) or to feed a dashboard
    low = check_low_stock()
    # Returns list of ProductSnapshot

min_stock is informational: an alert never blocks a movement.
"""

import logging

from stockledger.models.product import Product
from stockledger.validation import coerce_id
from stockledger.values import ProductSnapshot

logger = logging.getLogger('stockledger')


def check_low_stock(product_id=None, log: bool = True) -> list[ProductSnapshot]:
    """
    Products whose quantity is at or below min_stock.

    Args:
        product_id: Optional product to check (None = all).
        log: Emit a warning per low product.

    Returns:
        List of ProductSnapshot, by SKU.
    """
    qs = Product.objects.low_stock()
    if product_id is not None:
        pk = coerce_id(product_id)
        if pk is None:
            return []
        qs = qs.filter(pk=pk)

    low = [ProductSnapshot.from_product(p) for p in qs]

    if log:
        for snapshot in low:
            logger.warning(
                "stock.low_stock",
                extra={
                    "product_id": str(snapshot.product_id),
                    "sku": snapshot.sku,
                    "quantity": snapshot.quantity,
                    "min_stock": snapshot.min_stock,
                },
            )

    return low
