"""
Stock audit — check the cached quantities against the ledger.

For every product, quantity must equal the signed sum of its movements
and version must equal their count. The audit only reports: quantity
has a single writer, StockMovements.record_movement().
"""

import logging

from stockledger.models.product import Product
from stockledger.services.ledger import LedgerStore
from stockledger.validation import coerce_id
from stockledger.values import LedgerDiscrepancy

logger = logging.getLogger('stockledger')


class StockAudit:
    """Integrity audit methods."""

    @classmethod
    def verify(cls, product_id=None) -> list[LedgerDiscrepancy]:
        """
        Products whose cache disagrees with their ledger.

        Args:
            product_id: Optional product to check (None = all).

        Returns:
            List of LedgerDiscrepancy, empty when the ledger is consistent
        """
        products = Product.objects.all()
        if product_id is not None:
            pk = coerce_id(product_id)
            if pk is None:
                return []
            products = products.filter(pk=pk)

        products = list(products)
        totals = LedgerStore.totals_by_product([p.pk for p in products])

        discrepancies = []
        for product in products:
            total, count = totals.get(product.pk, (0, 0))
            if total == product._quantity and count == product.version:
                continue

            discrepancy = LedgerDiscrepancy(
                product_id=product.pk,
                sku=product.sku,
                cached_quantity=product._quantity,
                ledger_quantity=total,
                cached_version=product.version,
                ledger_count=count,
            )
            discrepancies.append(discrepancy)
            logger.warning(
                "stock.audit.discrepancy",
                extra={
                    "product_id": str(product.pk),
                    "sku": product.sku,
                    "cached": product._quantity,
                    "ledger": total,
                    "diff": discrepancy.difference,
                },
            )

        return discrepancies
