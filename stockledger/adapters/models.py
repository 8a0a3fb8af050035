"""
Model-backed Product Directory.

Default PRODUCT_DIRECTORY: looks products up in stockledger.Product.
"""

from __future__ import annotations

from uuid import UUID

from stockledger.models.product import Product
from stockledger.protocols.directory import ProductInfo


class ModelProductDirectory:
    """ProductDirectory over the Product table."""

    def exists(self, product_id: UUID) -> bool:
        return Product.objects.filter(pk=product_id).exists()

    def get_info(self, product_id: UUID) -> ProductInfo | None:
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return None
        return ProductInfo(
            product_id=product.pk,
            sku=product.sku,
            name=product.name,
            min_stock=product.min_stock,
        )
