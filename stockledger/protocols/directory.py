"""
Directory Protocols — Interfaces for product and counterparty lookups.

Stock Ledger defines these protocols; the catalog and partner apps
(or any other system) implement them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from uuid import UUID


@dataclass(frozen=True)
class ProductInfo:
    """Basic product information exposed by a product directory."""

    product_id: UUID
    sku: str
    name: str
    min_stock: int = 0  # Informational, never enforced by the ledger


@runtime_checkable
class ProductDirectory(Protocol):
    """
    Protocol for product lookups.

    Implementations should provide methods to:
    - Check whether a product exists
    - Get product information (including the minimum stock threshold)
    """

    def exists(self, product_id: UUID) -> bool:
        """
        Check if a product exists.

        Args:
            product_id: Product identifier

        Returns:
            True if the product is known
        """
        ...

    def get_info(self, product_id: UUID) -> ProductInfo | None:
        """
        Get product information.

        Args:
            product_id: Product identifier

        Returns:
            ProductInfo or None if not found
        """
        ...


@runtime_checkable
class PartyDirectory(Protocol):
    """
    Protocol for counterparty lookups.

    One instance per directory: suppliers for receipts, customers for issues.
    """

    def exists(self, party_id: UUID) -> bool:
        """
        Check if a counterparty exists.

        Args:
            party_id: Supplier or customer identifier

        Returns:
            True if the counterparty is known
        """
        ...
