"""
Value objects returned across the Stock Ledger boundary.

Callers never receive ORM instances from the services; they get these
frozen dataclasses, so the only way to change quantity is through
StockMovements.record_movement().
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from stockledger.models.enums import MovementKind


@dataclass(frozen=True)
class MovementRequest:
    """A validated, not yet committed movement."""

    product_id: UUID
    kind: MovementKind
    quantity: int
    note: str = ''
    counterparty_id: UUID | None = None

    @property
    def delta(self) -> int:
        return self.kind.signed(self.quantity)


@dataclass(frozen=True)
class MovementResult:
    """Outcome of a committed movement."""

    movement_id: UUID
    product_id: UUID
    kind: MovementKind
    quantity: int
    new_quantity: int
    sequence: int


@dataclass(frozen=True)
class HistoryEntry:
    """One row of a product's movement timeline."""

    movement_id: UUID
    kind: MovementKind
    quantity: int
    signed_change: int
    balance_after: int
    note: str
    counterparty_id: UUID | None
    timestamp: datetime

    @classmethod
    def from_movement(cls, movement) -> HistoryEntry:
        kind = MovementKind(movement.kind)
        return cls(
            movement_id=movement.id,
            kind=kind,
            quantity=movement.quantity,
            signed_change=kind.signed(movement.quantity),
            balance_after=movement.balance_after,
            note=movement.note,
            counterparty_id=movement.counterparty_id,
            timestamp=movement.timestamp,
        )


@dataclass(frozen=True)
class ProductSnapshot:
    """Read-only view of a product's stock state."""

    product_id: UUID
    sku: str
    name: str
    quantity: int
    min_stock: int
    version: int

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock

    @classmethod
    def from_product(cls, product) -> ProductSnapshot:
        return cls(
            product_id=product.pk,
            sku=product.sku,
            name=product.name,
            quantity=product._quantity,
            min_stock=product.min_stock,
            version=product.version,
        )


@dataclass(frozen=True)
class LedgerDiscrepancy:
    """A product whose cached quantity disagrees with its ledger."""

    product_id: UUID
    sku: str
    cached_quantity: int
    ledger_quantity: int
    cached_version: int
    ledger_count: int

    @property
    def difference(self) -> int:
        return self.ledger_quantity - self.cached_quantity
