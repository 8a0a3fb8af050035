"""
Stock history — a product's movement timeline, newest first.

Pure read. Uses no locking: every Movement row carries its own
balance_after, so a single query can never show a half-applied movement.
"""

from __future__ import annotations

from collections.abc import Iterator

from stockledger.conf import stockledger_settings
from stockledger.models.movement import Movement
from stockledger.validation import coerce_id
from stockledger.values import HistoryEntry


class MovementHistory:
    """
    Lazy, restartable view over a product's committed movements.

    Nothing is fetched until iteration. Each iteration runs a fresh
    query, so iterating twice with no writes in between yields equal
    sequences, and a later iteration sees movements committed since.
    """

    def __init__(self, product_id):
        self.product_id = product_id
        self._pk = coerce_id(product_id)

    def _queryset(self):
        if self._pk is None:
            return Movement.objects.none()
        return Movement.objects.for_product(self._pk).newest_first()

    def __iter__(self) -> Iterator[HistoryEntry]:
        chunk_size = stockledger_settings.HISTORY_CHUNK_SIZE
        for movement in self._queryset().iterator(chunk_size=chunk_size):
            yield HistoryEntry.from_movement(movement)

    # No __len__: list() would ask for a length hint and run a second query
    def count(self) -> int:
        return self._queryset().count()

    def __bool__(self) -> bool:
        return self._queryset().exists()

    def latest(self) -> HistoryEntry | None:
        movement = self._queryset().first()
        return HistoryEntry.from_movement(movement) if movement else None

    def __repr__(self) -> str:
        return f"<MovementHistory product={self.product_id}>"


class StockHistory:
    """Read-only history methods."""

    @classmethod
    def history(cls, product_id) -> MovementHistory:
        """
        Movement timeline of a product, most recent first.

        Unknown products and products without movements yield an empty
        sequence rather than an error.
        """
        return MovementHistory(product_id)
