"""
Ledger store — append-only persistence of committed movements.

append() is called only by the quantity guard, inside its atomic block.
Everything else here is a read.
"""

from __future__ import annotations

from django.db import models, transaction
from django.db.models import Case, Count, F, Sum, Value, When
from django.db.models.functions import Coalesce

from stockledger.models.enums import MovementKind
from stockledger.models.movement import Movement
from stockledger.values import MovementRequest


# Signed quantity of one movement, as a SQL expression
SIGNED_QUANTITY = Case(
    When(kind=MovementKind.ISSUE, then=-F('quantity')),
    default=F('quantity'),
    output_field=models.IntegerField(),
)


class LedgerStore:
    """Append-only movement store keyed by id, indexed by (product, sequence)."""

    @classmethod
    def append(cls, product, request: MovementRequest, balance_after: int,
               sequence: int, user=None) -> Movement:
        """
        Insert one immutable movement row.

        Raises:
            RuntimeError: If called outside a transaction. A ledger row
                written on its own could commit without its quantity update.
        """
        if not transaction.get_connection().in_atomic_block:
            raise RuntimeError(
                "LedgerStore.append() must run inside the quantity guard's transaction"
            )

        return Movement.objects.create(
            product=product,
            kind=request.kind,
            quantity=request.quantity,
            balance_after=balance_after,
            sequence=sequence,
            note=request.note,
            counterparty_id=request.counterparty_id,
            created_by=user,
        )

    @classmethod
    def list_by_product(cls, product_id):
        """Movements of a product in commit order."""
        return Movement.objects.for_product(product_id).in_commit_order()

    @classmethod
    def signed_total(cls, product_id) -> int:
        """Sum of signed movement quantities for a product."""
        return Movement.objects.for_product(product_id).aggregate(
            t=Coalesce(Sum(SIGNED_QUANTITY), Value(0))
        )['t']

    @classmethod
    def totals_by_product(cls, product_ids=None) -> dict:
        """
        Ledger sum and row count per product.

        Returns:
            Dict[product_id, (signed_total, count)]
        """
        qs = Movement.objects.all()
        if product_ids is not None:
            qs = qs.filter(product_id__in=product_ids)
        rows = (
            qs.order_by()
            .values('product_id')
            .annotate(total=Sum(SIGNED_QUANTITY), count=Count('id'))
        )
        return {row['product_id']: (row['total'], row['count']) for row in rows}
