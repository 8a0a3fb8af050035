"""
Movement validation — pure admissibility checks.

Runs before the quantity guard opens its transaction. Nothing here writes,
and nothing here checks stock sufficiency: that needs the quantity read
under the product lock, inside StockMovements.record_movement().
"""

from __future__ import annotations

import uuid
from typing import Any

from stockledger.adapters import get_party_directory, get_product_directory
from stockledger.conf import stockledger_settings
from stockledger.exceptions import StockError
from stockledger.models.enums import MovementKind
from stockledger.values import MovementRequest

NOTE_MAX_LENGTH = 255

# Largest value every backend stores in a PositiveIntegerField
MAX_QUANTITY = 2147483647


def coerce_id(value: Any) -> uuid.UUID | None:
    """UUID from a UUID or its string form; None when it can't be one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def coerce_kind(kind: Any) -> MovementKind:
    try:
        return MovementKind(kind)
    except ValueError:
        raise StockError('INVALID_KIND', kind=kind) from None


def check_quantity(quantity: Any) -> int:
    # bool is an int subclass; True is not a quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise StockError('INVALID_QUANTITY', requested=quantity)
    if quantity <= 0 or quantity > MAX_QUANTITY:
        raise StockError('INVALID_QUANTITY', requested=quantity)
    return quantity


def _party_directory_name(kind: MovementKind) -> str:
    return 'supplier' if kind == MovementKind.RECEIPT else 'customer'


def validate_movement(product_id, kind, quantity, note: str | None = None,
                      counterparty_id=None) -> MovementRequest:
    """
    Check a proposed movement and normalize it.

    Order of checks: kind, quantity, note, product, counterparty.

    Returns:
        MovementRequest ready for the quantity guard

    Raises:
        StockError('INVALID_KIND'): kind is not receipt/issue
        StockError('INVALID_QUANTITY'): quantity is not a positive int
            within MAX_QUANTITY
        StockError('INVALID_NOTE'): note is not a string
        StockError('NOTE_TOO_LONG'): note exceeds 255 characters
        StockError('PRODUCT_NOT_FOUND'): product directory doesn't know product_id
        StockError('COUNTERPARTY_NOT_FOUND'): supplier/customer directory
            doesn't know counterparty_id
    """
    movement_kind = coerce_kind(kind)
    quantity = check_quantity(quantity)

    note = note or ''
    if not isinstance(note, str):
        raise StockError('INVALID_NOTE', note=note)
    if len(note) > NOTE_MAX_LENGTH:
        raise StockError('NOTE_TOO_LONG', length=len(note), max_length=NOTE_MAX_LENGTH)

    pid = coerce_id(product_id)
    if pid is None or not get_product_directory().exists(pid):
        raise StockError('PRODUCT_NOT_FOUND', product_id=product_id)

    party_id = None
    if counterparty_id is not None:
        party_id = coerce_id(counterparty_id)
        if party_id is None:
            raise StockError(
                'COUNTERPARTY_NOT_FOUND',
                counterparty_id=counterparty_id,
                directory=_party_directory_name(movement_kind),
            )
        if stockledger_settings.VALIDATE_COUNTERPARTIES:
            directory = get_party_directory(movement_kind)
            if not directory.exists(party_id):
                raise StockError(
                    'COUNTERPARTY_NOT_FOUND',
                    counterparty_id=party_id,
                    directory=_party_directory_name(movement_kind),
                )

    return MovementRequest(
        product_id=pid,
        kind=movement_kind,
        quantity=quantity,
        note=note,
        counterparty_id=party_id,
    )
