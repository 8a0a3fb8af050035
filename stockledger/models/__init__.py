"""
Stock Ledger Models.

Core models for the movement ledger:
- Product: On-hand quantity cache, written only by the quantity guard
- Movement: Immutable ledger of receipts and issues
"""

from stockledger.models.enums import MovementKind
from stockledger.models.movement import Movement
from stockledger.models.product import Product

__all__ = [
    'MovementKind',
    'Product',
    'Movement',
]
