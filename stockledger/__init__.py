"""
Stock Ledger — Movement ledger and quantity-consistency engine.

Keeps each product's on-hand quantity equal to the signed sum of its
receipts and issues, under concurrent requests, never below zero.

Usage:
    from stockledger import stock, StockError

    stock.receive(product_id, 10)
    stock.issue(product_id, 4)        # new_quantity == 6
    stock.history(product_id)         # newest first
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'stock':
        from stockledger.service import Stock
        return Stock
    elif name == 'StockError':
        from stockledger.exceptions import StockError
        return StockError
    elif name == 'Product':
        from stockledger.models.product import Product
        return Product
    elif name == 'Movement':
        from stockledger.models.movement import Movement
        return Movement
    elif name == 'MovementKind':
        from stockledger.models.enums import MovementKind
        return MovementKind
    elif name == 'HistoryEntry':
        from stockledger.values import HistoryEntry
        return HistoryEntry
    elif name == 'MovementResult':
        from stockledger.values import MovementResult
        return MovementResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'stock',
    'StockError',
    'Product',
    'Movement',
    'MovementKind',
    'HistoryEntry',
    'MovementResult',
]

__version__ = '0.1.0'
