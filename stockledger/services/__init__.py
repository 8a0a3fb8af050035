"""
Stock services — modular organization of stock operations.

Re-exports all public classes:
    from stockledger.services import StockMovements, StockHistory, StockQueries, StockAudit
"""

from stockledger.services.audit import StockAudit
from stockledger.services.history import MovementHistory, StockHistory
from stockledger.services.ledger import LedgerStore
from stockledger.services.movements import StockMovements
from stockledger.services.queries import StockQueries

__all__ = [
    'LedgerStore',
    'MovementHistory',
    'StockAudit',
    'StockHistory',
    'StockMovements',
    'StockQueries',
]
