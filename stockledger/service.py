"""
Stock Service — The single public interface for all stock operations.

Usage:
    from stockledger import stock, StockError

    stock.receive(product_id, 10, note="Invoice #123")
    result = stock.issue(product_id, 4, customer_id=customer_id)
    result.new_quantity          # 6
    list(stock.history(product_id))
"""

from stockledger.services.alerts import check_low_stock
from stockledger.services.audit import StockAudit
from stockledger.services.history import StockHistory
from stockledger.services.movements import StockMovements
from stockledger.services.queries import StockQueries


class Stock(StockMovements, StockHistory, StockQueries, StockAudit):
    """
    Single interface for all stock operations.

    Parameter convention: (product_id, quantity, ...)

    IMPORTANT: record_movement() (and receive()/issue() on top of it) is
    the only way quantity changes. Everything else is a read.
    See StockMovements for the locking discipline.
    """

    @classmethod
    def low_stock(cls, product_id=None):
        """Products at or below their minimum stock. Logs a warning each."""
        return check_low_stock(product_id)
