"""
Exceptions for Stock Ledger.

All errors are StockError with a structured code for programmatic handling.
"""

from typing import Any


class StockError(Exception):
    """
    Structured exception for stock operations.

    Usage:
        try:
            stock.issue(product_id, 10)
        except StockError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.available} on hand")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Quantity must be a positive integer',
        'INVALID_KIND': 'Movement kind must be receipt or issue',
        'INVALID_NOTE': 'Note must be text',
        'NOTE_TOO_LONG': 'Note is too long',
        'PRODUCT_NOT_FOUND': 'Product not found',
        'COUNTERPARTY_NOT_FOUND': 'Counterparty not found',
        'INSUFFICIENT_STOCK': 'Not enough stock on hand',
        'CONFLICT': 'Concurrent modification, retry budget exhausted',
        'PERSISTENCE_FAILURE': 'Storage failure, movement not recorded',
    }

    # Recoverable by correcting input or retrying later
    RECOVERABLE = frozenset({
        'INVALID_QUANTITY',
        'INVALID_KIND',
        'INVALID_NOTE',
        'NOTE_TOO_LONG',
        'PRODUCT_NOT_FOUND',
        'COUNTERPARTY_NOT_FOUND',
        'INSUFFICIENT_STOCK',
        'CONFLICT',
    })

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    @property
    def is_recoverable(self) -> bool:
        return self.code in self.RECOVERABLE

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, bool, type(None))) else str(v)
                for k, v in self.data.items()
            }
        }

    def __repr__(self) -> str:
        return f"StockError(code={self.code!r}, data={self.data!r})"
