"""
Stock Ledger configuration.

Usage in settings.py:
    STOCKLEDGER = {
        "PRODUCT_DIRECTORY": "stockledger.adapters.models.ModelProductDirectory",
        "SUPPLIER_DIRECTORY": "partners.adapters.SupplierDirectory",
        "CUSTOMER_DIRECTORY": "partners.adapters.CustomerDirectory",
        "MAX_ATTEMPTS": 5,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class StockLedgerSettings:
    """Stock Ledger configuration settings."""

    # Product directory backend (dotted path)
    PRODUCT_DIRECTORY: str = "stockledger.adapters.models.ModelProductDirectory"

    # Counterparty directories (dotted paths)
    SUPPLIER_DIRECTORY: str = "stockledger.adapters.noop.NoopPartyDirectory"
    CUSTOMER_DIRECTORY: str = "stockledger.adapters.noop.NoopPartyDirectory"

    # Check counterparty existence before recording a movement
    VALIDATE_COUNTERPARTIES: bool = True

    # Attempts per movement before a write conflict surfaces as CONFLICT
    MAX_ATTEMPTS: int = 5

    # Linear backoff between attempts, in milliseconds
    RETRY_BACKOFF_MS: int = 10

    # Rows fetched per round trip when iterating history
    HISTORY_CHUNK_SIZE: int = 200


def get_stockledger_settings() -> StockLedgerSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKLEDGER", {})
    return StockLedgerSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockLedgerSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockledger_settings(), name)


stockledger_settings = _LazySettings()
