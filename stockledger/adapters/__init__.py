"""
Stock Ledger Adapters.

Implementations of protocols for external systems, and the loader that
resolves the configured ones.
"""

from stockledger.adapters.loader import (
    get_party_directory,
    get_product_directory,
    reset_directories,
)

__all__ = [
    "get_party_directory",
    "get_product_directory",
    "reset_directories",
]
