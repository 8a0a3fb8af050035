"""
Stock Ledger Protocols.

Defines interfaces for external system integration.
"""

from stockledger.protocols.directory import (
    PartyDirectory,
    ProductDirectory,
    ProductInfo,
)

__all__ = [
    "PartyDirectory",
    "ProductDirectory",
    "ProductInfo",
]
