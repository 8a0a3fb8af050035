"""
Noop Party Directory — Stub adapter for development and testing.

This adapter implements the PartyDirectory protocol with a trivial default:
every counterparty exists.

Usage in settings.py:
    STOCKLEDGER = {
        "SUPPLIER_DIRECTORY": "stockledger.adapters.noop.NoopPartyDirectory",
        "CUSTOMER_DIRECTORY": "stockledger.adapters.noop.NoopPartyDirectory",
    }

WARNING: Do NOT use in production. This adapter performs no real validation
and will accept any supplier or customer id, including nonexistent ones.
"""

from __future__ import annotations

from uuid import UUID


class NoopPartyDirectory:
    """
    No-operation counterparty directory.

    Implements the ``PartyDirectory`` protocol without any external
    dependencies, making it suitable for local development and for
    deployments where the partner registry is not wired in yet.
    """

    def exists(self, party_id: UUID) -> bool:
        """Always True."""
        return True
