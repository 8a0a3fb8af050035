"""
Directory loader — resolves the configured directory backends.

Usage:
    from stockledger.adapters import get_product_directory, get_party_directory

    products = get_product_directory()
    products.exists(product_id)

    suppliers = get_party_directory(MovementKind.RECEIPT)
    suppliers.exists(supplier_id)

Settings:
    STOCKLEDGER = {
        "PRODUCT_DIRECTORY": "stockledger.adapters.models.ModelProductDirectory",
        "SUPPLIER_DIRECTORY": "partners.adapters.SupplierDirectory",
        "CUSTOMER_DIRECTORY": "partners.adapters.CustomerDirectory",
    }

Instances are cached per dotted path. Call reset_directories() after
changing settings (tests do this through a fixture).
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from stockledger.conf import stockledger_settings
from stockledger.models.enums import MovementKind
from stockledger.protocols.directory import PartyDirectory, ProductDirectory

logger = logging.getLogger(__name__)


_lock = threading.Lock()
_instances: dict[str, Any] = {}

# Which directory vouches for the counterparty of each kind
PARTY_SETTINGS = {
    MovementKind.RECEIPT: "SUPPLIER_DIRECTORY",
    MovementKind.ISSUE: "CUSTOMER_DIRECTORY",
}


def _load(setting_name: str):
    path = getattr(stockledger_settings, setting_name)
    if not path:
        raise ImproperlyConfigured(
            f"STOCKLEDGER['{setting_name}'] must be configured."
        )

    instance = _instances.get(path)
    if instance is None:
        with _lock:
            instance = _instances.get(path)
            if instance is None:  # double-checked
                try:
                    directory_class = import_string(path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import {setting_name} '{path}': {e}"
                    ) from e
                instance = directory_class()
                _instances[path] = instance
                logger.debug("Loaded %s: %s", setting_name, path)
    return instance


def get_product_directory() -> ProductDirectory:
    """
    Return the configured product directory.

    Raises:
        ImproperlyConfigured: If PRODUCT_DIRECTORY is empty or import fails
    """
    return _load("PRODUCT_DIRECTORY")


def get_party_directory(kind: MovementKind) -> PartyDirectory:
    """
    Return the counterparty directory for a movement kind.

    Receipts are checked against suppliers, issues against customers.
    """
    return _load(PARTY_SETTINGS[MovementKind(kind)])


def reset_directories() -> None:
    """Drop cached directory instances. Useful for testing."""
    with _lock:
        _instances.clear()
