"""
Pytest fixtures for Stock Ledger tests.
"""

import uuid

import pytest
from django.contrib.auth import get_user_model

from stockledger import stock
from stockledger.adapters import reset_directories
from stockledger.models import Product
from stockledger.tests.directories import FakeCustomerDirectory, FakeSupplierDirectory


User = get_user_model()


@pytest.fixture(autouse=True)
def _fresh_directories():
    """Drop cached directory instances between tests."""
    reset_directories()
    yield
    reset_directories()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def make_product(db):
    """Factory for empty products with unique SKUs."""
    def _make(name='Widget', min_stock=0):
        return Product.objects.create(
            sku=f'SKU-{uuid.uuid4().hex[:8].upper()}',
            name=name,
            min_stock=min_stock,
        )
    return _make


@pytest.fixture
def product(make_product):
    """An empty product."""
    return make_product(name='Box of screws', min_stock=5)


@pytest.fixture
def stocked(make_product):
    """Factory for a product with an opening receipt of `quantity`."""
    def _stocked(quantity, **kwargs):
        p = make_product(**kwargs)
        if quantity:
            stock.receive(p.pk, quantity, note='Opening stock')
        p.refresh_from_db()
        return p
    return _stocked


@pytest.fixture
def partners(settings):
    """
    Real counterparty validation against in-memory directories.

    Returns (supplier_id, customer_id), both registered.
    """
    settings.STOCKLEDGER = {
        **settings.STOCKLEDGER,
        'SUPPLIER_DIRECTORY': 'stockledger.tests.directories.FakeSupplierDirectory',
        'CUSTOMER_DIRECTORY': 'stockledger.tests.directories.FakeCustomerDirectory',
    }
    supplier_id, customer_id = uuid.uuid4(), uuid.uuid4()
    FakeSupplierDirectory.known = {supplier_id}
    FakeCustomerDirectory.known = {customer_id}
    yield supplier_id, customer_id
    FakeSupplierDirectory.known = set()
    FakeCustomerDirectory.known = set()


@pytest.fixture
def snapshot(db):
    """(quantity, version, movement ids) of a product, for before/after comparisons."""
    def _snapshot(product_id):
        p = Product.objects.get(pk=product_id)
        ids = list(p.movements.order_by("sequence").values_list("id", flat=True))
        return p._quantity, p.version, ids
    return _snapshot
