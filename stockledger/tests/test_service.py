"""
Tests for Stock service API.
"""

import uuid

import pytest

from stockledger import stock, StockError
from stockledger.models import Movement, MovementKind, Product
from stockledger.validation import MAX_QUANTITY


pytestmark = pytest.mark.django_db


class TestRecordMovement:
    """Tests for stock.record_movement()."""

    def test_issue_from_ten(self, stocked):
        """Issue 4 from 10 leaves 6 and one ledger row -4 → 6."""
        p = stocked(10)

        result = stock.record_movement(p.pk, MovementKind.ISSUE, 4)

        assert result.new_quantity == 6
        assert stock.quantity(p.pk) == 6
        latest = stock.history(p.pk).latest()
        assert latest.movement_id == result.movement_id
        assert latest.signed_change == -4
        assert latest.balance_after == 6

    def test_issue_from_empty_is_rejected(self, product, snapshot):
        """Issue 1 from 0 fails and changes nothing."""
        before = snapshot(product.pk)

        with pytest.raises(StockError) as exc:
            stock.record_movement(product.pk, MovementKind.ISSUE, 1)

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        assert exc.value.available == 0
        assert exc.value.requested == 1
        assert snapshot(product.pk) == before

    def test_receipt_then_issues_to_zero(self, product):
        """Receipt(10), Issue(3), Issue(7) ends at 0 with balances 10, 7, 0."""
        stock.record_movement(product.pk, MovementKind.RECEIPT, 10)
        stock.record_movement(product.pk, MovementKind.ISSUE, 3)
        result = stock.record_movement(product.pk, MovementKind.ISSUE, 7)

        assert result.new_quantity == 0
        assert stock.quantity(product.pk) == 0

        entries = list(stock.history(product.pk))
        assert [e.balance_after for e in entries] == [0, 7, 10]
        assert [e.signed_change for e in entries] == [-7, -3, 10]

    def test_kind_accepts_string_value(self, product):
        result = stock.record_movement(product.pk, 'receipt', 2)

        assert result.kind is MovementKind.RECEIPT
        assert result.new_quantity == 2

    def test_product_id_accepts_string(self, product):
        result = stock.record_movement(str(product.pk), MovementKind.RECEIPT, 2)

        assert result.product_id == product.pk

    def test_sequence_follows_commit_order(self, product):
        results = [stock.receive(product.pk, 1) for _ in range(3)]

        assert [r.sequence for r in results] == [1, 2, 3]
        product.refresh_from_db()
        assert product.version == 3

    def test_note_and_user_are_recorded(self, product, user):
        result = stock.receive(product.pk, 5, note='Invoice #123', user=user)

        movement = Movement.objects.get(pk=result.movement_id)
        assert movement.note == 'Invoice #123'
        assert movement.created_by == user
        assert movement.timestamp is not None

    def test_exact_issue_to_zero_is_allowed(self, stocked):
        p = stocked(5)

        result = stock.issue(p.pk, 5)

        assert result.new_quantity == 0


class TestRejections:
    """Rejected movements leave quantity and ledger untouched."""

    @pytest.mark.parametrize('quantity', [0, -3, 2.5, '4', True, None, 2**31, 2**64])
    def test_invalid_quantity(self, stocked, snapshot, quantity):
        p = stocked(10)
        before = snapshot(p.pk)

        with pytest.raises(StockError) as exc:
            stock.record_movement(p.pk, MovementKind.ISSUE, quantity)

        assert exc.value.code == 'INVALID_QUANTITY'
        assert snapshot(p.pk) == before

    @pytest.mark.parametrize('kind', ['none', '', None, 0, 'transfer'])
    def test_invalid_kind(self, product, kind):
        with pytest.raises(StockError) as exc:
            stock.record_movement(product.pk, kind, 1)

        assert exc.value.code == 'INVALID_KIND'

    def test_unknown_product(self, db):
        with pytest.raises(StockError) as exc:
            stock.receive(uuid.uuid4(), 1)

        assert exc.value.code == 'PRODUCT_NOT_FOUND'

    def test_malformed_product_id(self, db):
        with pytest.raises(StockError) as exc:
            stock.receive('not-a-uuid', 1)

        assert exc.value.code == 'PRODUCT_NOT_FOUND'

    def test_note_too_long(self, product):
        with pytest.raises(StockError) as exc:
            stock.receive(product.pk, 1, note='x' * 256)

        assert exc.value.code == 'NOTE_TOO_LONG'
        assert Movement.objects.count() == 0

    def test_note_must_be_text(self, product):
        with pytest.raises(StockError) as exc:
            stock.receive(product.pk, 1, note=12345)

        assert exc.value.code == 'INVALID_NOTE'
        assert Movement.objects.count() == 0

    def test_receipt_past_max_quantity(self, stocked, snapshot):
        p = stocked(MAX_QUANTITY)
        before = snapshot(p.pk)

        with pytest.raises(StockError) as exc:
            stock.receive(p.pk, 1)

        assert exc.value.code == 'INVALID_QUANTITY'
        assert exc.value.available == MAX_QUANTITY
        assert exc.value.requested == 1
        assert snapshot(p.pk) == before

    def test_overdraw_after_partial_issues(self, stocked, snapshot):
        p = stocked(5)
        stock.issue(p.pk, 3)
        before = snapshot(p.pk)

        with pytest.raises(StockError) as exc:
            stock.issue(p.pk, 3)

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        assert exc.value.available == 2
        assert snapshot(p.pk) == before


class TestCounterparties:
    """Supplier/customer references are checked against their directories."""

    def test_receipt_with_known_supplier(self, product, partners):
        supplier_id, _ = partners

        result = stock.receive(product.pk, 3, supplier_id=supplier_id)

        assert Movement.objects.get(pk=result.movement_id).counterparty_id == supplier_id

    def test_issue_with_known_customer(self, stocked, partners):
        _, customer_id = partners
        p = stocked(3)

        result = stock.issue(p.pk, 1, customer_id=customer_id)

        assert stock.history(p.pk).latest().counterparty_id == customer_id
        assert result.new_quantity == 2

    def test_receipt_checks_suppliers_not_customers(self, product, partners):
        _, customer_id = partners

        with pytest.raises(StockError) as exc:
            stock.receive(product.pk, 3, supplier_id=customer_id)

        assert exc.value.code == 'COUNTERPARTY_NOT_FOUND'
        assert exc.value.data['directory'] == 'supplier'
        assert stock.quantity(product.pk) == 0

    def test_issue_with_unknown_customer(self, stocked, partners, snapshot):
        p = stocked(3)
        before = snapshot(p.pk)

        with pytest.raises(StockError) as exc:
            stock.issue(p.pk, 1, customer_id=uuid.uuid4())

        assert exc.value.code == 'COUNTERPARTY_NOT_FOUND'
        assert snapshot(p.pk) == before

    def test_validation_can_be_disabled(self, product, partners, settings):
        settings.STOCKLEDGER = {**settings.STOCKLEDGER, 'VALIDATE_COUNTERPARTIES': False}
        stranger = uuid.uuid4()

        result = stock.receive(product.pk, 1, supplier_id=stranger)

        assert Movement.objects.get(pk=result.movement_id).counterparty_id == stranger

    def test_noop_directory_accepts_anyone(self, product):
        result = stock.receive(product.pk, 1, supplier_id=uuid.uuid4())

        assert result.new_quantity == 1


class TestInvariant:
    """quantity == Σ signed movements after any mix of outcomes."""

    def test_mixed_sequence_keeps_invariant(self, product):
        plan = [
            (MovementKind.RECEIPT, 7), (MovementKind.ISSUE, 2), (MovementKind.ISSUE, 9),
            (MovementKind.RECEIPT, 4), (MovementKind.ISSUE, 9), (MovementKind.ISSUE, 1),
        ]
        for kind, qty in plan:
            try:
                stock.record_movement(product.pk, kind, qty)
            except StockError as e:
                assert e.code == 'INSUFFICIENT_STOCK'

        entries = list(stock.history(product.pk))
        assert stock.quantity(product.pk) == sum(e.signed_change for e in entries)
        assert all(e.balance_after >= 0 for e in entries)
        assert stock.verify() == []


class TestErrorSerialization:

    def test_as_dict(self, product):
        with pytest.raises(StockError) as exc:
            stock.issue(product.pk, 2)

        data = exc.value.as_dict()
        assert data['code'] == 'INSUFFICIENT_STOCK'
        assert data['data']['available'] == 0
        assert data['data']['requested'] == 2
        assert data['data']['product_id'] == str(product.pk)
        assert exc.value.is_recoverable


class TestQueries:

    def test_get_product_snapshot(self, stocked):
        p = stocked(8, min_stock=3)

        snap = stock.get_product(p.pk)

        assert snap.quantity == 8
        assert snap.min_stock == 3
        assert snap.version == 1
        assert not snap.is_low_stock

    def test_get_unknown_product(self, db):
        assert stock.get_product(uuid.uuid4()) is None
        assert stock.get_product('garbage') is None

    def test_quantity_of_unknown_product_is_zero(self, db):
        assert stock.quantity(uuid.uuid4()) == 0

    def test_list_products_skips_empty(self, stocked, product):
        full = stocked(2)

        listed = stock.list_products(include_empty=False)

        assert [s.product_id for s in listed] == [full.pk]
        assert len(stock.list_products()) == 2

    def test_product_count_unchanged_by_movements(self, stocked):
        stocked(3)
        assert Product.objects.count() == 1
