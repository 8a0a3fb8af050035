"""
Stock movements — the quantity guard.

The only code path that changes Product._quantity. Each movement runs as
one transaction that locks the product row, checks the new balance,
appends the ledger row and swaps the cached quantity on its version.
"""

import logging
import time

from django.db import DatabaseError, IntegrityError, OperationalError, transaction
from django.utils import timezone

from stockledger.conf import stockledger_settings
from stockledger.exceptions import StockError
from stockledger.models.enums import MovementKind
from stockledger.models.product import Product
from stockledger.services.ledger import LedgerStore
from stockledger.validation import MAX_QUANTITY, validate_movement
from stockledger.values import MovementRequest, MovementResult

logger = logging.getLogger('stockledger')


class WriteConflict(Exception):
    """The product row changed between lock and write. Retried internally."""


# Errors that mean "someone else committed first": retry on fresh state.
# An IntegrityError only counts when it names the (product, sequence) index.
RETRYABLE_ERRORS = (WriteConflict, IntegrityError, OperationalError)

SEQUENCE_CONSTRAINT = 'stockledger_movement_unique_sequence'


def is_write_conflict(error: Exception) -> bool:
    if not isinstance(error, IntegrityError):
        return True
    # PostgreSQL and MySQL report the constraint name, SQLite the columns
    text = str(error)
    return SEQUENCE_CONSTRAINT in text or 'stockledger_movement.sequence' in text


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def record_movement(cls, product_id, kind, quantity, note=None,
                        counterparty_id=None, user=None) -> MovementResult:
        """
        Apply one receipt or issue to a product.

        Returns:
            MovementResult with the new movement id and the new quantity

        Raises:
            StockError('INVALID_KIND' | 'INVALID_QUANTITY' | 'INVALID_NOTE'
                       | 'NOTE_TOO_LONG'
                       | 'PRODUCT_NOT_FOUND' | 'COUNTERPARTY_NOT_FOUND'):
                Input rejected, nothing written
            StockError('INSUFFICIENT_STOCK'): Issue would drive quantity
                below zero; data carries available and requested
            StockError('INVALID_QUANTITY'): Receipt would push quantity
                past MAX_QUANTITY
            StockError('CONFLICT'): Write conflicts outlasted MAX_ATTEMPTS
            StockError('PERSISTENCE_FAILURE'): Storage error, nothing committed

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on Product
            - Verifies the balance after the lock
            - Compare-and-swap on Product.version catches writers the lock
              didn't exclude (backends without row locks)
            - Conflicts retry from a fresh read, never from the stale one

        A caller that times out while waiting must treat the outcome as
        unknown and re-read quantity/history: the transaction either
        committed whole or not at all.
        """
        try:
            request = validate_movement(
                product_id, kind, quantity, note=note, counterparty_id=counterparty_id
            )
        except StockError as e:
            logger.info(
                "stock.movement.rejected",
                extra={"product_id": str(product_id), "code": e.code},
            )
            raise
        except DatabaseError as e:
            raise StockError('PERSISTENCE_FAILURE', product_id=product_id) from e

        max_attempts = max(1, int(stockledger_settings.MAX_ATTEMPTS))
        backoff = stockledger_settings.RETRY_BACKOFF_MS / 1000

        last_error = None
        for attempt in range(1, max_attempts + 1):
            try:
                result = cls._apply(request, user)
            except RETRYABLE_ERRORS as e:
                if not is_write_conflict(e):
                    logger.error(
                        "stock.movement.failed",
                        extra={"product_id": str(request.product_id)},
                        exc_info=True,
                    )
                    raise StockError('PERSISTENCE_FAILURE', product_id=request.product_id) from e
                last_error = e
                logger.info(
                    "stock.movement.conflict",
                    extra={
                        "product_id": str(request.product_id),
                        "attempt": attempt,
                        "error": type(e).__name__,
                    },
                )
                if attempt < max_attempts and backoff > 0:
                    time.sleep(backoff * attempt)
                continue
            except StockError as e:
                logger.info(
                    "stock.movement.rejected",
                    extra={
                        "product_id": str(request.product_id),
                        "code": e.code,
                        "available": e.data.get("available"),
                        "requested": request.quantity,
                    },
                )
                raise
            except DatabaseError as e:
                logger.error(
                    "stock.movement.failed",
                    extra={"product_id": str(request.product_id)},
                    exc_info=True,
                )
                raise StockError('PERSISTENCE_FAILURE', product_id=request.product_id) from e

            logger.info(
                "stock.movement.recorded",
                extra={
                    "product_id": str(result.product_id),
                    "movement_id": str(result.movement_id),
                    "kind": result.kind.value,
                    "qty": result.quantity,
                    "new_quantity": result.new_quantity,
                    "attempts": attempt,
                },
            )
            return result

        logger.warning(
            "stock.movement.conflict_exhausted",
            extra={"product_id": str(request.product_id), "attempts": max_attempts},
        )
        raise StockError(
            'CONFLICT',
            product_id=request.product_id,
            attempts=max_attempts,
        ) from last_error

    @classmethod
    def receive(cls, product_id, quantity, note=None, supplier_id=None, user=None) -> MovementResult:
        """Stock entry. Counterparty, if any, is a supplier."""
        return cls.record_movement(
            product_id, MovementKind.RECEIPT, quantity,
            note=note, counterparty_id=supplier_id, user=user,
        )

    @classmethod
    def issue(cls, product_id, quantity, note=None, customer_id=None, user=None) -> MovementResult:
        """
        Stock exit. Counterparty, if any, is a customer.

        Raises:
            StockError('INSUFFICIENT_STOCK'): If quantity > on-hand quantity
        """
        return cls.record_movement(
            product_id, MovementKind.ISSUE, quantity,
            note=note, counterparty_id=customer_id, user=user,
        )

    @classmethod
    def _apply(cls, request: MovementRequest, user=None) -> MovementResult:
        """One attempt: lock, check, append, swap. All or nothing."""
        with transaction.atomic():
            try:
                product = Product.objects.select_for_update().get(pk=request.product_id)
            except Product.DoesNotExist:
                raise StockError('PRODUCT_NOT_FOUND', product_id=request.product_id) from None

            current = product._quantity
            new_quantity = current + request.delta
            if new_quantity < 0:
                raise StockError(
                    'INSUFFICIENT_STOCK',
                    product_id=request.product_id,
                    available=current,
                    requested=request.quantity,
                )
            if new_quantity > MAX_QUANTITY:
                raise StockError(
                    'INVALID_QUANTITY',
                    product_id=request.product_id,
                    available=current,
                    requested=request.quantity,
                )

            sequence = product.version + 1
            movement = LedgerStore.append(
                product, request, balance_after=new_quantity, sequence=sequence, user=user
            )

            updated = Product.objects.filter(
                pk=product.pk, version=product.version
            ).update(
                _quantity=new_quantity,
                version=sequence,
                updated_at=timezone.now(),
            )
            if updated != 1:
                raise WriteConflict(f"Product {product.pk} changed during movement")

        return MovementResult(
            movement_id=movement.pk,
            product_id=product.pk,
            kind=request.kind,
            quantity=request.quantity,
            new_quantity=new_quantity,
            sequence=sequence,
        )
