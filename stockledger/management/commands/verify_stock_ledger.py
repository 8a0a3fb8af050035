"""
Management command to check cached quantities against the ledger.

Usage:
    python manage.py verify_stock_ledger
    python manage.py verify_stock_ledger --product <uuid>
"""

from django.core.management.base import BaseCommand, CommandError

from stockledger import stock


class Command(BaseCommand):
    """Verify stock ledger command."""

    help = 'Checks that every product quantity equals the sum of its movements'

    def add_arguments(self, parser):
        parser.add_argument(
            '--product',
            dest='product_id',
            default=None,
            help='Only check this product id',
        )

    def handle(self, *args, **options):
        discrepancies = stock.verify(options['product_id'])

        if not discrepancies:
            self.stdout.write(self.style.SUCCESS('Ledger consistent'))
            return

        for d in discrepancies:
            self.stdout.write(
                f'{d.sku}: cached {d.cached_quantity} (v{d.cached_version}), '
                f'ledger {d.ledger_quantity} ({d.ledger_count} movements)'
            )
        raise CommandError(f'{len(discrepancies)} product(s) out of balance')
