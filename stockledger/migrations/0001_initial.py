"""
Initial migration for Stock Ledger models.
"""

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Stock Ledger models: Product, Movement."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sku', models.CharField(max_length=50, unique=True, verbose_name='SKU')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('min_stock', models.PositiveIntegerField(default=0, help_text='Informational. Never blocks a movement.', verbose_name='Minimum stock')),
                ('_quantity', models.IntegerField(default=0, editable=False, verbose_name='Quantity')),
                ('version', models.PositiveIntegerField(default=0, editable=False, verbose_name='Version')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['sku'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('_quantity__gte', 0)),
                        name='stockledger_product_quantity_non_negative',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='Movement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('kind', models.CharField(choices=[('receipt', 'Receipt'), ('issue', 'Issue')], max_length=10, verbose_name='Kind')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('balance_after', models.PositiveIntegerField(help_text='Product quantity right after this movement committed', verbose_name='Balance after')),
                ('sequence', models.PositiveIntegerField(verbose_name='Sequence')),
                ('note', models.CharField(blank=True, default='', max_length=255, verbose_name='Note')),
                ('counterparty_id', models.UUIDField(blank=True, null=True, verbose_name='Counterparty')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Timestamp')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Created by')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='stockledger.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Movement',
                'verbose_name_plural': 'Movements',
                'ordering': ['product', 'sequence'],
                'constraints': [
                    models.UniqueConstraint(
                        fields=('product', 'sequence'),
                        name='stockledger_movement_unique_sequence',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(('quantity__gt', 0)),
                        name='stockledger_movement_quantity_positive',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(('kind__in', ['receipt', 'issue'])),
                        name='stockledger_movement_kind_valid',
                    ),
                ],
            },
        ),
    ]
