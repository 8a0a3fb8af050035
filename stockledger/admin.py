"""
Stock Ledger Admin — read-only views for production debugging.

- Product: read-only (sku, name, quantity, min stock, version)
- Movement: read-only audit trail (timestamp, kind, quantity, balance after)

Nothing here writes quantity. Stock only changes via stock.record_movement().
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from stockledger.models import Movement, Product


class ReadOnlyAdmin(admin.ModelAdmin):
    """No add, change or delete."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class MovementInline(admin.TabularInline):
    model = Movement
    fields = ['sequence', 'timestamp', 'kind', 'quantity', 'balance_after', 'note']
    readonly_fields = fields
    ordering = ['-sequence']
    extra = 0
    max_num = 0
    can_delete = False
    show_change_link = True


# =========================================================================
# PRODUCT ADMIN (read-only)
# =========================================================================

@admin.register(Product)
class ProductAdmin(ReadOnlyAdmin):
    """Product admin — read-only. Stock only changes via Stock service."""

    list_display = ['sku', 'name', 'quantity_display', 'min_stock', 'low_stock_display', 'version']
    search_fields = ['sku', 'name']
    readonly_fields = ['id', 'sku', 'name', 'min_stock', '_quantity', 'version',
                       'created_at', 'updated_at']
    inlines = [MovementInline]

    @admin.display(description=_('Quantity'), ordering='_quantity')
    def quantity_display(self, obj):
        return obj.quantity

    @admin.display(description=_('Low stock?'), boolean=True)
    def low_stock_display(self, obj):
        return obj.is_low_stock


# =========================================================================
# MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(Movement)
class MovementAdmin(ReadOnlyAdmin):
    """Movement admin — read-only. Immutable audit trail."""

    list_display = ['timestamp', 'product', 'kind', 'quantity', 'balance_after', 'note', 'created_by']
    list_filter = ['kind', 'timestamp']
    search_fields = ['note', 'product__sku']
    readonly_fields = ['id', 'product', 'kind', 'quantity', 'balance_after', 'sequence',
                       'note', 'counterparty_id', 'timestamp', 'created_by']
    date_hierarchy = 'timestamp'
    list_select_related = ['product', 'created_by']
