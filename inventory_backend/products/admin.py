# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (audit-safe ledger):

- Products are editable.
- Stock batches and movements are view-only: quantities change only through
  the stock-in / stock-out services so every change leaves a movement.
"""

from __future__ import annotations

from django.contrib import admin
from django.utils import timezone

from products.models import Product, StockBatch, StockMovement
from products.services.product_list import near_expiry_window


class ReadOnlyAdminMixin:
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =====================================================
# STOCK BATCH INLINE (READ-ONLY)
# =====================================================

class StockBatchInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = StockBatch
    extra = 0
    show_change_link = False

    fields = ("lot_number", "expire_date", "quantity", "created_at")
    readonly_fields = fields
    ordering = ("expire_date", "created_at")


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "barcode",
        "name",
        "unit",
        "min_stock",
        "total_quantity",
        "is_low_stock",
        "created_at",
    )
    list_filter = ("unit", "created_at")
    search_fields = ("barcode", "name")
    ordering = ("name",)
    readonly_fields = ("created_at",)

    inlines = [StockBatchInline]


# =====================================================
# STOCK BATCH (VIEW-ONLY LIST)
# =====================================================

@admin.register(StockBatch)
class StockBatchAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "product",
        "lot_number",
        "expire_date",
        "quantity",
        "expiry_status",
        "created_at",
    )
    list_filter = ("expire_date", "created_at")
    search_fields = ("lot_number", "product__name", "product__barcode")
    ordering = ("expire_date", "created_at")

    def expiry_status(self, obj):
        if obj.expire_date is None:
            return "NO EXPIRY"

        today, cutoff = near_expiry_window(timezone.localdate())

        if obj.expire_date < today:
            return "EXPIRED"

        if obj.expire_date <= cutoff:
            return "SOON"

        return "OK"

    expiry_status.short_description = "Expiry Status"


# =====================================================
# STOCK MOVEMENT (VIEW-ONLY LEDGER)
# =====================================================

@admin.register(StockMovement)
class StockMovementAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "created_at",
        "movement_type",
        "product",
        "lot_number",
        "quantity",
        "session_id",
    )
    list_filter = ("movement_type", "created_at")
    search_fields = ("lot_number", "product__name", "product__barcode", "session_id")
    ordering = ("-created_at",)
