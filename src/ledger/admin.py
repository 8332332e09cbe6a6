"""Admin configuration for the ledger app."""
from django.contrib import admin

from ledger.models import SalesRecord, ShoppingListRecord


@admin.register(SalesRecord)
class SalesRecordAdmin(admin.ModelAdmin):
    """Admin for submitted shift sales."""

    list_display = (
        "shift_date",
        "completed_by",
        "cash_sales",
        "qr_sales",
        "grab_sales",
        "other_sales",
        "total_sales",
    )
    search_fields = ("completed_by", "notes")
    date_hierarchy = "shift_date"
    readonly_fields = ("id", "created_at", "updated_at")
    ordering = ["-shift_date"]


@admin.register(ShoppingListRecord)
class ShoppingListRecordAdmin(admin.ModelAdmin):
    list_display = ("shift_date", "item_count", "created_at")
    date_hierarchy = "shift_date"
    readonly_fields = ("id", "created_at", "updated_at")
    ordering = ["-shift_date"]

    @admin.display(description="items")
    def item_count(self, obj):
        return len(obj.items or [])
