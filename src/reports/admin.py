"""Admin configuration for the reports app."""
from django.contrib import admin

from reports.models import DailyReport


@admin.register(DailyReport)
class DailyReportAdmin(admin.ModelAdmin):
    """Admin for the DailyReport model."""

    list_display = (
        "date",
        "risk_score",
        "emailed_at",
        "delivery_error",
        "created_at",
        "updated_at",
    )
    list_filter = ("risk_score",)
    search_fields = ("delivery_error",)
    list_select_related = ("sales_record", "shopping_list")
    date_hierarchy = "date"
    readonly_fields = ("id", "created_at", "updated_at", "emailed_at")
    ordering = ["-date"]
