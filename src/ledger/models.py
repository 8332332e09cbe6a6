"""Models for the shift ledger app.

Rows here are written by the sales/stock entry forms and the shopping list
screen. The daily report pipeline only reads them.
"""
from collections.abc import Mapping

from django.db import models

from core.models import TimeStampedModel


class SalesRecord(TimeStampedModel):
    """Sales and stock submission for one shift date.

    Stock counts, purchased quantities and per-drink maps live in
    ``payload``; there is no separate stock table.
    """

    shift_date = models.DateField("shift date", unique=True)
    completed_by = models.CharField("completed by", max_length=120, blank=True)

    cash_sales = models.DecimalField(
        "cash sales",
        max_digits=12,
        decimal_places=2,
        default=0,
    )
    qr_sales = models.DecimalField(
        "QR sales",
        max_digits=12,
        decimal_places=2,
        default=0,
    )
    grab_sales = models.DecimalField(
        "Grab sales",
        max_digits=12,
        decimal_places=2,
        default=0,
    )
    other_sales = models.DecimalField(
        "other sales",
        max_digits=12,
        decimal_places=2,
        default=0,
    )
    total_sales = models.DecimalField(
        "total sales",
        max_digits=12,
        decimal_places=2,
        default=0,
    )

    notes = models.TextField("notes", blank=True)
    payload = models.JSONField(
        "payload",
        default=dict,
        blank=True,
        help_text="Stock counts, purchases, sales breakdown and drink maps.",
    )

    class Meta:
        verbose_name = "Sales record"
        verbose_name_plural = "Sales records"
        ordering = ["-shift_date"]

    def __str__(self):
        return f"Sales {self.shift_date}"

    def as_report_dict(self):
        """JSON-native view of the record as embedded in a daily report."""
        payload = self.payload if isinstance(self.payload, Mapping) else {}
        sales_breakdown = payload.get("sales_breakdown")
        drinks_sold = payload.get("drinks_sold")
        return {
            "id": str(self.pk),
            "shift_date": self.shift_date.isoformat(),
            "completed_by": self.completed_by,
            "cash_sales": str(self.cash_sales),
            "qr_sales": str(self.qr_sales),
            "grab_sales": str(self.grab_sales),
            "other_sales": str(self.other_sales),
            "total_sales": str(self.total_sales),
            "notes": self.notes,
            "sales_breakdown": dict(sales_breakdown) if isinstance(sales_breakdown, Mapping) else {},
            "drinks_sold": dict(drinks_sold) if isinstance(drinks_sold, Mapping) else {},
        }


class ShoppingListRecord(TimeStampedModel):
    """Replenishment requests raised at the end of a shift."""

    shift_date = models.DateField("shift date", unique=True)
    items = models.JSONField(
        "items",
        default=list,
        blank=True,
        help_text="List of {name, qty, unit, notes}.",
    )

    class Meta:
        verbose_name = "Shopping list"
        verbose_name_plural = "Shopping lists"
        ordering = ["-shift_date"]

    def __str__(self):
        return f"Shopping list {self.shift_date}"

    def as_report_dict(self):
        items = []
        for item in self.items or []:
            if not isinstance(item, dict):
                continue
            items.append({
                "name": str(item.get("name") or ""),
                "qty": item.get("qty"),
                "unit": str(item.get("unit") or ""),
                "notes": str(item.get("notes") or ""),
            })
        return {
            "id": str(self.pk),
            "shift_date": self.shift_date.isoformat(),
            "items": items,
        }
