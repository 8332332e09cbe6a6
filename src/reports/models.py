"""Models for the reports app."""
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from core.models import TimeStampedModel


class DailyReport(TimeStampedModel):
    """Compiled daily operations report for one shift date.

    Written by the report pipeline (typically the ``send_daily_report``
    Celery task). Regenerating a date updates the existing row, so there is
    at most one report per shift date. ``payload`` is the durable copy: PDFs
    requested later are re-rendered from it, not from the live ledger.
    """

    date = models.DateField("shift date", unique=True)
    sales_record = models.ForeignKey(
        "ledger.SalesRecord",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="daily_reports",
        verbose_name="sales record",
        help_text="Also the stock source: stock counts are part of the sales record.",
    )
    shopping_list = models.ForeignKey(
        "ledger.ShoppingListRecord",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="daily_reports",
        verbose_name="shopping list",
    )
    payload = models.JSONField("report", default=dict, encoder=DjangoJSONEncoder)
    risk_score = models.PositiveSmallIntegerField("risk score", default=0)

    # Delivery
    emailed_at = models.DateTimeField("emailed at", null=True, blank=True)
    delivery_error = models.TextField("last delivery error", blank=True)

    class Meta:
        verbose_name = "Daily report"
        verbose_name_plural = "Daily reports"
        ordering = ["-date"]

    def __str__(self):
        return f"Daily report {self.date}"
