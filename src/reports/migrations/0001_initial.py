import uuid

import django.core.serializers.json
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("ledger", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DailyReport",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("date", models.DateField(unique=True, verbose_name="shift date")),
                (
                    "payload",
                    models.JSONField(
                        default=dict,
                        encoder=django.core.serializers.json.DjangoJSONEncoder,
                        verbose_name="report",
                    ),
                ),
                ("risk_score", models.PositiveSmallIntegerField(default=0, verbose_name="risk score")),
                ("emailed_at", models.DateTimeField(blank=True, null=True, verbose_name="emailed at")),
                ("delivery_error", models.TextField(blank=True, verbose_name="last delivery error")),
                (
                    "sales_record",
                    models.ForeignKey(
                        blank=True,
                        help_text="Also the stock source: stock counts are part of the sales record.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="daily_reports",
                        to="ledger.salesrecord",
                        verbose_name="sales record",
                    ),
                ),
                (
                    "shopping_list",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="daily_reports",
                        to="ledger.shoppinglistrecord",
                        verbose_name="shopping list",
                    ),
                ),
            ],
            options={
                "verbose_name": "Daily report",
                "verbose_name_plural": "Daily reports",
                "ordering": ["-date"],
            },
        ),
    ]
