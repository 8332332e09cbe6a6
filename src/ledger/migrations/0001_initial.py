import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SalesRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("shift_date", models.DateField(unique=True, verbose_name="shift date")),
                ("completed_by", models.CharField(blank=True, max_length=120, verbose_name="completed by")),
                ("cash_sales", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="cash sales")),
                ("qr_sales", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="QR sales")),
                ("grab_sales", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="Grab sales")),
                ("other_sales", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="other sales")),
                ("total_sales", models.DecimalField(decimal_places=2, default=0, max_digits=12, verbose_name="total sales")),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                (
                    "payload",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Stock counts, purchases, sales breakdown and drink maps.",
                        verbose_name="payload",
                    ),
                ),
            ],
            options={
                "verbose_name": "Sales record",
                "verbose_name_plural": "Sales records",
                "ordering": ["-shift_date"],
            },
        ),
        migrations.CreateModel(
            name="ShoppingListRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("shift_date", models.DateField(unique=True, verbose_name="shift date")),
                (
                    "items",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="List of {name, qty, unit, notes}.",
                        verbose_name="items",
                    ),
                ),
            ],
            options={
                "verbose_name": "Shopping list",
                "verbose_name_plural": "Shopping lists",
                "ordering": ["-shift_date"],
            },
        ),
    ]
