from datetime import date

import pytest

from ledger.models import SalesRecord, ShoppingListRecord


@pytest.mark.django_db
def test_sales_record_report_dict_is_json_native(sales_record):
    data = sales_record.as_report_dict()

    assert data["id"] == str(sales_record.pk)
    assert data["shift_date"] == "2025-01-15"
    assert data["cash_sales"] == "4500.00"
    assert data["drinks_sold"] == {"Coke": 10, "Sprite": 2}
    assert data["sales_breakdown"] == {"burgers_sold": 40}


@pytest.mark.django_db
def test_sales_record_report_dict_defaults_missing_maps():
    record = SalesRecord.objects.create(shift_date=date(2025, 1, 1))

    data = record.as_report_dict()

    assert data["sales_breakdown"] == {}
    assert data["drinks_sold"] == {}


@pytest.mark.django_db
@pytest.mark.parametrize("payload", [[1, 2], "junk", {"sales_breakdown": "x", "drinks_sold": [1]}])
def test_sales_record_report_dict_ignores_non_mapping_payload(payload):
    record = SalesRecord.objects.create(shift_date=date(2025, 1, 1), payload=payload)

    data = record.as_report_dict()

    assert data["sales_breakdown"] == {}
    assert data["drinks_sold"] == {}


@pytest.mark.django_db
def test_shopping_list_report_dict_normalizes_items():
    record = ShoppingListRecord.objects.create(
        shift_date=date(2025, 1, 1),
        items=[{"name": "Buns", "qty": 5}, "junk"],
    )

    assert record.as_report_dict()["items"] == [{"name": "Buns", "qty": 5, "unit": "", "notes": ""}]
