from datetime import date

import pytest

from ledger.models import SalesRecord
from reports.exceptions import NotFoundError
from reports.insights import NO_SHOPPING_LIST, ROLLS_VARIANCE
from reports.models import DailyReport
from reports.policy import ReportPolicy
from reports.services import compile_report


@pytest.mark.django_db
def test_compile_report_missing_sales_record_raises_not_found(shift_date):
    with pytest.raises(NotFoundError, match="No sales record for 2025-01-15"):
        compile_report(shift_date)


@pytest.mark.django_db
def test_compile_report_builds_every_section(sales_record, shopping_list, shift_date):
    report = compile_report(shift_date)

    assert report["shift_date"] == "2025-01-15"
    assert report["sales"]["id"] == str(sales_record.pk)
    assert report["sales"]["total_sales"] == "9500.50"
    assert report["sales"]["sales_breakdown"] == {"burgers_sold": 40}
    assert report["stock"]["rolls_start"] == 50
    assert report["shopping_list"]["id"] == str(shopping_list.pk)
    assert [item["name"] for item in report["shopping_list"]["items"]] == ["Burger buns", "Cheddar"]
    assert report["purchased_stock"] == {"rolls": 0, "meat_grams": 0, "drinks": {}}
    assert report["variance"]["rolls"] == {"expected": 10, "actual": 10, "diff": 0}
    assert report["variance"]["meat"]["diff"] == 0
    assert set(report["variance"]["drinks"]) == {"Coke", "Sprite"}
    assert report["insights"] == {"risk_score": 0, "insights": [], "flags": []}


@pytest.mark.django_db
def test_compile_report_without_shopping_list(sales_record, shift_date):
    report = compile_report(shift_date)

    assert report["shopping_list"] is None
    assert report["insights"]["flags"] == [NO_SHOPPING_LIST]
    assert report["insights"]["risk_score"] == 20


@pytest.mark.django_db
def test_compile_report_flags_rolls_variance(shopping_list, shift_date, sales_payload):
    sales_payload.update({"rolls_purchased": 20, "rolls_end": 19})
    SalesRecord.objects.create(shift_date=shift_date, payload=sales_payload)

    report = compile_report(shift_date)

    assert report["variance"]["rolls"] == {"expected": 30, "actual": 19, "diff": 11}
    assert report["insights"]["flags"] == [ROLLS_VARIANCE]


@pytest.mark.django_db
def test_compile_report_tolerates_sparse_payload(shift_date):
    SalesRecord.objects.create(shift_date=shift_date, payload={"rolls_start": "abc"})

    report = compile_report(shift_date)

    assert report["stock"]["rolls_start"] == 0
    assert report["variance"]["drinks"] == {}


@pytest.mark.django_db
def test_compile_report_with_list_payload(shift_date):
    SalesRecord.objects.create(shift_date=shift_date, payload=[1, 2])

    report = compile_report(shift_date)

    assert report["sales"]["drinks_sold"] == {}
    assert report["stock"]["rolls_start"] == 0
    assert report["variance"]["rolls"]["diff"] == 0


@pytest.mark.django_db
def test_compile_report_accepts_explicit_policy(sales_record, shopping_list, shift_date):
    report = compile_report(shift_date, policy=ReportPolicy(meat_grams_per_roll=100))

    assert report["variance"]["meat"]["expected_grams"] == 5000 - 40 * 100


@pytest.mark.django_db
def test_compile_report_ignores_other_dates_and_writes_nothing(sales_record):
    with pytest.raises(NotFoundError):
        compile_report(date(2025, 1, 16))

    compile_report(sales_record.shift_date)
    assert DailyReport.objects.count() == 0
