from datetime import date

import pytest

from reports.exceptions import ValidationError
from reports.models import DailyReport
from reports.services import compile_report, reports_in_range, save_report, search_reports


@pytest.mark.django_db
def test_save_report_creates_row_with_references(sales_record, shopping_list, shift_date):
    report = compile_report(shift_date)

    report_id = save_report(report)

    daily_report = DailyReport.objects.get(pk=report_id)
    assert daily_report.date == shift_date
    assert daily_report.sales_record_id == sales_record.pk
    assert daily_report.shopping_list_id == shopping_list.pk
    assert daily_report.risk_score == 0
    assert daily_report.payload == report


@pytest.mark.django_db
def test_save_report_is_idempotent_per_date(sales_record, shift_date):
    first_id = save_report(compile_report(shift_date))

    sales_record.payload = {**sales_record.payload, "rolls_end": 0}
    sales_record.save()
    second_id = save_report(compile_report(shift_date))

    assert first_id == second_id
    assert DailyReport.objects.filter(date=shift_date).count() == 1
    daily_report = DailyReport.objects.get(pk=first_id)
    assert daily_report.payload["variance"]["rolls"]["diff"] == 10
    assert daily_report.risk_score == 40


@pytest.mark.django_db
def test_save_report_without_shopping_list(sales_record, shift_date):
    report_id = save_report(compile_report(shift_date))

    assert DailyReport.objects.get(pk=report_id).shopping_list_id is None


@pytest.mark.django_db
def test_stored_report_outlives_ledger_row(sales_record, shift_date):
    report_id = save_report(compile_report(shift_date))

    sales_record.delete()

    daily_report = DailyReport.objects.get(pk=report_id)
    assert daily_report.sales_record_id is None
    assert daily_report.payload["sales"]["completed_by"] == "Night Manager"


@pytest.mark.django_db
def test_search_reports_requires_a_term():
    with pytest.raises(ValidationError):
        search_reports("   ")


@pytest.mark.django_db
def test_reports_in_range_is_inclusive_and_ordered(sales_record, shift_date):
    save_report(compile_report(shift_date))

    assert [r.date for r in reports_in_range(shift_date, shift_date)] == [shift_date]
    with pytest.raises(ValidationError):
        reports_in_range(shift_date, date(2025, 1, 1))
