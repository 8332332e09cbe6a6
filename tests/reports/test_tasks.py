from datetime import date, datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo

import pytest
from django.core import mail

from reports import services
from reports.exceptions import DeliveryError, RenderError, ValidationError
from reports.models import DailyReport
from reports.tasks import previous_shift_date, send_daily_report


def test_previous_shift_date_uses_business_time_zone():
    bangkok = ZoneInfo("Asia/Bangkok")

    assert previous_shift_date(datetime(2025, 1, 16, 3, 30, tzinfo=bangkok)) == date(2025, 1, 15)
    # 20:00 UTC is already 03:00 the next day in Bangkok.
    assert previous_shift_date(datetime(2025, 1, 15, 20, 0, tzinfo=dt_timezone.utc)) == date(2025, 1, 15)


@pytest.mark.django_db
def test_send_daily_report_generates_and_emails(sales_record, shopping_list):
    result = send_daily_report("2025-01-15")

    assert result["status"] == "ok"
    assert result["date"] == "2025-01-15"
    assert result["emailed"] is True
    assert DailyReport.objects.filter(pk=result["report_id"]).exists()
    assert len(mail.outbox) == 1


@pytest.mark.django_db
def test_send_daily_report_runs_eagerly_through_celery(sales_record):
    result = send_daily_report.delay("2025-01-15").get()

    assert result["status"] == "ok"


@pytest.mark.django_db
def test_send_daily_report_without_data_is_not_an_error():
    result = send_daily_report("2025-02-01")

    assert result == {"status": "no_data", "date": "2025-02-01"}
    assert DailyReport.objects.count() == 0
    assert mail.outbox == []


@pytest.mark.django_db
def test_send_daily_report_skips_when_run_in_progress(sales_record, shift_date):
    services._running_dates.add(shift_date)

    result = send_daily_report("2025-01-15")

    assert result == {"status": "skipped", "date": "2025-01-15"}


@pytest.mark.django_db
def test_send_daily_report_reraises_delivery_failure(sales_record, settings):
    settings.DAILY_REPORT_RECIPIENTS = []

    with pytest.raises(DeliveryError):
        send_daily_report("2025-01-15")

    assert DailyReport.objects.filter(date=sales_record.shift_date).exists()


@pytest.mark.django_db
@pytest.mark.parametrize("raw_date", ["2025-13-01", "15/01/2025", "yesterday"])
def test_send_daily_report_rejects_malformed_shift_date(raw_date):
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        send_daily_report(raw_date)

    assert DailyReport.objects.count() == 0


@pytest.mark.django_db
def test_send_daily_report_reraises_render_failure(sales_record, monkeypatch):
    def broken_write_pdf(html_string):
        raise RuntimeError("backend down")

    monkeypatch.setattr("core.pdf._write_pdf", broken_write_pdf)

    with pytest.raises(RenderError):
        send_daily_report("2025-01-15")

    assert DailyReport.objects.count() == 0
    assert mail.outbox == []


@pytest.mark.django_db
def test_send_daily_report_defaults_to_previous_shift(monkeypatch, sales_record):
    monkeypatch.setattr("reports.tasks.previous_shift_date", lambda: sales_record.shift_date)

    result = send_daily_report()

    assert result["date"] == "2025-01-15"
    assert result["status"] == "ok"
