"""Celery configuration."""
import os
from celery import Celery
from celery.schedules import crontab

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.getenv("DJANGO_SETTINGS_MODULE", "config.settings.prod"),
)

app = Celery("backoffice")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


@app.on_after_configure.connect
def setup_periodic_tasks(sender, **kwargs):
    """Schedule the daily operations report at DAILY_REPORT_HOUR:DAILY_REPORT_MINUTE local time."""
    from django.conf import settings

    sender.add_periodic_task(
        crontab(minute=settings.DAILY_REPORT_MINUTE, hour=settings.DAILY_REPORT_HOUR),
        sender.signature("reports.tasks.send_daily_report"),
        name="daily-operations-report",
    )
