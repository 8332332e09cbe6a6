"""Celery tasks for the reports app."""
import logging
from datetime import date, timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from reports.exceptions import (
    DeliveryError,
    NotFoundError,
    PersistenceError,
    RenderError,
    ReportInProgressError,
    ValidationError,
)
from reports.services import run_report_pipeline

logger = logging.getLogger("backoffice")


def previous_shift_date(now=None) -> date:
    """Yesterday in the business time zone (``settings.TIME_ZONE``)."""
    return timezone.localdate(now) - timedelta(days=1)


@shared_task(
    name="reports.tasks.send_daily_report",
    soft_time_limit=getattr(settings, "DAILY_REPORT_TASK_TIME_LIMIT", 300),
)
def send_daily_report(shift_date=None):
    """Generate, store and email the daily report.

    Runs once per day (see ``config/celery.py`` beat schedule) for the
    previous shift. *shift_date* (``YYYY-MM-DD``) allows a manual re-run.
    A date without sales data is not a failure.
    """
    if shift_date:
        try:
            target = date.fromisoformat(shift_date)
        except ValueError as exc:
            logger.error("Daily report not run: invalid shift_date %r.", shift_date,
                         extra={"shift_date": shift_date, "step": "schedule"})
            raise ValidationError(f"Invalid shift_date {shift_date!r}; expected YYYY-MM-DD.") from exc
    else:
        target = previous_shift_date()
    log_extra = {"shift_date": target.isoformat()}

    try:
        run = run_report_pipeline(target, send_email=True)
    except NotFoundError as exc:
        logger.info("Daily report skipped: %s", exc, extra=log_extra)
        return {"status": "no_data", "date": target.isoformat()}
    except ReportInProgressError as exc:
        logger.warning("Daily report skipped: %s", exc, extra=log_extra)
        return {"status": "skipped", "date": target.isoformat()}
    except PersistenceError:
        logger.exception("Daily report for %s failed while loading or saving.", target,
                         extra={**log_extra, "step": "persist"})
        raise
    except RenderError:
        logger.exception("Daily report for %s could not be rendered.", target,
                         extra={**log_extra, "step": "render"})
        raise
    except DeliveryError:
        logger.error("Daily report for %s was saved but not delivered.", target,
                     extra={**log_extra, "step": "dispatch"})
        raise

    logger.info("Daily report for %s completed (id=%s).", target, run.report_id, extra=log_extra)
    return {"status": "ok", "date": target.isoformat(), "report_id": run.report_id, "emailed": run.emailed}
