"""Service functions for the daily report pipeline.

These functions hold the orchestration so the API views, the Celery task and
the management command all run reports the same way.
"""
from __future__ import annotations

import hashlib
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date

from django.db import DatabaseError, connection, transaction
from django.db.models import Q
from django.utils import timezone

from ledger.models import SalesRecord, ShoppingListRecord
from reports.documents import render_daily_report
from reports.exceptions import (
    DeliveryError,
    NotFoundError,
    PersistenceError,
    ReportInProgressError,
    ValidationError,
)
from reports.insights import compute_insights
from reports.models import DailyReport
from reports.notifications import dispatch_daily_report
from reports.policy import ReportPolicy
from reports.snapshot import PurchasedStock, StockSnapshot
from reports.variance import compute_variance

logger = logging.getLogger("backoffice")


@dataclass
class ReportRun:
    """Outcome of one pipeline run."""

    report_id: str
    shift_date: date
    emailed: bool
    document: bytes


# ---------------------------------------------------------------------------
# Compile
# ---------------------------------------------------------------------------

def compile_report(shift_date: date, policy: ReportPolicy | None = None) -> dict:
    """Build the CompiledReport for *shift_date* from the ledger.

    Raises NotFoundError when no sales record exists for the date. The
    shopping list is optional. Nothing is written.
    """
    policy = policy or ReportPolicy.from_settings()
    try:
        sales_record = SalesRecord.objects.filter(shift_date=shift_date).first()
        shopping_record = (
            ShoppingListRecord.objects.filter(shift_date=shift_date).first()
            if sales_record is not None
            else None
        )
    except DatabaseError as exc:
        raise PersistenceError(f"Could not load ledger rows for {shift_date}: {exc}") from exc

    if sales_record is None:
        raise NotFoundError(f"No sales record for {shift_date.isoformat()}")

    sales = sales_record.as_report_dict()
    stock = StockSnapshot.from_payload(sales_record.payload)
    purchased_stock = PurchasedStock.from_payload(sales_record.payload)
    shopping_list = shopping_record.as_report_dict() if shopping_record else None

    variance = compute_variance(sales, stock, purchased_stock, policy)
    insights = compute_insights(sales, stock, purchased_stock, variance, shopping_list, policy)

    return {
        "shift_date": shift_date.isoformat(),
        "sales": sales,
        "stock": stock.as_dict(),
        "shopping_list": shopping_list,
        "variance": variance.as_dict(),
        "purchased_stock": purchased_stock.as_dict(),
        "insights": insights.as_dict(),
    }


# ---------------------------------------------------------------------------
# Persist
# ---------------------------------------------------------------------------

def _ref(section):
    return section.get("id") if isinstance(section, dict) else None


def save_report(report: dict) -> str:
    """Insert or update the DailyReport for ``report["shift_date"]``.

    Idempotent per date: an existing row keeps its id and gets the new
    payload. Returns the report id as a string.
    """
    shift_date = date.fromisoformat(report["shift_date"])
    insights = report.get("insights") or {}
    try:
        with transaction.atomic():
            daily_report, created = DailyReport.objects.update_or_create(
                date=shift_date,
                defaults={
                    "payload": report,
                    "sales_record_id": _ref(report.get("sales")),
                    "shopping_list_id": _ref(report.get("shopping_list")),
                    "risk_score": insights.get("risk_score", 0) or 0,
                },
            )
    except DatabaseError as exc:
        raise PersistenceError(f"Could not save daily report for {shift_date}: {exc}") from exc

    logger.info(
        "Daily report %s for %s (id=%s).",
        "created" if created else "updated",
        shift_date,
        daily_report.pk,
    )
    return str(daily_report.pk)


# ---------------------------------------------------------------------------
# Run lock
# ---------------------------------------------------------------------------

_running_dates: set[date] = set()
_running_guard = threading.Lock()


def _lock_key(shift_date: date) -> int:
    digest = hashlib.sha256(f"daily-report:{shift_date.isoformat()}".encode()).digest()
    return int.from_bytes(digest[:8], "big", signed=True)


@contextmanager
def report_run_lock(shift_date: date):
    """Serialize pipeline runs for one shift date.

    Runs inside a transaction. On PostgreSQL a transaction-scoped advisory
    lock covers other processes; the in-process set covers threads and
    databases without advisory locks.
    """
    with _running_guard:
        if shift_date in _running_dates:
            raise ReportInProgressError(f"A report run for {shift_date} is already in progress.")
        _running_dates.add(shift_date)
    try:
        with transaction.atomic():
            if connection.vendor == "postgresql":
                with connection.cursor() as cursor:
                    cursor.execute("SELECT pg_try_advisory_xact_lock(%s)", [_lock_key(shift_date)])
                    row = cursor.fetchone()
                if not (row and row[0]):
                    raise ReportInProgressError(
                        f"A report run for {shift_date} is already in progress."
                    )
            yield
    finally:
        with _running_guard:
            _running_dates.discard(shift_date)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def _record_delivery(report_id, *, error=""):
    updates = {"delivery_error": error}
    if not error:
        updates["emailed_at"] = timezone.now()
    DailyReport.objects.filter(pk=report_id).update(**updates)


def run_report_pipeline(shift_date: date, *, send_email: bool = False) -> ReportRun:
    """Compile, render, persist and optionally email the report for a date.

    The report is saved before any email is attempted, so a delivery
    failure never leaves an unrecorded report. DeliveryError propagates after
    the failure is stored on the row.
    """
    with report_run_lock(shift_date):
        report = compile_report(shift_date)
        document = render_daily_report(report)
        report_id = save_report(report)

    emailed = False
    if send_email:
        try:
            dispatch_daily_report(document, shift_date, report)
        except DeliveryError as exc:
            try:
                _record_delivery(report_id, error=str(exc))
            except DatabaseError:
                logger.exception("Could not record delivery failure for %s", shift_date,
                                 extra={"shift_date": shift_date.isoformat(), "step": "dispatch"})
            raise
        _record_delivery(report_id)
        emailed = True

    return ReportRun(report_id=report_id, shift_date=shift_date, emailed=emailed, document=document)


def render_stored_report(daily_report: DailyReport) -> bytes:
    """Re-render a persisted report from its stored payload."""
    return render_daily_report(daily_report.payload)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def search_reports(query: str):
    """Reports whose date or serialized variance block contains *query*."""
    query = (query or "").strip()
    if not query:
        raise ValidationError("Missing search term.")
    return DailyReport.objects.filter(
        Q(date__icontains=query) | Q(payload__variance__icontains=query)
    ).order_by("-date")


def reports_in_range(start: date, end: date):
    if start > end:
        raise ValidationError(f"start {start} is after end {end}.")
    return DailyReport.objects.filter(date__gte=start, date__lte=end).order_by("date")
