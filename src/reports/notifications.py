"""Email delivery of the rendered daily report."""
from __future__ import annotations

import logging
import smtplib
import time
from collections.abc import Mapping

from django.conf import settings

from core.email import send_templated_email
from reports.documents import report_filename
from reports.exceptions import DeliveryError

logger = logging.getLogger("backoffice")

TEMPLATE_NAME = "emails/daily_report"


def _section(report, key):
    value = report.get(key) if isinstance(report, Mapping) else None
    return value if isinstance(value, Mapping) else {}


def build_summary(report: Mapping) -> dict:
    """Plain figures for the email body: score, purchases, variances, flags."""
    insights = _section(report, "insights")
    purchased = _section(report, "purchased_stock")
    variance = _section(report, "variance")

    variance_highlights = []
    rolls_diff = _section(variance, "rolls").get("diff", 0) or 0
    if rolls_diff:
        variance_highlights.append(f"Rolls: {rolls_diff} units")
    meat = _section(variance, "meat")
    if meat.get("diff"):
        variance_highlights.append(f"Meat: {float(meat.get('diff_kg') or 0):.2f} kg")
    drinks = _section(variance, "drinks")
    for sku in sorted(drinks):
        diff = drinks[sku].get("diff", 0) if isinstance(drinks[sku], Mapping) else 0
        if diff:
            variance_highlights.append(f"{sku}: {diff} units")

    security_highlights = [
        f"[{item.get('severity', '').upper()}] {item.get('message', '')}"
        for item in insights.get("insights") or []
        if isinstance(item, Mapping)
    ]

    drinks_purchased = _section(purchased, "drinks")
    return {
        "shift_date": report.get("shift_date"),
        "risk_score": insights.get("risk_score", 0) or 0,
        "rolls_purchased": purchased.get("rolls", 0),
        "meat_purchased_grams": purchased.get("meat_grams", 0),
        "drinks_purchased": [(sku, drinks_purchased[sku]) for sku in sorted(drinks_purchased)],
        "variance_highlights": variance_highlights,
        "security_highlights": security_highlights,
    }


def dispatch_daily_report(document: bytes, shift_date, report: Mapping) -> None:
    """Email the PDF and a text summary to the configured recipients.

    Transport failures are retried up to ``DAILY_REPORT_EMAIL_MAX_ATTEMPTS``
    times with a linear backoff; the last one is raised as DeliveryError.
    """
    recipients = list(getattr(settings, "DAILY_REPORT_RECIPIENTS", []) or [])
    if not recipients:
        raise DeliveryError("No recipients configured for the daily report (DAILY_REPORT_RECIPIENTS).")

    max_attempts = max(1, int(getattr(settings, "DAILY_REPORT_EMAIL_MAX_ATTEMPTS", 3)))
    retry_delay = float(getattr(settings, "DAILY_REPORT_EMAIL_RETRY_DELAY", 5))
    business_name = getattr(settings, "DAILY_REPORT_BUSINESS_NAME", "")
    context = {"business_name": business_name, **build_summary(report)}

    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            sent = send_templated_email(
                subject=f"{business_name} Daily Report {shift_date}".strip(),
                template_name=TEMPLATE_NAME,
                context=context,
                recipient_list=recipients,
                attachments=[(report_filename(shift_date), document, "application/pdf")],
            )
        except (smtplib.SMTPException, OSError) as exc:
            last_error = exc
            logger.warning(
                "Daily report email attempt %d/%d failed for %s: %s",
                attempt,
                max_attempts,
                shift_date,
                exc,
                extra={"shift_date": str(shift_date), "step": "dispatch"},
            )
        else:
            if sent:
                logger.info("Daily report for %s emailed to %d recipient(s).", shift_date, len(recipients))
                return
            last_error = DeliveryError("Mail backend reported 0 messages sent.")
            logger.warning(
                "Daily report email attempt %d/%d sent nothing for %s.",
                attempt,
                max_attempts,
                shift_date,
                extra={"shift_date": str(shift_date), "step": "dispatch"},
            )
        if attempt < max_attempts and retry_delay > 0:
            time.sleep(retry_delay * attempt)

    logger.error(
        "Daily report email failed for %s after %d attempt(s): %s",
        shift_date,
        max_attempts,
        last_error,
        extra={"shift_date": str(shift_date), "step": "dispatch"},
    )
    raise DeliveryError(f"Could not deliver daily report for {shift_date}: {last_error}") from last_error
