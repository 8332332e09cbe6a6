"""Render a compiled daily report into an A4 PDF."""
from __future__ import annotations

import logging
from collections.abc import Mapping

from django.conf import settings

from core import pdf
from reports.exceptions import RenderError

logger = logging.getLogger("backoffice")

TEMPLATE_NAME = "pdf/daily_report.html"

NO_ITEMS = "No items requested."
NO_NOTES = "No notes provided."
NO_INSIGHTS = "No insights generated."


def _section(report, key) -> Mapping:
    value = report.get(key) if isinstance(report, Mapping) else None
    return value if isinstance(value, Mapping) else {}


def _display(value) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


def _kg(value) -> str:
    try:
        return f"{float(value):.2f}"
    except (TypeError, ValueError):
        return "0.00"


def report_filename(shift_date) -> str:
    return pdf.safe_pdf_filename(f"Daily-Report-{shift_date}", fallback="Daily-Report")


def _sales_rows(sales):
    return [
        ("Completed By", _display(sales.get("completed_by"))),
        ("Cash Sales", _display(sales.get("cash_sales"))),
        ("QR Sales", _display(sales.get("qr_sales"))),
        ("Grab Sales", _display(sales.get("grab_sales"))),
        ("Other Sales", _display(sales.get("other_sales"))),
        ("Total Sales", _display(sales.get("total_sales"))),
        ("Burgers Sold", _display(_section(sales, "sales_breakdown").get("burgers_sold", 0))),
    ]


def _stock_rows(stock):
    rows = [
        ("Rolls", _display(stock.get("rolls_start", 0)), _display(stock.get("rolls_end", 0))),
        (
            "Meat (g)",
            _display(stock.get("meat_start_grams", 0)),
            _display(stock.get("meat_end_grams", 0)),
        ),
    ]
    start = _section(stock, "drink_stock_start")
    end = _section(stock, "drink_stock_end")
    for sku in sorted(set(start) | set(end)):
        rows.append((sku, _display(start.get(sku, 0)), _display(end.get(sku, 0))))
    return rows


def _shopping_rows(shopping_list):
    if not isinstance(shopping_list, Mapping):
        return []
    items = shopping_list.get("items") or []
    rows = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        rows.append((
            _display(item.get("name")),
            _display(item.get("qty")),
            _display(item.get("unit")),
            str(item.get("notes") or ""),
        ))
    return rows


def _purchased_rows(purchased):
    rows = [
        ("Rolls", _display(purchased.get("rolls", 0))),
        ("Meat (g)", _display(purchased.get("meat_grams", 0))),
    ]
    drinks = _section(purchased, "drinks")
    for sku in sorted(drinks):
        rows.append((sku, _display(drinks[sku])))
    return rows


def _variance_rows(variance):
    rolls = _section(variance, "rolls")
    meat = _section(variance, "meat")
    rows = [
        (
            "Rolls",
            _display(rolls.get("expected", 0)),
            _display(rolls.get("actual", 0)),
            _display(rolls.get("diff", 0)),
        ),
        (
            "Meat (kg)",
            _kg(meat.get("expected_kg", 0)),
            _kg(meat.get("actual_kg", 0)),
            _kg(meat.get("diff_kg", 0)),
        ),
    ]
    drinks = _section(variance, "drinks")
    for sku in sorted(drinks):
        drink = drinks[sku] if isinstance(drinks[sku], Mapping) else {}
        rows.append((
            sku,
            _display(drink.get("expected", 0)),
            _display(drink.get("actual", 0)),
            _display(drink.get("diff", 0)),
        ))
    return rows


def build_document_context(report: Mapping) -> dict:
    """Lay out the report sections in their fixed order.

    Pure: the same report always yields the same context. SKUs are sorted so
    the layout does not depend on the key order JSON storage hands back.
    """
    sales = _section(report, "sales")
    stock = _section(report, "stock")
    insights = _section(report, "insights")
    risk_score = insights.get("risk_score", 0) or 0
    insight_items = [
        {
            "severity": _display(item.get("severity")),
            "message": _display(item.get("message")),
        }
        for item in insights.get("insights") or []
        if isinstance(item, Mapping)
    ]

    return {
        "business_name": getattr(settings, "DAILY_REPORT_BUSINESS_NAME", ""),
        "title": "Daily Report",
        "shift_date": _display(report.get("shift_date")),
        "sales_rows": _sales_rows(sales),
        "stock_rows": _stock_rows(stock),
        "shopping_rows": _shopping_rows(report.get("shopping_list")),
        "shopping_placeholder": NO_ITEMS,
        "notes": (sales.get("notes") or "").strip() or NO_NOTES,
        "risk_score": risk_score,
        "insights": insight_items,
        "insights_placeholder": NO_INSIGHTS,
        "purchased_rows": _purchased_rows(_section(report, "purchased_stock")),
        "variance_rows": _variance_rows(_section(report, "variance")),
        # Same value as the insights score, shown under its own heading.
        "security_risk_score": risk_score,
        "security_flags": list(insights.get("flags") or []),
    }


def render_daily_report(report: Mapping) -> bytes:
    """Render *report* to PDF bytes."""
    context = build_document_context(report)
    logger.debug("Rendering daily report PDF for %s", context["shift_date"])
    try:
        return pdf.render_pdf_bytes(TEMPLATE_NAME, context)
    except Exception as exc:
        raise RenderError(f"Could not render daily report for {context['shift_date']}: {exc}") from exc
