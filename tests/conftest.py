from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from ledger.models import SalesRecord, ShoppingListRecord
from reports import services

SHIFT_DATE = date(2025, 1, 15)


def fake_write_pdf(html_string):
    return b"%PDF-FAKE\n" + html_string.encode("utf-8")


@pytest.fixture(autouse=True)
def fake_pdf_backend(monkeypatch):
    """Keep WeasyPrint out of the tests; the fake PDF embeds the rendered HTML."""
    monkeypatch.setattr("core.pdf._write_pdf", fake_write_pdf)


@pytest.fixture(autouse=True)
def clear_run_locks():
    services._running_dates.clear()
    yield
    services._running_dates.clear()


@pytest.fixture
def shift_date():
    return SHIFT_DATE


@pytest.fixture
def sales_payload():
    return {
        "rolls_start": 50,
        "rolls_end": 10,
        "rolls_purchased": 0,
        "meat_start_grams": 5000,
        "meat_end_grams": 1400,
        "meat_purchased_grams": 0,
        "drink_stock_start": {"Coke": 24, "Sprite": 12},
        "drink_stock_end": {"Coke": 14, "Sprite": 10},
        "drinks_purchased": {},
        "drinks_sold": {"Coke": 10, "Sprite": 2},
        "sales_breakdown": {"burgers_sold": 40},
    }


@pytest.fixture
def sales_record(db, shift_date, sales_payload):
    return SalesRecord.objects.create(
        shift_date=shift_date,
        completed_by="Night Manager",
        cash_sales=Decimal("4500.00"),
        qr_sales=Decimal("3200.50"),
        grab_sales=Decimal("1800.00"),
        other_sales=Decimal("0.00"),
        total_sales=Decimal("9500.50"),
        notes="Fryer 2 running hot.",
        payload=sales_payload,
    )


@pytest.fixture
def shopping_list(db, shift_date):
    return ShoppingListRecord.objects.create(
        shift_date=shift_date,
        items=[
            {"name": "Burger buns", "qty": 100, "unit": "pcs", "notes": "Brioche"},
            {"name": "Cheddar", "qty": 2, "unit": "kg"},
        ],
    )


@pytest.fixture
def staff_user(db):
    return get_user_model().objects.create_user(
        username="manager",
        email="manager@test.com",
        password="testpass123",
    )


@pytest.fixture
def api_client(client, staff_user):
    client.force_login(staff_user)
    return client
