"""Stock and purchase figures extracted from a sales record payload.

The entry form stores these as loosely typed fields. Every default is applied
here so the engines can work with plain numbers.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation


def as_number(value):
    """Coerce a form value to a number; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, Decimal):
        if not value.is_finite():
            return 0
        value = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(Decimal(text))
        except (InvalidOperation, ValueError):
            return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value) if value.is_integer() else value
    return 0


def as_sku_map(value) -> dict:
    """Coerce a ``{sku: count}`` mapping; non-mappings become empty."""
    if not isinstance(value, Mapping):
        return {}
    return {str(sku): as_number(count) for sku, count in value.items()}


@dataclass(frozen=True)
class StockSnapshot:
    """Start and end of shift counts."""

    rolls_start: int = 0
    rolls_end: int = 0
    meat_start_grams: int = 0
    meat_end_grams: int = 0
    drink_stock_start: dict = field(default_factory=dict)
    drink_stock_end: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload) -> "StockSnapshot":
        payload = payload if isinstance(payload, Mapping) else {}
        return cls(
            rolls_start=as_number(payload.get("rolls_start")),
            rolls_end=as_number(payload.get("rolls_end")),
            meat_start_grams=as_number(payload.get("meat_start_grams")),
            meat_end_grams=as_number(payload.get("meat_end_grams")),
            drink_stock_start=as_sku_map(payload.get("drink_stock_start")),
            drink_stock_end=as_sku_map(payload.get("drink_stock_end")),
        )

    def as_dict(self):
        return {
            "rolls_start": self.rolls_start,
            "rolls_end": self.rolls_end,
            "meat_start_grams": self.meat_start_grams,
            "meat_end_grams": self.meat_end_grams,
            "drink_stock_start": dict(self.drink_stock_start),
            "drink_stock_end": dict(self.drink_stock_end),
        }


@dataclass(frozen=True)
class PurchasedStock:
    """Stock bought during the shift."""

    rolls: int = 0
    meat_grams: int = 0
    drinks: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload) -> "PurchasedStock":
        payload = payload if isinstance(payload, Mapping) else {}
        return cls(
            rolls=as_number(payload.get("rolls_purchased")),
            meat_grams=as_number(payload.get("meat_purchased_grams")),
            drinks=as_sku_map(payload.get("drinks_purchased")),
        )

    def as_dict(self):
        return {
            "rolls": self.rolls,
            "meat_grams": self.meat_grams,
            "drinks": dict(self.drinks),
        }
