"""Expected versus counted stock for rolls, meat and drinks."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from reports.policy import SKU_POLICY_START, ReportPolicy
from reports.snapshot import PurchasedStock, StockSnapshot, as_number, as_sku_map


def grams_to_kg(grams) -> float:
    return round(grams / 1000, 2)


@dataclass(frozen=True)
class QuantityVariance:
    expected: int | float
    actual: int | float

    @property
    def diff(self):
        return self.expected - self.actual

    def as_dict(self):
        return {"expected": self.expected, "actual": self.actual, "diff": self.diff}


@dataclass(frozen=True)
class MeatVariance:
    """Meat variance in grams; kilogram fields are display projections."""

    expected_grams: int | float
    actual_grams: int | float

    @property
    def diff(self):
        return self.expected_grams - self.actual_grams

    @property
    def expected_kg(self) -> float:
        return grams_to_kg(self.expected_grams)

    @property
    def actual_kg(self) -> float:
        return grams_to_kg(self.actual_grams)

    @property
    def diff_kg(self) -> float:
        return grams_to_kg(self.diff)

    def as_dict(self):
        return {
            "expected_grams": self.expected_grams,
            "actual_grams": self.actual_grams,
            "diff": self.diff,
            "expected_kg": self.expected_kg,
            "actual_kg": self.actual_kg,
            "diff_kg": self.diff_kg,
        }


@dataclass(frozen=True)
class VarianceResult:
    rolls: QuantityVariance
    meat: MeatVariance
    drinks: dict[str, QuantityVariance] = field(default_factory=dict)

    def as_dict(self):
        return {
            "rolls": self.rolls.as_dict(),
            "meat": self.meat.as_dict(),
            "drinks": {sku: drink.as_dict() for sku, drink in self.drinks.items()},
        }


def _burgers_sold(sales) -> int:
    breakdown = sales.get("sales_breakdown") if isinstance(sales, Mapping) else None
    if not isinstance(breakdown, Mapping):
        return 0
    return as_number(breakdown.get("burgers_sold"))


def _drink_skus(stock, purchased, sold, policy):
    if policy.drink_sku_policy == SKU_POLICY_START:
        return list(stock.drink_stock_start)
    skus = {}
    for source in (stock.drink_stock_start, stock.drink_stock_end, purchased.drinks, sold):
        for sku in source:
            skus.setdefault(sku, None)
    return list(skus)


def compute_variance(
    sales: Mapping,
    stock: StockSnapshot,
    purchased_stock: PurchasedStock,
    policy: ReportPolicy | None = None,
) -> VarianceResult:
    """Compute stock variances for one shift.

    ``diff`` is always ``expected - actual``: a positive diff means less stock
    was counted than the sales explain.
    """
    policy = policy or ReportPolicy()
    rolls_sold = _burgers_sold(sales)

    rolls = QuantityVariance(
        expected=stock.rolls_start + purchased_stock.rolls - rolls_sold,
        actual=stock.rolls_end,
    )

    meat = MeatVariance(
        expected_grams=(
            stock.meat_start_grams
            + purchased_stock.meat_grams
            - rolls_sold * policy.meat_grams_per_roll
        ),
        actual_grams=stock.meat_end_grams,
    )

    drinks_sold = as_sku_map(sales.get("drinks_sold") if isinstance(sales, Mapping) else None)
    drinks = {}
    for sku in _drink_skus(stock, purchased_stock, drinks_sold, policy):
        drinks[sku] = QuantityVariance(
            expected=(
                stock.drink_stock_start.get(sku, 0)
                + purchased_stock.drinks.get(sku, 0)
                - drinks_sold.get(sku, 0)
            ),
            actual=stock.drink_stock_end.get(sku, 0),
        )

    return VarianceResult(rolls=rolls, meat=meat, drinks=drinks)
