"""Anomaly flags and risk score for a shift's variance."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from reports.policy import ReportPolicy
from reports.variance import VarianceResult

ROLLS_VARIANCE = "ROLLS_VARIANCE"
MEAT_VARIANCE = "MEAT_VARIANCE"
DRINK_VARIANCE = "DRINK_VARIANCE"
NO_SHOPPING_LIST = "NO_SHOPPING_LIST"

SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"


@dataclass
class InsightResult:
    risk_score: int = 0
    insights: list[dict] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)

    def add(self, flag, severity, message, **extra):
        self.insights.append({"type": flag, "severity": severity, "message": message, **extra})
        self.flags.append(flag)

    def as_dict(self):
        return {
            "risk_score": self.risk_score,
            "insights": [dict(insight) for insight in self.insights],
            "flags": list(self.flags),
        }


def _severity(magnitude, high_threshold):
    return SEVERITY_HIGH if magnitude > high_threshold else SEVERITY_MEDIUM


def _has_shopping_items(shopping_list) -> bool:
    if not isinstance(shopping_list, Mapping):
        return False
    return bool(shopping_list.get("items"))


def risk_score_for(flag_count: int, policy: ReportPolicy) -> int:
    return min(policy.risk_score_cap, policy.risk_points_per_flag * flag_count)


def compute_insights(
    sales,
    stock,
    purchased_stock,
    variance: VarianceResult,
    shopping_list,
    policy: ReportPolicy | None = None,
) -> InsightResult:
    """Classify variances into flagged insights.

    Evaluation order (and therefore output order) is rolls, meat, each drink
    in variance order, then the shopping list. Every flag, including one per
    drink SKU, adds ``risk_points_per_flag`` to the score up to the cap.
    """
    policy = policy or ReportPolicy()
    result = InsightResult()

    rolls_diff = variance.rolls.diff
    if abs(rolls_diff) > policy.rolls_variance_threshold:
        result.add(
            ROLLS_VARIANCE,
            _severity(abs(rolls_diff), policy.rolls_high_severity),
            f"Rolls variance of {rolls_diff} units "
            f"(expected {variance.rolls.expected}, counted {variance.rolls.actual}).",
        )

    meat_diff = variance.meat.diff
    if abs(meat_diff) > policy.meat_variance_threshold_grams:
        result.add(
            MEAT_VARIANCE,
            _severity(abs(meat_diff), policy.meat_high_severity_grams),
            f"Meat variance of {meat_diff}g "
            f"(expected {variance.meat.expected_grams}g, counted {variance.meat.actual_grams}g).",
        )

    for sku, drink in variance.drinks.items():
        if abs(drink.diff) > policy.drink_variance_threshold:
            result.add(
                DRINK_VARIANCE,
                _severity(abs(drink.diff), policy.drink_high_severity),
                f"{sku} variance of {drink.diff} units "
                f"(expected {drink.expected}, counted {drink.actual}).",
                sku=sku,
            )

    if not _has_shopping_items(shopping_list):
        result.add(
            NO_SHOPPING_LIST,
            SEVERITY_MEDIUM,
            "No shopping list was submitted for this shift.",
        )

    result.risk_score = risk_score_for(len(result.flags), policy)
    return result
