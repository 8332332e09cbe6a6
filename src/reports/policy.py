"""Business thresholds used by the variance and insight engines."""
from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings

SKU_POLICY_START = "start"
SKU_POLICY_UNION = "union"
SKU_POLICIES = (SKU_POLICY_START, SKU_POLICY_UNION)


@dataclass(frozen=True)
class ReportPolicy:
    """Tunable constants for one pipeline run.

    Defaults are the values the restaurant has always reported with.
    Thresholds are exclusive: a variance equal to the threshold is not flagged.
    """

    meat_grams_per_roll: int = 90

    rolls_variance_threshold: int = 5
    rolls_high_severity: int = 20
    meat_variance_threshold_grams: int = 500
    meat_high_severity_grams: int = 1500
    drink_variance_threshold: int = 3
    drink_high_severity: int = 10

    risk_points_per_flag: int = 20
    risk_score_cap: int = 100

    drink_sku_policy: str = SKU_POLICY_UNION

    def __post_init__(self):
        if self.drink_sku_policy not in SKU_POLICIES:
            raise ValueError(
                f"Unknown drink SKU policy {self.drink_sku_policy!r}; "
                f"expected one of {', '.join(SKU_POLICIES)}."
            )

    @classmethod
    def from_settings(cls) -> "ReportPolicy":
        defaults = cls()
        return cls(
            meat_grams_per_roll=getattr(
                settings, "DAILY_REPORT_MEAT_GRAMS_PER_ROLL", defaults.meat_grams_per_roll
            ),
            rolls_variance_threshold=getattr(
                settings, "DAILY_REPORT_ROLLS_VARIANCE_THRESHOLD", defaults.rolls_variance_threshold
            ),
            rolls_high_severity=getattr(
                settings, "DAILY_REPORT_ROLLS_HIGH_SEVERITY", defaults.rolls_high_severity
            ),
            meat_variance_threshold_grams=getattr(
                settings,
                "DAILY_REPORT_MEAT_VARIANCE_THRESHOLD_GRAMS",
                defaults.meat_variance_threshold_grams,
            ),
            meat_high_severity_grams=getattr(
                settings, "DAILY_REPORT_MEAT_HIGH_SEVERITY_GRAMS", defaults.meat_high_severity_grams
            ),
            drink_variance_threshold=getattr(
                settings, "DAILY_REPORT_DRINK_VARIANCE_THRESHOLD", defaults.drink_variance_threshold
            ),
            drink_high_severity=getattr(
                settings, "DAILY_REPORT_DRINK_HIGH_SEVERITY", defaults.drink_high_severity
            ),
            risk_points_per_flag=getattr(
                settings, "DAILY_REPORT_RISK_POINTS_PER_FLAG", defaults.risk_points_per_flag
            ),
            risk_score_cap=getattr(
                settings, "DAILY_REPORT_RISK_SCORE_CAP", defaults.risk_score_cap
            ),
            drink_sku_policy=getattr(
                settings, "DAILY_REPORT_DRINK_SKU_POLICY", defaults.drink_sku_policy
            ),
        )
