import pytest

from reports.insights import (
    DRINK_VARIANCE,
    MEAT_VARIANCE,
    NO_SHOPPING_LIST,
    ROLLS_VARIANCE,
    compute_insights,
    risk_score_for,
)
from reports.policy import ReportPolicy
from reports.snapshot import PurchasedStock, StockSnapshot
from reports.variance import MeatVariance, QuantityVariance, VarianceResult

SHOPPING_LIST = {"id": "1", "items": [{"name": "Buns", "qty": 10, "unit": "pcs", "notes": ""}]}


def _variance(rolls_diff=0, meat_diff=0, drinks=None):
    return VarianceResult(
        rolls=QuantityVariance(expected=100 + rolls_diff, actual=100),
        meat=MeatVariance(expected_grams=5000 + meat_diff, actual_grams=5000),
        drinks={
            sku: QuantityVariance(expected=20 + diff, actual=20)
            for sku, diff in (drinks or {}).items()
        },
    )


def _insights(variance, shopping_list=SHOPPING_LIST, policy=None):
    return compute_insights({}, StockSnapshot(), PurchasedStock(), variance, shopping_list, policy)


def test_balanced_shift_with_shopping_list_has_no_flags():
    result = _insights(_variance())

    assert result.as_dict() == {"risk_score": 0, "insights": [], "flags": []}


@pytest.mark.parametrize(
    "diff, severity",
    [(5, None), (-5, None), (6, "medium"), (-6, "medium"), (20, "medium"), (21, "high"), (-21, "high")],
)
def test_rolls_threshold_is_exclusive(diff, severity):
    result = _insights(_variance(rolls_diff=diff))

    if severity is None:
        assert ROLLS_VARIANCE not in result.flags
    else:
        assert result.flags == [ROLLS_VARIANCE]
        assert result.insights[0]["severity"] == severity
        assert str(diff) in result.insights[0]["message"]


@pytest.mark.parametrize(
    "diff, severity",
    [(500, None), (501, "medium"), (1500, "medium"), (1501, "high"), (-1501, "high")],
)
def test_meat_threshold_is_exclusive(diff, severity):
    result = _insights(_variance(meat_diff=diff))

    if severity is None:
        assert result.flags == []
    else:
        assert result.flags == [MEAT_VARIANCE]
        assert result.insights[0]["severity"] == severity


@pytest.mark.parametrize("diff, severity", [(3, None), (4, "medium"), (10, "medium"), (11, "high")])
def test_drink_threshold_is_exclusive(diff, severity):
    result = _insights(_variance(drinks={"Coke": diff}))

    if severity is None:
        assert result.flags == []
    else:
        assert result.flags == [DRINK_VARIANCE]
        assert result.insights[0]["severity"] == severity
        assert result.insights[0]["sku"] == "Coke"


def test_each_drink_sku_counts_as_its_own_flag():
    result = _insights(_variance(drinks={"Coke": 5, "Sprite": -4, "Water": 1}))

    assert result.flags == [DRINK_VARIANCE, DRINK_VARIANCE]
    assert [insight["sku"] for insight in result.insights] == ["Coke", "Sprite"]
    assert result.risk_score == 40


@pytest.mark.parametrize("shopping_list", [None, {}, {"items": []}, "not a list"])
def test_missing_or_empty_shopping_list_is_flagged(shopping_list):
    result = _insights(_variance(), shopping_list=shopping_list)

    assert result.flags == [NO_SHOPPING_LIST]
    assert result.insights[0]["severity"] == "medium"
    assert result.risk_score >= 20


def test_flags_are_emitted_in_evaluation_order():
    result = _insights(
        _variance(rolls_diff=30, meat_diff=600, drinks={"Coke": 12}),
        shopping_list=None,
    )

    assert result.flags == [ROLLS_VARIANCE, MEAT_VARIANCE, DRINK_VARIANCE, NO_SHOPPING_LIST]
    assert [insight["type"] for insight in result.insights] == result.flags
    assert result.risk_score == 80


def test_risk_score_is_capped():
    result = _insights(
        _variance(rolls_diff=30, meat_diff=600, drinks={"Coke": 12, "Sprite": 12, "Water": 12}),
        shopping_list=None,
    )

    assert len(result.flags) == 6
    assert result.risk_score == 100


def test_risk_score_uses_policy_points_and_cap():
    policy = ReportPolicy(risk_points_per_flag=15, risk_score_cap=40)

    assert risk_score_for(0, policy) == 0
    assert risk_score_for(2, policy) == 30
    assert risk_score_for(3, policy) == 40


def test_thresholds_come_from_policy():
    policy = ReportPolicy(rolls_variance_threshold=1, rolls_high_severity=2)

    result = _insights(_variance(rolls_diff=3), policy=policy)

    assert result.flags == [ROLLS_VARIANCE]
    assert result.insights[0]["severity"] == "high"
