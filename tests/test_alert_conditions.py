"""Decoding of the JSON conditions stored on alerts."""

from __future__ import annotations

from decimal import Decimal

import pytest

from pfm_simulator.application.use_cases.alert_evaluation import (
    BalanceThreshold,
    ConditionEvaluationError,
    GoalMilestone,
    MerchantName,
    SpendingTarget,
    TransactionLimit,
    UpcomingBill,
    decode_conditions,
)


def test_decodes_each_alert_type_into_its_condition() -> None:
    assert decode_conditions(
        "account_threshold", {"account_id": "12", "threshold": "100.00", "direction": "below"}
    ) == BalanceThreshold(account_id=12, threshold=Decimal("100.00"), direction="below")
    assert decode_conditions("goal", {"goal_id": 3, "milestone_percentage": 50}) == GoalMilestone(
        goal_id=3, milestone_percentage=Decimal("50")
    )
    assert decode_conditions("merchant_name", {"merchant_pattern": "  Coffee "}) == MerchantName(
        merchant_pattern="Coffee", match_type="contains"
    )
    assert decode_conditions(
        "spending_target", {"budget_id": 4, "threshold_percentage": 80}
    ) == SpendingTarget(budget_id=4, threshold_percentage=Decimal("80"))
    assert decode_conditions("transaction_limit", {"amount": "500.00"}) == TransactionLimit(
        amount=Decimal("500.00"), account_id=None
    )
    assert decode_conditions("upcoming_bill", {"bill_id": 9, "days_before": 0}) == UpcomingBill(
        bill_id=9, days_before=0
    )


@pytest.mark.parametrize(
    ("alert_type", "payload"),
    [
        ("unknown", {}),
        ("account_threshold", ["not", "a", "mapping"]),
        ("account_threshold", {"threshold": "100.00", "direction": "below"}),
        ("account_threshold", {"account_id": 1, "threshold": "abc", "direction": "below"}),
        ("account_threshold", {"account_id": 1, "threshold": "10", "direction": "sideways"}),
        ("goal", {"goal_id": True, "milestone_percentage": 10}),
        ("merchant_name", {"merchant_pattern": "   "}),
        ("merchant_name", {"merchant_pattern": "x", "match_type": "regex"}),
        ("spending_target", {"budget_id": 1}),
        ("transaction_limit", {"amount": "NaN"}),
        ("upcoming_bill", {"bill_id": 1, "days_before": -1}),
    ],
)
def test_malformed_conditions_are_rejected(alert_type, payload) -> None:
    with pytest.raises(ConditionEvaluationError):
        decode_conditions(alert_type, payload)


def test_condition_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        decode_conditions("goal", {})


@pytest.mark.parametrize(
    ("match_type", "merchant", "expected"),
    [
        ("contains", "STARBUCKS #123", True),
        ("contains", "Dunkin", False),
        ("exact", "starbucks", True),
        ("exact", "Starbucks Reserve", False),
        ("contains", None, False),
    ],
)
def test_merchant_matching_ignores_case(match_type, merchant, expected) -> None:
    condition = MerchantName(merchant_pattern="Starbucks", match_type=match_type)
    assert condition.matches(merchant) is expected
