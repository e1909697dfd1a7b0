"""Typed alert conditions decoded from the JSON stored on each alert."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Union

from pfm_simulator.domain.entities import (
    ALERT_TYPE_ACCOUNT_THRESHOLD,
    ALERT_TYPE_GOAL,
    ALERT_TYPE_MERCHANT_NAME,
    ALERT_TYPE_SPENDING_TARGET,
    ALERT_TYPE_TRANSACTION_LIMIT,
    ALERT_TYPE_UPCOMING_BILL,
)

DIRECTION_BELOW = "below"
DIRECTION_ABOVE = "above"
MATCH_EXACT = "exact"
MATCH_CONTAINS = "contains"


class ConditionEvaluationError(ValueError):
    """Raised when an alert's conditions cannot be decoded or evaluated."""


@dataclass(frozen=True)
class BalanceThreshold:
    account_id: int
    threshold: Decimal
    direction: str


@dataclass(frozen=True)
class GoalMilestone:
    goal_id: int
    milestone_percentage: Decimal


@dataclass(frozen=True)
class MerchantName:
    merchant_pattern: str
    match_type: str = MATCH_CONTAINS

    def matches(self, merchant: str | None) -> bool:
        if not merchant:
            return False
        candidate = merchant.lower()
        pattern = self.merchant_pattern.lower()
        if self.match_type == MATCH_EXACT:
            return candidate == pattern
        return pattern in candidate


@dataclass(frozen=True)
class SpendingTarget:
    budget_id: int
    threshold_percentage: Decimal


@dataclass(frozen=True)
class TransactionLimit:
    amount: Decimal
    account_id: int | None = None


@dataclass(frozen=True)
class UpcomingBill:
    bill_id: int
    days_before: int


AlertCondition = Union[
    BalanceThreshold,
    GoalMilestone,
    MerchantName,
    SpendingTarget,
    TransactionLimit,
    UpcomingBill,
]


def _require(payload: Mapping[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None or value == "":
        raise ConditionEvaluationError(f"Missing condition field '{key}'")
    return value


def _as_int(payload: Mapping[str, Any], key: str) -> int:
    value = _require(payload, key)
    if isinstance(value, bool):
        raise ConditionEvaluationError(f"Condition field '{key}' must be an integer")
    try:
        return int(str(value))
    except ValueError as exc:
        raise ConditionEvaluationError(
            f"Condition field '{key}' must be an integer"
        ) from exc


def _as_decimal(payload: Mapping[str, Any], key: str) -> Decimal:
    value = _require(payload, key)
    if isinstance(value, bool):
        raise ConditionEvaluationError(f"Condition field '{key}' must be numeric")
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ConditionEvaluationError(f"Condition field '{key}' must be numeric") from exc
    if not number.is_finite():
        raise ConditionEvaluationError(f"Condition field '{key}' must be numeric")
    return number


def _as_choice(
    payload: Mapping[str, Any], key: str, choices: tuple[str, ...], default: str | None = None
) -> str:
    value = payload.get(key)
    if value in (None, "") and default is not None:
        return default
    if value not in choices:
        allowed = ", ".join(choices)
        raise ConditionEvaluationError(f"Condition field '{key}' must be one of: {allowed}")
    return value


def _decode_balance_threshold(payload: Mapping[str, Any]) -> BalanceThreshold:
    return BalanceThreshold(
        account_id=_as_int(payload, "account_id"),
        threshold=_as_decimal(payload, "threshold"),
        direction=_as_choice(payload, "direction", (DIRECTION_BELOW, DIRECTION_ABOVE)),
    )


def _decode_goal_milestone(payload: Mapping[str, Any]) -> GoalMilestone:
    return GoalMilestone(
        goal_id=_as_int(payload, "goal_id"),
        milestone_percentage=_as_decimal(payload, "milestone_percentage"),
    )


def _decode_merchant_name(payload: Mapping[str, Any]) -> MerchantName:
    pattern = payload.get("merchant_pattern")
    if not isinstance(pattern, str) or not pattern.strip():
        raise ConditionEvaluationError("Condition field 'merchant_pattern' must be a non-empty string")
    return MerchantName(
        merchant_pattern=pattern.strip(),
        match_type=_as_choice(
            payload, "match_type", (MATCH_EXACT, MATCH_CONTAINS), default=MATCH_CONTAINS
        ),
    )


def _decode_spending_target(payload: Mapping[str, Any]) -> SpendingTarget:
    return SpendingTarget(
        budget_id=_as_int(payload, "budget_id"),
        threshold_percentage=_as_decimal(payload, "threshold_percentage"),
    )


def _decode_transaction_limit(payload: Mapping[str, Any]) -> TransactionLimit:
    account_id = None
    if payload.get("account_id") not in (None, ""):
        account_id = _as_int(payload, "account_id")
    return TransactionLimit(amount=_as_decimal(payload, "amount"), account_id=account_id)


def _decode_upcoming_bill(payload: Mapping[str, Any]) -> UpcomingBill:
    days_before = _as_int(payload, "days_before")
    if days_before < 0:
        raise ConditionEvaluationError("Condition field 'days_before' must not be negative")
    return UpcomingBill(bill_id=_as_int(payload, "bill_id"), days_before=days_before)


_DECODERS: dict[str, Callable[[Mapping[str, Any]], AlertCondition]] = {
    ALERT_TYPE_ACCOUNT_THRESHOLD: _decode_balance_threshold,
    ALERT_TYPE_GOAL: _decode_goal_milestone,
    ALERT_TYPE_MERCHANT_NAME: _decode_merchant_name,
    ALERT_TYPE_SPENDING_TARGET: _decode_spending_target,
    ALERT_TYPE_TRANSACTION_LIMIT: _decode_transaction_limit,
    ALERT_TYPE_UPCOMING_BILL: _decode_upcoming_bill,
}


def decode_conditions(alert_type: str, payload: Any) -> AlertCondition:
    """Decode ``payload`` into the condition type selected by ``alert_type``."""

    decoder = _DECODERS.get(alert_type)
    if decoder is None:
        raise ConditionEvaluationError(f"Unknown alert type: {alert_type}")
    if not isinstance(payload, Mapping):
        raise ConditionEvaluationError("Alert conditions must be a JSON object")
    return decoder(payload)


__all__ = [
    "AlertCondition",
    "BalanceThreshold",
    "ConditionEvaluationError",
    "DIRECTION_ABOVE",
    "DIRECTION_BELOW",
    "GoalMilestone",
    "MATCH_CONTAINS",
    "MATCH_EXACT",
    "MerchantName",
    "SpendingTarget",
    "TransactionLimit",
    "UpcomingBill",
    "decode_conditions",
]
