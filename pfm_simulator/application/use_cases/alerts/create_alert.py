"""Use cases for creating each type of alert."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.alert_evaluation import (
    ConditionEvaluationError,
    decode_conditions,
)
from pfm_simulator.domain.entities import (
    ALERT_TYPE_ACCOUNT_THRESHOLD,
    ALERT_TYPE_GOAL,
    ALERT_TYPE_MERCHANT_NAME,
    ALERT_TYPE_SPENDING_TARGET,
    ALERT_TYPE_TRANSACTION_LIMIT,
    ALERT_TYPE_UPCOMING_BILL,
    Alert,
)
from pfm_simulator.infrastructure.repositories import (
    AccountRepository,
    AlertRepository,
    BudgetRepository,
    CashflowBillRepository,
    GoalRepository,
)
from pfm_simulator.utils import now_in_app_timezone
from pfm_simulator.utils.serializers import serialize_decimal


def _create(
    session: Session,
    *,
    user_id: int,
    alert_type: str,
    name: str,
    conditions: dict[str, Any],
    email_delivery: bool,
    sms_delivery: bool,
    source_type: str | None = None,
    source_id: int | None = None,
) -> Alert:
    try:
        decode_conditions(alert_type, conditions)
    except ConditionEvaluationError as exc:
        raise ValueError(str(exc)) from exc

    alert = Alert(
        id=None,
        user_id=user_id,
        alert_type=alert_type,
        name=name,
        conditions=conditions,
        source_type=source_type,
        source_id=source_id,
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
        active=True,
        created_at=now_in_app_timezone(),
    )
    return AlertRepository(session).create(alert)


def create_account_threshold_alert(
    session: Session,
    user_id: int,
    *,
    name: str,
    account_id: int,
    threshold: Decimal,
    direction: str,
    email_delivery: bool = True,
    sms_delivery: bool = False,
) -> Alert:
    if AccountRepository(session).get(account_id, user_id=user_id) is None:
        raise ValueError("Account not found or access denied")
    return _create(
        session,
        user_id=user_id,
        alert_type=ALERT_TYPE_ACCOUNT_THRESHOLD,
        name=name,
        conditions={
            "account_id": account_id,
            "threshold": serialize_decimal(threshold),
            "direction": direction,
        },
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
        source_type="account",
        source_id=account_id,
    )


def create_goal_alert(
    session: Session,
    user_id: int,
    *,
    name: str,
    goal_id: int,
    milestone_percentage: int,
    email_delivery: bool = True,
    sms_delivery: bool = False,
) -> Alert:
    if GoalRepository(session).get(goal_id, user_id=user_id) is None:
        raise ValueError("Goal not found or access denied")
    return _create(
        session,
        user_id=user_id,
        alert_type=ALERT_TYPE_GOAL,
        name=name,
        conditions={"goal_id": goal_id, "milestone_percentage": milestone_percentage},
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
        source_type="goal",
        source_id=goal_id,
    )


def create_merchant_name_alert(
    session: Session,
    user_id: int,
    *,
    name: str,
    merchant_pattern: str,
    match_type: str = "contains",
    email_delivery: bool = True,
    sms_delivery: bool = False,
) -> Alert:
    return _create(
        session,
        user_id=user_id,
        alert_type=ALERT_TYPE_MERCHANT_NAME,
        name=name,
        conditions={"merchant_pattern": merchant_pattern, "match_type": match_type},
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
    )


def create_spending_target_alert(
    session: Session,
    user_id: int,
    *,
    name: str,
    budget_id: int,
    threshold_percentage: int,
    email_delivery: bool = True,
    sms_delivery: bool = False,
) -> Alert:
    if BudgetRepository(session).get(budget_id, user_id=user_id) is None:
        raise ValueError("Budget not found or access denied")
    return _create(
        session,
        user_id=user_id,
        alert_type=ALERT_TYPE_SPENDING_TARGET,
        name=name,
        conditions={"budget_id": budget_id, "threshold_percentage": threshold_percentage},
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
        source_type="budget",
        source_id=budget_id,
    )


def create_transaction_limit_alert(
    session: Session,
    user_id: int,
    *,
    name: str,
    amount: Decimal,
    account_id: int | None = None,
    email_delivery: bool = True,
    sms_delivery: bool = False,
) -> Alert:
    conditions: dict[str, Any] = {"amount": serialize_decimal(amount)}
    if account_id is not None:
        if AccountRepository(session).get(account_id, user_id=user_id) is None:
            raise ValueError("Account not found or access denied")
        conditions["account_id"] = account_id
    return _create(
        session,
        user_id=user_id,
        alert_type=ALERT_TYPE_TRANSACTION_LIMIT,
        name=name,
        conditions=conditions,
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
        source_type="account" if account_id is not None else None,
        source_id=account_id,
    )


def create_upcoming_bill_alert(
    session: Session,
    user_id: int,
    *,
    name: str,
    bill_id: int,
    days_before: int,
    email_delivery: bool = True,
    sms_delivery: bool = False,
) -> Alert:
    if CashflowBillRepository(session).get(bill_id, user_id=user_id) is None:
        raise ValueError("Bill not found or access denied")
    return _create(
        session,
        user_id=user_id,
        alert_type=ALERT_TYPE_UPCOMING_BILL,
        name=name,
        conditions={"bill_id": bill_id, "days_before": days_before},
        email_delivery=email_delivery,
        sms_delivery=sms_delivery,
        source_type="bill",
        source_id=bill_id,
    )


__all__ = [
    "create_account_threshold_alert",
    "create_goal_alert",
    "create_merchant_name_alert",
    "create_spending_target_alert",
    "create_transaction_limit_alert",
    "create_upcoming_bill_alert",
]
