"""Per-type checks that decide whether an alert's condition currently holds.

Each check reads the data it needs through the repositories and returns an
:class:`AlertMatch` describing the notification to emit, or ``None`` when the
condition is not satisfied. Referenced entities that do not exist (or do not
belong to the alert's user) raise :class:`ConditionEvaluationError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from sqlalchemy.orm import Session

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
    BudgetRepository,
    CashflowBillRepository,
    GoalRepository,
    TransactionRepository,
)
from pfm_simulator.utils.serializers import serialize_decimal

from .conditions import (
    DIRECTION_BELOW,
    AlertCondition,
    BalanceThreshold,
    ConditionEvaluationError,
    GoalMilestone,
    MerchantName,
    SpendingTarget,
    TransactionLimit,
    UpcomingBill,
)


@dataclass(frozen=True)
class AlertMatch:
    """Rendered notification content for a satisfied condition."""

    message: str
    metadata: dict[str, Any] = field(default_factory=dict)


def _month_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def _float(value: Decimal) -> float:
    return float(round(value, 2))


def check_balance_threshold(
    session: Session, alert: Alert, condition: BalanceThreshold, now: datetime
) -> AlertMatch | None:
    account = AccountRepository(session).get(condition.account_id, user_id=alert.user_id)
    if account is None:
        raise ConditionEvaluationError(f"Account {condition.account_id} not found")

    if condition.direction == DIRECTION_BELOW:
        triggered = account.balance < condition.threshold
    else:
        triggered = account.balance > condition.threshold
    if not triggered:
        return None

    threshold = serialize_decimal(condition.threshold)
    balance = serialize_decimal(account.balance)
    return AlertMatch(
        message=(
            f"Your {account.label} balance is {condition.direction} ${threshold}. "
            f"Current balance: ${balance}"
        ),
        metadata={
            "account_id": str(account.id),
            "current_balance": balance,
            "threshold": threshold,
            "direction": condition.direction,
        },
    )


def check_goal_milestone(
    session: Session, alert: Alert, condition: GoalMilestone, now: datetime
) -> AlertMatch | None:
    goal = GoalRepository(session).get(condition.goal_id, user_id=alert.user_id)
    if goal is None:
        raise ConditionEvaluationError(f"Goal {condition.goal_id} not found")

    progress = goal.progress_percentage()
    if progress < condition.milestone_percentage:
        return None

    return AlertMatch(
        message=f'Your goal "{goal.name}" has reached {progress:.1f}% completion!',
        metadata={
            "goal_id": str(goal.id),
            "goal_type": goal.goal_type,
            "progress": _float(progress),
            "milestone": _float(condition.milestone_percentage),
        },
    )


def check_merchant_name(
    session: Session, alert: Alert, condition: MerchantName, now: datetime
) -> AlertMatch | None:
    transactions = TransactionRepository(session).list_created_since(
        alert.user_id, alert.window_start()
    )
    for transaction in transactions:
        merchant = transaction.display_merchant
        if not condition.matches(merchant):
            continue
        amount = serialize_decimal(abs(transaction.amount))
        return AlertMatch(
            message=f"Transaction detected: {merchant} for ${amount}",
            metadata={
                "transaction_id": str(transaction.id),
                "merchant_name": merchant,
                "amount": amount,
                "pattern": condition.merchant_pattern,
            },
        )
    return None


def check_spending_target(
    session: Session, alert: Alert, condition: SpendingTarget, now: datetime
) -> AlertMatch | None:
    budget = BudgetRepository(session).get(condition.budget_id, user_id=alert.user_id)
    if budget is None:
        raise ConditionEvaluationError(f"Budget {condition.budget_id} not found")
    if budget.budget_amount <= 0:
        raise ConditionEvaluationError(
            f"Budget {condition.budget_id} has a non-positive amount"
        )

    start, end = _month_bounds(now)
    debits = TransactionRepository(session).list_debits_posted_between(
        alert.user_id, start, end, account_ids=budget.account_list
    )
    spent = sum((abs(transaction.amount) for transaction in debits), Decimal("0"))
    percent_used = spent / budget.budget_amount * 100
    if percent_used < condition.threshold_percentage:
        return None

    spent_text = serialize_decimal(spent)
    amount_text = serialize_decimal(budget.budget_amount)
    return AlertMatch(
        message=(
            f'Your "{budget.name}" budget is at {percent_used:.1f}% '
            f"(${spent_text} of ${amount_text})"
        ),
        metadata={
            "budget_id": str(budget.id),
            "spent": spent_text,
            "budget_amount": amount_text,
            "percent_used": _float(percent_used),
            "threshold": _float(condition.threshold_percentage),
        },
    )


def check_transaction_limit(
    session: Session, alert: Alert, condition: TransactionLimit, now: datetime
) -> AlertMatch | None:
    transactions = TransactionRepository(session).list_created_since(
        alert.user_id, alert.window_start(), account_id=condition.account_id
    )
    for transaction in transactions:
        if abs(transaction.amount) <= condition.amount:
            continue
        amount = serialize_decimal(abs(transaction.amount))
        limit = serialize_decimal(condition.amount)
        description = transaction.description or "Transaction"
        return AlertMatch(
            message=(
                f"Large transaction detected: {description} for ${amount} "
                f"exceeds your limit of ${limit}"
            ),
            metadata={
                "transaction_id": str(transaction.id),
                "amount": amount,
                "limit": limit,
                "description": transaction.description,
            },
        )
    return None


def _due_phrase(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


def check_upcoming_bill(
    session: Session, alert: Alert, condition: UpcomingBill, now: datetime
) -> AlertMatch | None:
    bill = CashflowBillRepository(session).get(condition.bill_id, user_id=alert.user_id)
    if bill is None:
        raise ConditionEvaluationError(f"Bill {condition.bill_id} not found")
    if not bill.is_payable:
        return None

    today = now.date()
    due = bill.next_due_date(today)
    days_until_due = (due - today).days
    if not 0 <= days_until_due <= condition.days_before:
        return None

    amount = serialize_decimal(bill.amount)
    return AlertMatch(
        message=f'Bill "{bill.name}" for ${amount} is due {_due_phrase(days_until_due)}',
        metadata={
            "bill_id": str(bill.id),
            "amount": amount,
            "due_date": due.isoformat(),
            "days_until_due": days_until_due,
            "days_before_alert": condition.days_before,
        },
    )


Check = Callable[[Session, Alert, AlertCondition, datetime], "AlertMatch | None"]

CHECKS: dict[str, Check] = {
    ALERT_TYPE_ACCOUNT_THRESHOLD: check_balance_threshold,
    ALERT_TYPE_GOAL: check_goal_milestone,
    ALERT_TYPE_MERCHANT_NAME: check_merchant_name,
    ALERT_TYPE_SPENDING_TARGET: check_spending_target,
    ALERT_TYPE_TRANSACTION_LIMIT: check_transaction_limit,
    ALERT_TYPE_UPCOMING_BILL: check_upcoming_bill,
}


__all__ = [
    "AlertMatch",
    "CHECKS",
    "check_balance_threshold",
    "check_goal_milestone",
    "check_merchant_name",
    "check_spending_target",
    "check_transaction_limit",
    "check_upcoming_bill",
]
