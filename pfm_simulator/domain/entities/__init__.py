"""Domain entities exposed by the application."""

from .account import Account
from .alert import (
    ALERT_TYPE_ACCOUNT_THRESHOLD,
    ALERT_TYPE_GOAL,
    ALERT_TYPE_MERCHANT_NAME,
    ALERT_TYPE_SPENDING_TARGET,
    ALERT_TYPE_TRANSACTION_LIMIT,
    ALERT_TYPE_UPCOMING_BILL,
    ALERT_TYPES,
    TRANSACTION_ALERT_TYPES,
    Alert,
)
from .budget import Budget
from .cashflow_bill import (
    RECURRENCE_BIWEEKLY,
    RECURRENCE_MONTHLY,
    RECURRENCE_WEEKLY,
    CashflowBill,
)
from .goal import GOAL_TYPE_PAYOFF, GOAL_TYPE_SAVINGS, Goal
from .notification import (
    DELIVERY_FAILED,
    DELIVERY_PENDING,
    DELIVERY_SENT,
    Notification,
)
from .tag import Tag
from .transaction import Transaction
from .user import User

__all__ = [
    "ALERT_TYPES",
    "ALERT_TYPE_ACCOUNT_THRESHOLD",
    "ALERT_TYPE_GOAL",
    "ALERT_TYPE_MERCHANT_NAME",
    "ALERT_TYPE_SPENDING_TARGET",
    "ALERT_TYPE_TRANSACTION_LIMIT",
    "ALERT_TYPE_UPCOMING_BILL",
    "Account",
    "Alert",
    "Budget",
    "CashflowBill",
    "DELIVERY_FAILED",
    "DELIVERY_PENDING",
    "DELIVERY_SENT",
    "GOAL_TYPE_PAYOFF",
    "GOAL_TYPE_SAVINGS",
    "Goal",
    "Notification",
    "RECURRENCE_BIWEEKLY",
    "RECURRENCE_MONTHLY",
    "RECURRENCE_WEEKLY",
    "TRANSACTION_ALERT_TYPES",
    "Tag",
    "Transaction",
    "User",
]
