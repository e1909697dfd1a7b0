"""ORM models used by the application infrastructure."""

from .account import AccountModel
from .alert import AlertModel
from .budget import BudgetModel
from .cashflow_bill import CashflowBillModel
from .goal import GoalModel
from .notification import NotificationModel
from .tag import TagModel
from .transaction import TransactionModel
from .user import UserModel

__all__ = [
    "AccountModel",
    "AlertModel",
    "BudgetModel",
    "CashflowBillModel",
    "GoalModel",
    "NotificationModel",
    "TagModel",
    "TransactionModel",
    "UserModel",
]
