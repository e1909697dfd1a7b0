from .alert import (
    AccountThresholdAlertCreate,
    AlertUpdate,
    GoalAlertCreate,
    MerchantNameAlertCreate,
    SpendingTargetAlertCreate,
    TransactionLimitAlertCreate,
    UpcomingBillAlertCreate,
)
from .auth import LoginRequest, LoginResponse, LoginUser, LogoutResponse
from .migration import (
    MigrationConnectionRequest,
    MigrationEntitiesRequest,
    MigrationStartRequest,
)
from .notification import AlertDestinationsUpdate
from .transaction import TransactionCreate

__all__ = [
    "AccountThresholdAlertCreate",
    "AlertDestinationsUpdate",
    "AlertUpdate",
    "GoalAlertCreate",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "LogoutResponse",
    "MerchantNameAlertCreate",
    "MigrationConnectionRequest",
    "MigrationEntitiesRequest",
    "MigrationStartRequest",
    "SpendingTargetAlertCreate",
    "TransactionCreate",
    "TransactionLimitAlertCreate",
    "UpcomingBillAlertCreate",
]
