"""Use cases for managing alerts."""

from .create_alert import (
    create_account_threshold_alert,
    create_goal_alert,
    create_merchant_name_alert,
    create_spending_target_alert,
    create_transaction_limit_alert,
    create_upcoming_bill_alert,
)
from .manage_alerts import (
    delete_alert,
    get_alert,
    list_alerts,
    set_alert_active,
    update_alert,
)

__all__ = [
    "create_account_threshold_alert",
    "create_goal_alert",
    "create_merchant_name_alert",
    "create_spending_target_alert",
    "create_transaction_limit_alert",
    "create_upcoming_bill_alert",
    "delete_alert",
    "get_alert",
    "list_alerts",
    "set_alert_active",
    "update_alert",
]
