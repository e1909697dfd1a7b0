"""Domain entity representing a user-configured alert."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

ALERT_TYPE_ACCOUNT_THRESHOLD = "account_threshold"
ALERT_TYPE_GOAL = "goal"
ALERT_TYPE_MERCHANT_NAME = "merchant_name"
ALERT_TYPE_SPENDING_TARGET = "spending_target"
ALERT_TYPE_TRANSACTION_LIMIT = "transaction_limit"
ALERT_TYPE_UPCOMING_BILL = "upcoming_bill"

ALERT_TYPES = (
    ALERT_TYPE_ACCOUNT_THRESHOLD,
    ALERT_TYPE_GOAL,
    ALERT_TYPE_MERCHANT_NAME,
    ALERT_TYPE_SPENDING_TARGET,
    ALERT_TYPE_TRANSACTION_LIMIT,
    ALERT_TYPE_UPCOMING_BILL,
)

TRANSACTION_ALERT_TYPES = (
    ALERT_TYPE_MERCHANT_NAME,
    ALERT_TYPE_TRANSACTION_LIMIT,
)


@dataclass
class Alert:
    """An alert rule owned by a single user."""

    id: int | None
    user_id: int
    alert_type: str
    name: str
    conditions: dict[str, Any] = field(default_factory=dict)
    source_type: str | None = None
    source_id: int | None = None
    email_delivery: bool = True
    sms_delivery: bool = False
    active: bool = True
    last_triggered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def in_cooldown(self, now: datetime, cooldown: timedelta) -> bool:
        """Return ``True`` while the alert may not fire again."""

        if self.last_triggered_at is None:
            return False
        return now - self.last_triggered_at < cooldown

    def window_start(self) -> datetime | None:
        """Return the lower bound for transactions considered by this alert."""

        candidates = [
            value
            for value in (self.last_triggered_at, self.created_at)
            if value is not None
        ]
        return max(candidates) if candidates else None


__all__ = [
    "ALERT_TYPES",
    "ALERT_TYPE_ACCOUNT_THRESHOLD",
    "ALERT_TYPE_GOAL",
    "ALERT_TYPE_MERCHANT_NAME",
    "ALERT_TYPE_SPENDING_TARGET",
    "ALERT_TYPE_TRANSACTION_LIMIT",
    "ALERT_TYPE_UPCOMING_BILL",
    "Alert",
    "TRANSACTION_ALERT_TYPES",
]
