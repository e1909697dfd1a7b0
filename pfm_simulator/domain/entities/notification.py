"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DELIVERY_PENDING = "pending"
DELIVERY_SENT = "sent"
DELIVERY_FAILED = "failed"


@dataclass
class Notification:
    """Message produced when an alert fires."""

    id: int | None
    user_id: int
    title: str
    message: str
    alert_id: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    email_status: str | None = None
    sms_status: str | None = None
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def alert_type(self) -> str | None:
        return (self.metadata or {}).get("alert_type")


__all__ = [
    "DELIVERY_FAILED",
    "DELIVERY_PENDING",
    "DELIVERY_SENT",
    "Notification",
]
