"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class User:
    """Core attributes describing a simulated PFM user."""

    id: int | None
    partner_id: int
    email: str | None
    first_name: str | None = None
    last_name: str | None = None
    hashed_password: str = ""
    preferences: dict[str, Any] = field(default_factory=dict)
    last_login_at: datetime | None = None
    login_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def display_name(self) -> str:
        """Return the user's full name, falling back to the email address."""

        parts = [part for part in (self.first_name, self.last_name) if part]
        if parts:
            return " ".join(parts)
        return self.email or ""


__all__ = ["User"]
