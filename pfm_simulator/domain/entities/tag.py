"""Domain entity representing a transaction tag."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Tag:
    id: int | None
    partner_id: int
    name: str
    user_id: int | None = None
    parent_tag_id: int | None = None
    tag_type: str = "user"
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Tag"]
