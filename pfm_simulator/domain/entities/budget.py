"""Domain entity representing a monthly budget."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass
class Budget:
    id: int | None
    user_id: int
    name: str
    budget_amount: Decimal
    show_on_dashboard: bool = True
    account_list: list[int] = field(default_factory=list)
    tag_names: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


__all__ = ["Budget"]
