"""Domain entity representing a savings or payoff goal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

GOAL_TYPE_SAVINGS = "savings"
GOAL_TYPE_PAYOFF = "payoff"


@dataclass
class Goal:
    """Savings goals grow towards ``target_amount``; payoff goals shrink to zero."""

    id: int | None
    user_id: int
    name: str
    goal_type: str = GOAL_TYPE_SAVINGS
    target_amount: Decimal = Decimal("0")
    current_amount: Decimal = Decimal("0")
    target_date: date | None = None
    account_id: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    archived_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_payoff(self) -> bool:
        return self.goal_type == GOAL_TYPE_PAYOFF

    @property
    def initial_value(self) -> Decimal:
        """Return the starting balance of a payoff goal.

        Falls back to the current amount when the metadata does not carry a
        usable ``initial_value``.
        """

        raw = (self.metadata or {}).get("initial_value")
        if raw is None:
            return self.current_amount
        try:
            return Decimal(str(raw))
        except (InvalidOperation, ValueError):
            return self.current_amount

    def progress_percentage(self) -> Decimal:
        if self.is_payoff:
            initial = self.initial_value
            if initial <= 0:
                return Decimal("0")
            return (initial - self.current_amount) / initial * 100
        if self.target_amount <= 0:
            return Decimal("0")
        return self.current_amount / self.target_amount * 100


__all__ = ["GOAL_TYPE_PAYOFF", "GOAL_TYPE_SAVINGS", "Goal"]
