"""Domain entity representing a recurring bill."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

RECURRENCE_MONTHLY = "monthly"
RECURRENCE_BIWEEKLY = "biweekly"
RECURRENCE_WEEKLY = "weekly"

_FIXED_STEPS = {
    RECURRENCE_BIWEEKLY: timedelta(days=14),
    RECURRENCE_WEEKLY: timedelta(days=7),
}


def _clamped_day(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(max(day, 1), last_day))


@dataclass
class CashflowBill:
    id: int | None
    user_id: int
    name: str
    amount: Decimal
    due_date: int
    recurrence: str = RECURRENCE_MONTHLY
    account_id: int | None = None
    active: bool = True
    stopped_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_payable(self) -> bool:
        return self.active and self.stopped_at is None and self.deleted_at is None

    def next_due_date(self, today: date) -> date:
        """Return the first due date on or after ``today``.

        The anchor is ``due_date`` within the month of ``today``, clamped to
        the month length, then advanced by one recurrence step at a time.
        """

        anchor = _clamped_day(today.year, today.month, self.due_date)
        step = _FIXED_STEPS.get(self.recurrence)
        while anchor < today:
            if step is not None:
                anchor = anchor + step
                continue
            year, month = anchor.year, anchor.month + 1
            if month > 12:
                year, month = year + 1, 1
            anchor = _clamped_day(year, month, self.due_date)
        return anchor


__all__ = [
    "CashflowBill",
    "RECURRENCE_BIWEEKLY",
    "RECURRENCE_MONTHLY",
    "RECURRENCE_WEEKLY",
]
