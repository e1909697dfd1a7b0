"""Domain entity representing a financial account."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Account:
    id: int | None
    user_id: int
    partner_id: int
    name: str
    display_name: str | None = None
    number: str = ""
    reference_id: str = ""
    account_type: str = "checking"
    display_account_type: str | None = None
    balance: Decimal = Decimal("0")
    state: str = "active"
    aggregation_type: str = "manual"
    include_in_networth: bool = True
    include_in_cashflow: bool = True
    include_in_expenses: bool = True
    archived_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


__all__ = ["Account"]
