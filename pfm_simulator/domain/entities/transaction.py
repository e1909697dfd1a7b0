"""Domain entity representing an account transaction."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Transaction:
    """A posted transaction. Negative amounts are debits."""

    id: int | None
    user_id: int
    account_id: int
    amount: Decimal
    nickname: str | None = None
    original_description: str | None = None
    merchant_name: str | None = None
    description: str | None = None
    reference_id: str = ""
    balance: Decimal = Decimal("0")
    posted_at: datetime | None = None
    transacted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_debit(self) -> bool:
        return self.amount < 0

    @property
    def display_merchant(self) -> str:
        """Return the best available merchant label for the transaction."""

        return (
            self.merchant_name
            or self.nickname
            or self.original_description
            or ""
        )


__all__ = ["Transaction"]
