"""Translate vendor API rows into domain entities."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

from pfm_simulator.domain.entities import (
    ALERT_TYPE_ACCOUNT_THRESHOLD,
    GOAL_TYPE_PAYOFF,
    GOAL_TYPE_SAVINGS,
    Account,
    Alert,
    Budget,
    Goal,
    Tag,
    Transaction,
    User,
)
from pfm_simulator.utils import parse_vendor_datetime


def _money(value: Any) -> Decimal:
    if value in (None, ""):
        return Decimal("0")
    return Decimal(str(value))


def _flag(row: Mapping[str, Any], key: str, default: bool = True) -> bool:
    value = row.get(key)
    return default if value is None else bool(value)


def _vendor_id(row: Mapping[str, Any]) -> int:
    value = row.get("id")
    if value in (None, ""):
        raise ValueError("Vendor row is missing an id")
    return int(value)


def user_from_vendor(row: Mapping[str, Any], *, user_id: int, partner_id: int) -> User:
    return User(
        id=user_id,
        partner_id=partner_id,
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        hashed_password="",
    )


def account_from_vendor(
    row: Mapping[str, Any], *, user_id: int, partner_id: int
) -> Account:
    account_type = row.get("account_type") or "checking"
    return Account(
        id=_vendor_id(row),
        user_id=user_id,
        partner_id=partner_id,
        name=row.get("name") or "",
        display_name=row.get("display_name"),
        number=row.get("number") or "",
        reference_id=row.get("reference_id") or "",
        account_type=account_type,
        display_account_type=row.get("display_account_type") or account_type,
        balance=_money(row.get("balance")),
        state=row.get("state") or "active",
        aggregation_type=row.get("aggregation_type") or "manual",
        include_in_networth=_flag(row, "include_in_networth"),
        include_in_cashflow=_flag(row, "include_in_cashflow"),
        include_in_expenses=_flag(row, "include_in_expenses"),
    )


def transaction_from_vendor(
    row: Mapping[str, Any], *, user_id: int, now: datetime
) -> Transaction:
    return Transaction(
        id=_vendor_id(row),
        user_id=user_id,
        account_id=int(row["account_id"]),
        amount=_money(row.get("amount")),
        nickname=row.get("nickname"),
        original_description=row.get("original_name"),
        merchant_name=row.get("merchant_name"),
        reference_id=row.get("reference_id") or "",
        balance=_money(row.get("balance")),
        posted_at=parse_vendor_datetime(row.get("posted_at")) or now,
        transacted_at=parse_vendor_datetime(row.get("transacted_at")),
    )


def budget_from_vendor(row: Mapping[str, Any], *, user_id: int) -> Budget:
    return Budget(
        id=_vendor_id(row),
        user_id=user_id,
        name=row.get("name") or "",
        budget_amount=_money(row.get("budget_amount")),
        show_on_dashboard=_flag(row, "show_on_dashboard"),
    )


def savings_goal_from_vendor(row: Mapping[str, Any], *, user_id: int) -> Goal:
    return Goal(
        id=_vendor_id(row),
        user_id=user_id,
        name=row.get("name") or "",
        goal_type=GOAL_TYPE_SAVINGS,
        target_amount=_money(row.get("goal_amount")),
        current_amount=_money(row.get("current_amount")),
    )


def payoff_goal_from_vendor(row: Mapping[str, Any], *, user_id: int) -> Goal:
    balance = _money(row.get("balance"))
    return Goal(
        id=_vendor_id(row),
        user_id=user_id,
        name=row.get("name") or "",
        goal_type=GOAL_TYPE_PAYOFF,
        target_amount=balance,
        current_amount=_money(row.get("current_balance")),
        metadata={"initial_value": str(balance)},
    )


def alert_from_vendor(row: Mapping[str, Any], *, user_id: int) -> Alert:
    conditions = row.get("conditions")
    return Alert(
        id=_vendor_id(row),
        user_id=user_id,
        alert_type=row.get("alert_type") or ALERT_TYPE_ACCOUNT_THRESHOLD,
        name=row.get("name") or "",
        conditions=dict(conditions) if isinstance(conditions, Mapping) else {},
        active=_flag(row, "is_active"),
    )


def tag_from_vendor(row: Mapping[str, Any], *, user_id: int, partner_id: int) -> Tag:
    raw_id = row.get("id")
    return Tag(
        id=int(raw_id) if raw_id not in (None, "") else None,
        partner_id=partner_id,
        user_id=user_id,
        name=row.get("display_name") or row.get("name") or "",
    )


__all__ = [
    "account_from_vendor",
    "alert_from_vendor",
    "budget_from_vendor",
    "payoff_goal_from_vendor",
    "savings_goal_from_vendor",
    "tag_from_vendor",
    "transaction_from_vendor",
    "user_from_vendor",
]
