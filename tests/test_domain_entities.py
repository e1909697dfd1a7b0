from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from pfm_simulator.domain.entities import Alert, CashflowBill, Goal, Transaction


def _bill(due_date: int, recurrence: str = "monthly", **overrides) -> CashflowBill:
    return CashflowBill(
        id=1,
        user_id=1,
        name="Rent",
        amount=Decimal("1200.00"),
        due_date=due_date,
        recurrence=recurrence,
        **overrides,
    )


@pytest.mark.parametrize(
    ("due_date", "recurrence", "today", "expected"),
    [
        (17, "monthly", date(2024, 3, 15), date(2024, 3, 17)),
        (15, "monthly", date(2024, 3, 15), date(2024, 3, 15)),
        (10, "monthly", date(2024, 3, 15), date(2024, 4, 10)),
        (31, "monthly", date(2024, 2, 10), date(2024, 2, 29)),
        (31, "monthly", date(2024, 4, 30), date(2024, 4, 30)),
        (5, "monthly", date(2024, 12, 20), date(2025, 1, 5)),
        (10, "weekly", date(2024, 3, 15), date(2024, 3, 17)),
        (1, "biweekly", date(2024, 3, 15), date(2024, 3, 15)),
        (2, "biweekly", date(2024, 3, 15), date(2024, 3, 16)),
    ],
)
def test_next_due_date(due_date, recurrence, today, expected) -> None:
    assert _bill(due_date, recurrence).next_due_date(today) == expected


def test_stopped_or_inactive_bills_are_not_payable() -> None:
    assert _bill(1).is_payable
    assert not _bill(1, active=False).is_payable
    assert not _bill(1, stopped_at=datetime(2024, 1, 1, tzinfo=timezone.utc)).is_payable


def test_savings_goal_progress() -> None:
    goal = Goal(id=1, user_id=1, name="Car", target_amount=Decimal("400"), current_amount=Decimal("100"))
    assert goal.progress_percentage() == Decimal("25")
    assert Goal(id=2, user_id=1, name="Empty").progress_percentage() == Decimal("0")


def test_payoff_goal_progress_uses_initial_value() -> None:
    goal = Goal(
        id=1,
        user_id=1,
        name="Card",
        goal_type="payoff",
        current_amount=Decimal("250"),
        metadata={"initial_value": "1000"},
    )
    assert goal.progress_percentage() == Decimal("75")

    no_history = Goal(id=2, user_id=1, name="Loan", goal_type="payoff", current_amount=Decimal("300"))
    assert no_history.initial_value == Decimal("300")
    assert no_history.progress_percentage() == Decimal("0")


def test_alert_cooldown_and_window() -> None:
    created = datetime(2024, 3, 1, tzinfo=timezone.utc)
    alert = Alert(id=1, user_id=1, alert_type="goal", name="Goal", created_at=created)
    now = datetime(2024, 3, 15, tzinfo=timezone.utc)

    assert not alert.in_cooldown(now, timedelta(hours=6))
    assert alert.window_start() == created

    alert.last_triggered_at = now - timedelta(hours=1)
    assert alert.in_cooldown(now, timedelta(hours=6))
    assert not alert.in_cooldown(now, timedelta(hours=1))
    assert alert.window_start() == now - timedelta(hours=1)


def test_transaction_merchant_fallbacks() -> None:
    transaction = Transaction(
        id=1,
        user_id=1,
        account_id=1,
        amount=Decimal("-4.50"),
        original_description="SQ *COFFEE",
    )
    assert transaction.is_debit
    assert transaction.display_merchant == "SQ *COFFEE"
    transaction.nickname = "Coffee"
    assert transaction.display_merchant == "Coffee"
    transaction.merchant_name = "Blue Bottle"
    assert transaction.display_merchant == "Blue Bottle"
