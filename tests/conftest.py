"""Shared fixtures: a throwaway SQLite database and small data factories."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"pfm_simulator_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["ALERT_COOLDOWN_MINUTES"] = "360"
os.environ["ALERT_DEDUP_WINDOW_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from pfm_simulator.application.use_cases.alert_evaluation import (  # noqa: E402
    notification_fingerprints,
)
from pfm_simulator.domain.entities import (  # noqa: E402
    Account,
    Alert,
    Budget,
    CashflowBill,
    Goal,
    Notification,
    Transaction,
    User,
)
from pfm_simulator.infrastructure import database  # noqa: E402
from pfm_simulator.infrastructure import models  # noqa: E402,F401
from pfm_simulator.infrastructure.repositories import (  # noqa: E402
    AccountRepository,
    AlertRepository,
    BudgetRepository,
    CashflowBillRepository,
    GoalRepository,
    NotificationRepository,
    TransactionRepository,
    UserRepository,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that tests move forward explicitly."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class Factory:
    """Insert domain rows through the repositories with sensible defaults."""

    def __init__(self, session) -> None:
        self.session = session

    def user(self, user_id: int = 1, **overrides) -> User:
        values = {
            "id": user_id,
            "partner_id": 7,
            "email": f"user{user_id}@example.com",
            "first_name": "Test",
            "last_name": "User",
        }
        values.update(overrides)
        return UserRepository(self.session).create(User(**values))

    def account(self, user_id: int = 1, **overrides) -> Account:
        values = {
            "id": None,
            "user_id": user_id,
            "partner_id": 7,
            "name": "Checking",
            "balance": Decimal("1000.00"),
        }
        values.update(overrides)
        return AccountRepository(self.session).create(Account(**values))

    def goal(self, user_id: int = 1, **overrides) -> Goal:
        values = {
            "id": None,
            "user_id": user_id,
            "name": "Vacation",
            "target_amount": Decimal("1000.00"),
            "current_amount": Decimal("0.00"),
        }
        values.update(overrides)
        return GoalRepository(self.session).create(Goal(**values))

    def budget(self, user_id: int = 1, **overrides) -> Budget:
        values = {
            "id": None,
            "user_id": user_id,
            "name": "Groceries",
            "budget_amount": Decimal("200.00"),
        }
        values.update(overrides)
        return BudgetRepository(self.session).create(Budget(**values))

    def bill(self, user_id: int = 1, **overrides) -> CashflowBill:
        values = {
            "id": None,
            "user_id": user_id,
            "name": "Internet",
            "amount": Decimal("59.99"),
            "due_date": 17,
        }
        values.update(overrides)
        return CashflowBillRepository(self.session).create(CashflowBill(**values))

    def transaction(self, account: Account, **overrides) -> Transaction:
        created_at = overrides.pop("created_at", NOW - timedelta(hours=1))
        values = {
            "id": None,
            "user_id": account.user_id,
            "account_id": account.id,
            "amount": Decimal("-10.00"),
            "posted_at": created_at,
            "created_at": created_at,
        }
        values.update(overrides)
        return TransactionRepository(self.session).create(Transaction(**values))

    def alert(self, alert_type: str, conditions: dict, user_id: int = 1, **overrides) -> Alert:
        values = {
            "id": None,
            "user_id": user_id,
            "alert_type": alert_type,
            "name": overrides.pop("name", f"{alert_type} alert"),
            "conditions": conditions,
            "created_at": NOW - timedelta(days=1),
        }
        values.update(overrides)
        return AlertRepository(self.session).create(Alert(**values))

    def notification(self, user_id: int = 1, **overrides) -> Notification:
        values = {
            "id": None,
            "user_id": user_id,
            "title": "Low balance",
            "message": "Checking balance is $90.00, below your $100.00 threshold.",
            "metadata": {"alert_type": "account_threshold"},
            "created_at": NOW,
        }
        values.update(overrides)
        return NotificationRepository(self.session).create(Notification(**values))


@pytest.fixture(autouse=True)
def clean_database():
    """Give every test an empty schema and an empty fingerprint cache."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    notification_fingerprints.clear()
    yield
    notification_fingerprints.clear()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def factory(session) -> Factory:
    return Factory(session)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


PASSWORD = "correct horse battery"


@pytest.fixture()
def registered_user(session) -> User:
    """User 1 with a known password, able to log in through the API."""

    from pfm_simulator.application.use_cases.users import create_user

    return create_user(
        session,
        email="jane@example.com",
        password=PASSWORD,
        partner_id=7,
        first_name="Jane",
        last_name="Doe",
        user_id=1,
    )


@pytest.fixture()
def auth_headers(client, registered_user) -> dict[str, str]:
    response = client.post(
        "/api/v2/auth/login",
        json={"email": registered_user.email, "password": PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def pytest_sessionfinish(session, exitstatus):
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
