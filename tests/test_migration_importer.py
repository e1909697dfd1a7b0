"""Migration importer driven by a mocked vendor API."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import httpx
import pytest
from jose import jwt

from conftest import FakeClock
from pfm_simulator.application.use_cases.alert_evaluation import AlertEvaluator, FingerprintCache
from pfm_simulator.application.use_cases.migration import (
    MigrationConfig,
    MigrationEntities,
    MigrationImporter,
    check_vendor_connection,
)
from pfm_simulator.infrastructure.models import (
    AccountModel,
    AlertModel,
    BudgetModel,
    GoalModel,
    NotificationModel,
    TagModel,
    TransactionModel,
    UserModel,
)
from pfm_simulator.infrastructure.repositories import AlertRepository, UserRepository
from pfm_simulator.infrastructure.vendor_api import VendorFetchError

CONFIG = MigrationConfig(
    api_key="vendor-secret",
    partner_domain="geezeo.example.com",
    pcid="42",
    partner_id="7",
)


def _accounts(count: int, balance: str = "100.00") -> list[dict]:
    return [
        {"id": 1000 + index, "name": f"Account {index}", "balance": balance}
        for index in range(1, count + 1)
    ]


class FakeVendor:
    """Answer vendor endpoints from a dict keyed by path."""

    def __init__(self, responses: dict[str, object], on_request=None) -> None:
        self.responses = responses
        self.requests: list[httpx.Request] = []
        self.on_request = on_request

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        path = request.url.path.removeprefix("/api/v2")
        body = self.responses.get(path)
        if body is None:
            return httpx.Response(404, text="not found")
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def _default_responses() -> dict[str, object]:
    return {
        "/users/current": {
            "users": [{"id": 42, "email": "jane@example.com", "first_name": "Jane", "last_name": "Doe"}]
        },
        "/users/42/accounts/all": {"accounts": _accounts(12)},
        "/users/42/transactions/search": {
            "transactions": [
                {
                    "id": 5001,
                    "account_id": 1001,
                    "amount": "-25.50",
                    "original_name": "COFFEE SHOP 123",
                    "merchant_name": "Coffee Shop",
                    "posted_at": "2024-03-10T09:00:00Z",
                }
            ]
        },
        "/users/42/budgets": {"budgets": [{"id": 301, "name": "Food", "budget_amount": "400.00"}]},
        "/users/42/savings_goals": {
            "savings_goals": [{"id": 401, "name": "Trip", "goal_amount": "2000", "current_amount": "500"}]
        },
        "/users/42/payoff_goals": {
            "payoff_goals": [{"id": 402, "name": "Card", "balance": "900", "current_balance": "300"}]
        },
        "/users/42/alerts": {
            "alerts": [
                {
                    "id": 501,
                    "name": "Low checking",
                    "alert_type": "account_threshold",
                    "conditions": {"account_id": 1001, "threshold": "50.00", "direction": "below"},
                }
            ]
        },
        "/users/42/tags": {"tags": [{"id": 601, "name": "coffee"}, {"display_name": "Untracked"}]},
    }


def _run(session, vendor: FakeVendor, clock=None, **entities) -> list[dict]:
    importer = MigrationImporter(
        session,
        CONFIG,
        MigrationEntities(**entities),
        transport=vendor.transport,
        clock=clock or FakeClock(),
    )
    return list(importer.run())


def _by_entity(events: list[dict], entity: str) -> list[dict]:
    return [event for event in events if event.get("entity") == entity]


def test_full_import_streams_progress_and_persists_rows(session) -> None:
    vendor = FakeVendor(_default_responses())
    events = _run(
        session,
        vendor,
        user=True,
        accounts=True,
        transactions=True,
        budgets=True,
        goals=True,
        alerts=True,
        tags=True,
    )

    assert events[-1] == {"status": "complete"}
    stage_order = []
    for event in events:
        entity = event.get("entity")
        if entity and entity not in stage_order:
            stage_order.append(entity)
    assert stage_order == ["user", "accounts", "transactions", "budgets", "goals", "alerts", "tags"]

    accounts = _by_entity(events, "accounts")
    assert accounts[0] == {"entity": "accounts", "status": "fetching"}
    assert accounts[1] == {"entity": "accounts", "status": "inserting", "total": 12}
    assert [event["progress"] for event in accounts if "progress" in event] == [10, 12]
    assert accounts[-1] == {
        "entity": "accounts",
        "status": "entity_complete",
        "message": "Imported 12 accounts",
    }
    assert _by_entity(events, "user")[-1]["message"] == "Imported user: jane@example.com"
    assert _by_entity(events, "goals")[-1]["message"] == "Imported 2 goals"

    user = session.get(UserModel, 42)
    assert user.email == "jane@example.com"
    assert user.partner_id == 7
    assert user.hashed_password == ""
    assert session.query(AccountModel).count() == 12
    account = session.get(AccountModel, 1001)
    assert account.account_type == "checking"
    assert account.aggregation_type == "manual"
    transaction = session.get(TransactionModel, 5001)
    assert transaction.original_description == "COFFEE SHOP 123"
    assert transaction.amount == Decimal("-25.50")
    payoff = session.get(GoalModel, 402)
    assert payoff.goal_type == "payoff"
    assert payoff.details == {"initial_value": "900"}
    assert session.get(BudgetModel, 301).name == "Food"
    alert = session.get(AlertModel, 501)
    assert alert.active is True
    assert alert.conditions["direction"] == "below"
    assert sorted(tag.name for tag in session.query(TagModel).all()) == ["Untracked", "coffee"]


def test_vendor_requests_carry_a_signed_assertion(session) -> None:
    vendor = FakeVendor(_default_responses())
    _run(session, vendor, user=True, transactions=True)

    assert [request.url.path for request in vendor.requests] == [
        "/api/v2/users/current",
        "/api/v2/users/42/transactions/search",
    ]
    assert vendor.requests[1].url.params["untagged"] == "0"
    header = vendor.requests[0].headers["Authorization"]
    assert header.startswith("Bearer ")
    assert vendor.requests[0].headers["Accept"] == "application/json"

    claims = jwt.get_unverified_claims(header.removeprefix("Bearer "))
    assert claims["iss"] == "7"
    assert claims["aud"] == "geezeo.example.com"
    assert claims["sub"] == "42"
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_reimport_overwrites_rows_by_vendor_id(session) -> None:
    responses = _default_responses()
    _run(session, FakeVendor(responses), user=True, accounts=True)

    responses["/users/42/accounts/all"] = {"accounts": _accounts(12, balance="7.25")}
    _run(session, FakeVendor(responses), user=True, accounts=True)

    assert session.query(AccountModel).count() == 12
    session.expire_all()
    assert session.get(AccountModel, 1005).balance == Decimal("7.25")


def test_reimported_alert_keeps_its_cooldown(session) -> None:
    responses = _default_responses()
    responses["/users/42/accounts/all"] = {"accounts": _accounts(12, balance="20.00")}
    clock = FakeClock()
    evaluator = AlertEvaluator(session, clock=clock, fingerprints=FingerprintCache(0))
    _run(session, FakeVendor(responses), clock, user=True, accounts=True, alerts=True)

    assert evaluator.evaluate(42).fired_count == 1

    clock.advance(timedelta(hours=1))
    _run(session, FakeVendor(responses), clock, user=True, accounts=True, alerts=True)
    second = evaluator.evaluate(42)

    assert second.fired_count == 0
    assert session.query(NotificationModel).count() == 1
    session.expire_all()
    assert session.get(AlertModel, 501).last_triggered_at is not None


def test_reimport_preserves_local_alert_state(session) -> None:
    responses = _default_responses()
    _run(session, FakeVendor(responses), user=True, accounts=True, alerts=True)
    repository = AlertRepository(session)
    alert = repository.get(501, user_id=42)
    alert.email_delivery = False
    repository.update(alert)
    repository.soft_delete(501, user_id=42)

    responses["/users/42/alerts"] = {
        "alerts": [{"id": 501, "name": "Renamed", "alert_type": "account_threshold"}]
    }
    _run(session, FakeVendor(responses), alerts=True)

    session.expire_all()
    model = session.get(AlertModel, 501)
    assert model.name == "Renamed"
    assert model.deleted_at is not None
    assert model.email_delivery is False
    assert model.conditions == {"account_id": 1001, "threshold": "50.00", "direction": "below"}


def test_reimported_user_keeps_local_settings(session) -> None:
    responses = _default_responses()
    _run(session, FakeVendor(responses), user=True)
    users = UserRepository(session)
    users.update_preferences(42, {"alert_destinations": {"email": "alerts@jane.example.com"}})
    users.record_login(42, logged_in_at=FakeClock().now)

    responses["/users/current"] = {
        "users": [{"id": 42, "email": "jane@new.example.com", "first_name": "Janet", "last_name": "Doe"}]
    }
    _run(session, FakeVendor(responses), user=True)

    session.expire_all()
    user = users.get(42)
    assert user.email == "jane@new.example.com"
    assert user.first_name == "Janet"
    assert user.preferences == {"alert_destinations": {"email": "alerts@jane.example.com"}}
    assert user.login_count == 1
    assert user.last_login_at is not None


def test_failed_stage_does_not_stop_later_stages(session) -> None:
    responses = _default_responses()
    responses["/users/42/budgets"] = httpx.Response(500, text="boom")
    # Account 1001 is never imported, so the transaction violates its foreign key.
    events = _run(
        session,
        FakeVendor(responses),
        user=True,
        transactions=True,
        budgets=True,
        goals=True,
    )

    assert _by_entity(events, "transactions")[-1]["status"] == "entity_error"
    budgets_error = _by_entity(events, "budgets")[-1]
    assert budgets_error == {
        "entity": "budgets",
        "status": "entity_error",
        "message": "Geezeo API error (500): boom",
    }
    assert _by_entity(events, "goals")[-1]["status"] == "entity_complete"
    assert events[-1] == {"status": "complete"}
    assert session.query(TransactionModel).count() == 0
    assert session.query(GoalModel).count() == 2


def test_run_completes_even_when_every_stage_fails(session) -> None:
    events = _run(session, FakeVendor({}), user=True, accounts=True)

    assert [event["status"] for event in events if event.get("entity")] == [
        "fetching",
        "entity_error",
        "fetching",
        "entity_error",
    ]
    assert events[-1] == {"status": "complete"}


def test_invalid_pcid_aborts_with_error_event(session) -> None:
    importer = MigrationImporter(
        session,
        MigrationConfig(api_key="k", partner_domain="d.example.com", pcid="abc", partner_id="7"),
        MigrationEntities(user=True),
        transport=FakeVendor({}).transport,
    )

    events = list(importer.run())

    assert events == [{"error": "Invalid pcid: 'abc'"}]


def test_token_is_reminted_between_stages_when_close_to_expiry(session) -> None:
    clock = FakeClock()
    vendor = FakeVendor(
        _default_responses(),
        on_request=lambda request: clock.advance(timedelta(seconds=45)),
    )
    importer = MigrationImporter(
        session,
        CONFIG,
        MigrationEntities(user=True, budgets=True, tags=True),
        transport=vendor.transport,
        clock=clock,
        token_lifetime=timedelta(seconds=90),
    )

    list(importer.run())

    assert importer.tokens_minted == 3
    assert len({request.headers["Authorization"] for request in vendor.requests}) == 3


def test_long_lived_token_is_minted_once(session) -> None:
    vendor = FakeVendor(_default_responses())
    importer = MigrationImporter(
        session,
        CONFIG,
        MigrationEntities(user=True, accounts=True, budgets=True),
        transport=vendor.transport,
        clock=FakeClock(),
    )

    list(importer.run())

    assert importer.tokens_minted == 1


def test_check_vendor_connection_returns_the_vendor_user() -> None:
    vendor = FakeVendor({"/users/current": {"user": {"id": 42, "email": "jane@example.com"}}})

    user = check_vendor_connection(CONFIG, transport=vendor.transport, clock=FakeClock())

    assert user == {"id": 42, "email": "jane@example.com"}


def test_check_vendor_connection_surfaces_vendor_errors() -> None:
    vendor = FakeVendor({"/users/current": httpx.Response(401, text="Unauthorized")})

    with pytest.raises(VendorFetchError) as excinfo:
        check_vendor_connection(CONFIG, transport=vendor.transport, clock=FakeClock())

    assert str(excinfo.value) == "Geezeo API error (401): Unauthorized"
    assert excinfo.value.status_code == 401
