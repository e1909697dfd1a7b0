"""Import a user's live vendor data into the local store, stage by stage.

:meth:`MigrationImporter.run` is a generator of progress events. Each
selected stage emits ``fetching``, then ``inserting`` with the row total and
periodic ``progress`` checkpoints, and finally ``entity_complete`` or
``entity_error``. A failing stage never stops the stages after it. The run
always ends with ``{"status": "complete"}`` unless a fatal configuration
problem produces ``{"error": ...}`` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from datetime import datetime, timedelta
from decimal import InvalidOperation
from typing import Any

import httpx
from jose.exceptions import JOSEError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pfm_simulator.config import get_settings
from pfm_simulator.infrastructure.repositories import (
    AccountRepository,
    AlertRepository,
    BudgetRepository,
    GoalRepository,
    TagRepository,
    TransactionRepository,
    UserRepository,
)
from pfm_simulator.infrastructure.security import create_vendor_assertion
from pfm_simulator.infrastructure.vendor_api import VendorAPIClient, VendorFetchError
from pfm_simulator.utils import Clock, ensure_app_timezone, now_in_app_timezone

from . import mappers
from .config import MigrationConfig, MigrationEntities

logger = logging.getLogger(__name__)

Event = dict[str, Any]

TOKEN_REFRESH_MARGIN = timedelta(seconds=60)
DEFAULT_CHECKPOINT_EVERY = 10
CHECKPOINT_EVERY = {"accounts": 10, "transactions": 50}

_STAGE_ERRORS = (
    VendorFetchError,
    SQLAlchemyError,
    ValueError,
    TypeError,
    KeyError,
    InvalidOperation,
)


def mint_vendor_token(
    config: MigrationConfig, *, issued_at: datetime, lifetime: timedelta | None = None
) -> str:
    if lifetime is None:
        lifetime = timedelta(minutes=get_settings().migration_token_lifetime_minutes)
    return create_vendor_assertion(
        api_key=config.api_key,
        partner_id=config.partner_id,
        partner_domain=config.partner_domain,
        pcid=config.pcid,
        issued_at=issued_at,
        lifetime=lifetime,
    )


def check_vendor_connection(
    config: MigrationConfig,
    *,
    transport: httpx.BaseTransport | None = None,
    clock: Clock = now_in_app_timezone,
) -> dict[str, Any]:
    """Fetch the vendor's current user to prove the credentials work."""

    token = mint_vendor_token(config, issued_at=clock())
    with VendorAPIClient(config.partner_domain, token, transport=transport) as client:
        return client.get_current_user()


class MigrationImporter:
    """Run the selected import stages in their fixed order."""

    def __init__(
        self,
        session: Session,
        config: MigrationConfig,
        entities: MigrationEntities,
        *,
        clock: Clock = now_in_app_timezone,
        transport: httpx.BaseTransport | None = None,
        token_lifetime: timedelta | None = None,
    ) -> None:
        self.session = session
        self.config = config
        self.entities = entities
        self.clock = clock
        self.transport = transport
        self.token_lifetime = token_lifetime or timedelta(
            minutes=get_settings().migration_token_lifetime_minutes
        )
        self.tokens_minted = 0
        self._client: VendorAPIClient | None = None
        self._token_expires_at: datetime | None = None

    def run(self) -> Iterator[Event]:
        try:
            user_id = self.config.user_id
            partner_id = self.config.partner_id_value
            stages = {
                "user": lambda: self._import_user(user_id, partner_id),
                "accounts": lambda: self._import_accounts(user_id, partner_id),
                "transactions": lambda: self._import_transactions(user_id),
                "budgets": lambda: self._import_budgets(user_id),
                "goals": lambda: self._import_goals(user_id),
                "alerts": lambda: self._import_alerts(user_id),
                "tags": lambda: self._import_tags(user_id, partner_id),
            }
            for name in self.entities.selected():
                self._refresh_token_if_needed()
                yield from stages[name]()
        except (ValueError, JOSEError) as exc:
            logger.error("Migration aborted: %s", exc)
            yield {"error": str(exc)}
            return
        finally:
            if self._client is not None:
                self._client.close()
                self._client = None
        yield {"status": "complete"}

    # ---- token handling ----

    def _refresh_token_if_needed(self) -> None:
        now = ensure_app_timezone(self.clock())
        if (
            self._client is not None
            and self._token_expires_at is not None
            and self._token_expires_at - now >= TOKEN_REFRESH_MARGIN
        ):
            return
        token = mint_vendor_token(self.config, issued_at=now, lifetime=self.token_lifetime)
        self.tokens_minted += 1
        self._token_expires_at = now + self.token_lifetime
        if self._client is None:
            self._client = VendorAPIClient(
                self.config.partner_domain, token, transport=self.transport
            )
        else:
            logger.info("Vendor token close to expiry; minted a new one")
            self._client.set_token(token)

    @property
    def client(self) -> VendorAPIClient:
        if self._client is None:
            self._refresh_token_if_needed()
        return self._client

    # ---- stages ----

    def _stage(
        self,
        entity: str,
        fetch_rows: Callable[[], Sequence[Any]],
        write_row: Callable[[Any], None],
    ) -> Iterator[Event]:
        every = CHECKPOINT_EVERY.get(entity, DEFAULT_CHECKPOINT_EVERY)
        yield {"entity": entity, "status": "fetching"}
        try:
            rows = fetch_rows()
            total = len(rows)
            yield {"entity": entity, "status": "inserting", "total": total}
            for index, row in enumerate(rows, start=1):
                write_row(row)
                if index % every == 0 or index == total:
                    yield {
                        "entity": entity,
                        "status": "inserting",
                        "progress": index,
                        "total": total,
                    }
        except _STAGE_ERRORS as exc:
            self.session.rollback()
            logger.error("Migration stage %s failed: %s", entity, exc)
            yield {"entity": entity, "status": "entity_error", "message": str(exc)}
            return
        yield {
            "entity": entity,
            "status": "entity_complete",
            "message": f"Imported {total} {entity}",
        }

    def _import_user(self, user_id: int, partner_id: int) -> Iterator[Event]:
        yield {"entity": "user", "status": "fetching"}
        try:
            payload = self.client.get_current_user()
            user = mappers.user_from_vendor(payload, user_id=user_id, partner_id=partner_id)
            UserRepository(self.session).upsert(user)
        except _STAGE_ERRORS as exc:
            self.session.rollback()
            logger.error("Migration stage user failed: %s", exc)
            yield {"entity": "user", "status": "entity_error", "message": str(exc)}
            return
        yield {
            "entity": "user",
            "status": "entity_complete",
            "message": f"Imported user: {user.email}",
        }

    def _import_accounts(self, user_id: int, partner_id: int) -> Iterator[Event]:
        repository = AccountRepository(self.session)
        return self._stage(
            "accounts",
            lambda: self.client.list_resource(
                f"/users/{self.config.pcid}/accounts/all", "accounts"
            ),
            lambda row: repository.upsert(
                mappers.account_from_vendor(row, user_id=user_id, partner_id=partner_id)
            ),
        )

    def _import_transactions(self, user_id: int) -> Iterator[Event]:
        repository = TransactionRepository(self.session)
        return self._stage(
            "transactions",
            lambda: self.client.list_resource(
                f"/users/{self.config.pcid}/transactions/search",
                "transactions",
                params={"untagged": 0},
            ),
            lambda row: repository.upsert(
                mappers.transaction_from_vendor(row, user_id=user_id, now=self.clock())
            ),
        )

    def _import_budgets(self, user_id: int) -> Iterator[Event]:
        repository = BudgetRepository(self.session)
        return self._stage(
            "budgets",
            lambda: self.client.list_resource(f"/users/{self.config.pcid}/budgets", "budgets"),
            lambda row: repository.upsert(mappers.budget_from_vendor(row, user_id=user_id)),
        )

    def _import_goals(self, user_id: int) -> Iterator[Event]:
        repository = GoalRepository(self.session)

        def fetch_goals() -> list[tuple[str, dict[str, Any]]]:
            savings = self.client.list_resource(
                f"/users/{self.config.pcid}/savings_goals", "savings_goals"
            )
            payoff = self.client.list_resource(
                f"/users/{self.config.pcid}/payoff_goals", "payoff_goals"
            )
            return [("savings", row) for row in savings] + [("payoff", row) for row in payoff]

        def write_goal(item: tuple[str, dict[str, Any]]) -> None:
            kind, row = item
            if kind == "payoff":
                goal = mappers.payoff_goal_from_vendor(row, user_id=user_id)
            else:
                goal = mappers.savings_goal_from_vendor(row, user_id=user_id)
            repository.upsert(goal)

        return self._stage("goals", fetch_goals, write_goal)

    def _import_alerts(self, user_id: int) -> Iterator[Event]:
        repository = AlertRepository(self.session)
        return self._stage(
            "alerts",
            lambda: self.client.list_resource(f"/users/{self.config.pcid}/alerts", "alerts"),
            lambda row: repository.upsert(mappers.alert_from_vendor(row, user_id=user_id)),
        )

    def _import_tags(self, user_id: int, partner_id: int) -> Iterator[Event]:
        repository = TagRepository(self.session)
        return self._stage(
            "tags",
            lambda: self.client.list_resource(f"/users/{self.config.pcid}/tags", "tags"),
            lambda row: repository.upsert(
                mappers.tag_from_vendor(row, user_id=user_id, partner_id=partner_id)
            ),
        )


__all__ = [
    "MigrationImporter",
    "mint_vendor_token",
    "check_vendor_connection",
]
