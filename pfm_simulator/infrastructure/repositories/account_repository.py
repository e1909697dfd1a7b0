"""Persistence helpers for account entities."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Account
from pfm_simulator.infrastructure.models import AccountModel
from pfm_simulator.utils import ensure_app_naive_datetime, ensure_app_timezone


class AccountRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, account_id: int, *, user_id: int | None = None) -> Account | None:
        query = self.session.query(AccountModel).filter(AccountModel.id == account_id)
        if user_id is not None:
            query = query.filter(AccountModel.user_id == user_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def create(self, account: Account) -> Account:
        model = AccountModel()
        if account.id is not None:
            model.id = account.id
        self._apply_entity_to_model(model, account)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def upsert(self, account: Account) -> Account:
        if account.id is None:
            raise ValueError("Account id is required for upserts")
        model = self.session.get(AccountModel, account.id)
        if model is None:
            model = AccountModel(id=account.id)
            self.session.add(model)
        self._apply_entity_to_model(model, account)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: AccountModel, account: Account) -> None:
        model.user_id = account.user_id
        model.partner_id = account.partner_id
        model.name = account.name
        model.display_name = account.display_name
        model.number = account.number or ""
        model.reference_id = account.reference_id or ""
        model.account_type = account.account_type
        model.display_account_type = account.display_account_type
        model.balance = account.balance
        model.state = account.state
        model.aggregation_type = account.aggregation_type
        model.include_in_networth = account.include_in_networth
        model.include_in_cashflow = account.include_in_cashflow
        model.include_in_expenses = account.include_in_expenses
        model.archived_at = ensure_app_naive_datetime(account.archived_at)

    @staticmethod
    def _to_entity(model: AccountModel) -> Account:
        return Account(
            id=model.id,
            user_id=model.user_id,
            partner_id=model.partner_id,
            name=model.name,
            display_name=model.display_name,
            number=model.number or "",
            reference_id=model.reference_id or "",
            account_type=model.account_type,
            display_account_type=model.display_account_type,
            balance=Decimal(model.balance or 0),
            state=model.state,
            aggregation_type=model.aggregation_type,
            include_in_networth=model.include_in_networth,
            include_in_cashflow=model.include_in_cashflow,
            include_in_expenses=model.include_in_expenses,
            archived_at=ensure_app_timezone(model.archived_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["AccountRepository"]
