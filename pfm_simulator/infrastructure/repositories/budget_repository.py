"""Persistence helpers for budget entities."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Budget
from pfm_simulator.infrastructure.models import BudgetModel
from pfm_simulator.utils import ensure_app_timezone


class BudgetRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, budget_id: int, *, user_id: int | None = None) -> Budget | None:
        query = (
            self.session.query(BudgetModel)
            .filter(BudgetModel.id == budget_id)
            .filter(BudgetModel.deleted_at.is_(None))
        )
        if user_id is not None:
            query = query.filter(BudgetModel.user_id == user_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def create(self, budget: Budget) -> Budget:
        model = BudgetModel()
        if budget.id is not None:
            model.id = budget.id
        self._apply_entity_to_model(model, budget)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def upsert(self, budget: Budget) -> Budget:
        if budget.id is None:
            raise ValueError("Budget id is required for upserts")
        model = self.session.get(BudgetModel, budget.id)
        if model is None:
            model = BudgetModel(id=budget.id)
            self.session.add(model)
        self._apply_entity_to_model(model, budget)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: BudgetModel, budget: Budget) -> None:
        model.user_id = budget.user_id
        model.name = budget.name
        model.budget_amount = budget.budget_amount
        model.show_on_dashboard = budget.show_on_dashboard
        model.account_list = [int(account_id) for account_id in budget.account_list or []]
        model.tag_names = list(budget.tag_names or [])

    @staticmethod
    def _to_entity(model: BudgetModel) -> Budget:
        return Budget(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            budget_amount=Decimal(model.budget_amount or 0),
            show_on_dashboard=model.show_on_dashboard,
            account_list=[int(account_id) for account_id in model.account_list or []],
            tag_names=list(model.tag_names or []),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["BudgetRepository"]
