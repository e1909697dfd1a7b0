"""Persistence helpers for goal entities."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Goal
from pfm_simulator.infrastructure.models import GoalModel
from pfm_simulator.utils import ensure_app_naive_datetime, ensure_app_timezone


class GoalRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, goal_id: int, *, user_id: int | None = None) -> Goal | None:
        query = (
            self.session.query(GoalModel)
            .filter(GoalModel.id == goal_id)
            .filter(GoalModel.deleted_at.is_(None))
        )
        if user_id is not None:
            query = query.filter(GoalModel.user_id == user_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def create(self, goal: Goal) -> Goal:
        model = GoalModel()
        if goal.id is not None:
            model.id = goal.id
        self._apply_entity_to_model(model, goal)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def upsert(self, goal: Goal) -> Goal:
        if goal.id is None:
            raise ValueError("Goal id is required for upserts")
        model = self.session.get(GoalModel, goal.id)
        if model is None:
            model = GoalModel(id=goal.id)
            self.session.add(model)
        self._apply_entity_to_model(model, goal)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: GoalModel, goal: Goal) -> None:
        model.user_id = goal.user_id
        model.name = goal.name
        model.goal_type = goal.goal_type
        model.target_amount = goal.target_amount
        model.current_amount = goal.current_amount
        model.target_date = goal.target_date
        model.account_id = goal.account_id
        model.details = dict(goal.metadata or {})
        model.archived_at = ensure_app_naive_datetime(goal.archived_at)

    @staticmethod
    def _to_entity(model: GoalModel) -> Goal:
        return Goal(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            goal_type=model.goal_type,
            target_amount=Decimal(model.target_amount or 0),
            current_amount=Decimal(model.current_amount or 0),
            target_date=model.target_date,
            account_id=model.account_id,
            metadata=dict(model.details or {}),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            archived_at=ensure_app_timezone(model.archived_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["GoalRepository"]
