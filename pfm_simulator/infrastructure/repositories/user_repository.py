"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.models import AlertModel, UserModel
from pfm_simulator.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide persistence operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        if user.id is not None:
            model.id = user.id
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def upsert(self, user: User) -> User:
        """Insert ``user`` or refresh the identity fields of the existing row.

        Existing rows keep their password, preferences and login history.
        """

        if user.id is None:
            raise ValueError("User id is required for upserts")
        model = self.session.get(UserModel, user.id)
        if model is None:
            model = UserModel(id=user.id)
            self._apply_entity_to_model(model, user)
            self.session.add(model)
        else:
            model.partner_id = user.partner_id
            model.email = user.email
            model.first_name = user.first_name
            model.last_name = user.last_name
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def record_login(self, user_id: int, *, logged_in_at: datetime) -> User:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.last_login_at = ensure_app_naive_datetime(logged_in_at)
        model.login_count = (model.login_count or 0) + 1
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_preferences(self, user_id: int, preferences: dict) -> User:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        # Reassign so the JSON column is flagged as modified.
        model.preferences = dict(preferences)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_ids_with_active_alerts(self) -> Sequence[int]:
        query = (
            self.session.query(UserModel.id)
            .join(AlertModel, AlertModel.user_id == UserModel.id)
            .filter(UserModel.deleted_at.is_(None))
            .filter(AlertModel.active.is_(True))
            .filter(AlertModel.deleted_at.is_(None))
            .distinct()
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def _get_model(self, **filters) -> UserModel | None:
        query = self.session.query(UserModel).filter(UserModel.deleted_at.is_(None))
        if "id" in filters:
            query = query.filter(UserModel.id == filters["id"])
        if "email" in filters:
            query = query.filter(UserModel.email == filters["email"])
        return query.first()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.partner_id = user.partner_id
        model.email = user.email
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.hashed_password = user.hashed_password or ""
        model.preferences = dict(user.preferences or {})
        model.last_login_at = ensure_app_naive_datetime(user.last_login_at)
        model.login_count = user.login_count or 0
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            partner_id=model.partner_id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            hashed_password=model.hashed_password or "",
            preferences=dict(model.preferences or {}),
            last_login_at=ensure_app_timezone(model.last_login_at),
            login_count=model.login_count or 0,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["UserRepository"]
