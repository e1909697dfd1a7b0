"""Persistence helpers for alert entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Alert, Notification
from pfm_simulator.infrastructure.models import AlertModel, NotificationModel
from pfm_simulator.infrastructure.repositories.notification_repository import (
    NotificationRepository,
)
from pfm_simulator.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class AlertRepository:
    """Provide CRUD operations for :class:`Alert` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self, user_id: int, *, include_inactive: bool = False
    ) -> Sequence[Alert]:
        query = (
            self.session.query(AlertModel)
            .filter(AlertModel.user_id == user_id)
            .filter(AlertModel.deleted_at.is_(None))
        )
        if not include_inactive:
            query = query.filter(AlertModel.active.is_(True))
        query = query.order_by(
            AlertModel.active.desc(),
            AlertModel.created_at.desc(),
            AlertModel.id.desc(),
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active_for_user(
        self, user_id: int, *, alert_types: Sequence[str] | None = None
    ) -> Sequence[Alert]:
        query = (
            self.session.query(AlertModel)
            .filter(AlertModel.user_id == user_id)
            .filter(AlertModel.active.is_(True))
            .filter(AlertModel.deleted_at.is_(None))
        )
        if alert_types:
            query = query.filter(AlertModel.alert_type.in_(list(alert_types)))
        query = query.order_by(AlertModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, alert_id: int, *, user_id: int | None = None) -> Alert | None:
        model = self._get_model(alert_id, user_id=user_id)
        return self._to_entity(model) if model else None

    def create(self, alert: Alert) -> Alert:
        model = AlertModel()
        if alert.id is not None:
            model.id = alert.id
        self._apply_entity_to_model(model, alert)
        if alert.created_at is not None:
            model.created_at = ensure_app_naive_datetime(alert.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, alert: Alert) -> Alert:
        if alert.id is None:
            raise ValueError("Alert id is required for updates")
        model = self._get_model(alert.id, user_id=alert.user_id)
        if model is None:
            msg = f"Alert with id {alert.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, alert)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def upsert(self, alert: Alert) -> Alert:
        """Insert ``alert`` or refresh the vendor-sourced fields of an existing row.

        Existing rows keep their trigger history, deletion state and delivery
        flags. Stored conditions are only replaced when the import carries some.
        """

        if alert.id is None:
            raise ValueError("Alert id is required for upserts")
        model = self.session.get(AlertModel, alert.id)
        if model is None:
            model = AlertModel(id=alert.id)
            self._apply_entity_to_model(model, alert)
            self.session.add(model)
        else:
            model.name = alert.name
            model.alert_type = alert.alert_type
            model.active = alert.active
            if alert.conditions:
                model.conditions = dict(alert.conditions)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def soft_delete(self, alert_id: int, *, user_id: int) -> None:
        model = self._get_model(alert_id, user_id=user_id)
        if model is None:
            msg = f"Alert with id {alert_id} not found"
            raise ValueError(msg)
        model.deleted_at = ensure_app_naive_datetime(now_in_app_timezone())
        model.active = False
        self.session.add(model)
        self.session.commit()

    def record_trigger(
        self, alert_id: int, notification: Notification, *, triggered_at: datetime
    ) -> Notification:
        """Persist ``notification`` and stamp the alert in a single commit.

        Either both writes land or neither does.
        """

        model = self.session.get(AlertModel, alert_id)
        if model is None or model.deleted_at is not None:
            msg = f"Alert with id {alert_id} not found"
            raise ValueError(msg)
        notification_model = NotificationModel()
        NotificationRepository._apply_entity_to_model(
            notification_model, notification, include_creation_fields=True
        )
        notification_model.alert_id = alert_id
        model.last_triggered_at = ensure_app_naive_datetime(triggered_at)
        try:
            self.session.add(notification_model)
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(notification_model)
        return NotificationRepository._to_entity(notification_model)

    def _get_model(self, alert_id: int, *, user_id: int | None) -> AlertModel | None:
        query = (
            self.session.query(AlertModel)
            .filter(AlertModel.id == alert_id)
            .filter(AlertModel.deleted_at.is_(None))
        )
        if user_id is not None:
            query = query.filter(AlertModel.user_id == user_id)
        return query.first()

    @staticmethod
    def _apply_entity_to_model(model: AlertModel, alert: Alert) -> None:
        model.user_id = alert.user_id
        model.alert_type = alert.alert_type
        model.name = alert.name
        model.source_type = alert.source_type
        model.source_id = alert.source_id
        model.conditions = dict(alert.conditions or {})
        model.email_delivery = alert.email_delivery
        model.sms_delivery = alert.sms_delivery
        model.active = alert.active
        model.last_triggered_at = ensure_app_naive_datetime(alert.last_triggered_at)

    @staticmethod
    def _to_entity(model: AlertModel) -> Alert:
        return Alert(
            id=model.id,
            user_id=model.user_id,
            alert_type=model.alert_type,
            name=model.name,
            conditions=dict(model.conditions or {}),
            source_type=model.source_type,
            source_id=model.source_id,
            email_delivery=model.email_delivery,
            sms_delivery=model.sms_delivery,
            active=model.active,
            last_triggered_at=ensure_app_timezone(model.last_triggered_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["AlertRepository"]
