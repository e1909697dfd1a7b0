"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Notification
from pfm_simulator.infrastructure.models import NotificationModel
from pfm_simulator.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        offset: int = 0,
        limit: int | None = 25,
    ) -> Sequence[Notification]:
        query = self._base_query(user_id)
        if read is not None:
            query = query.filter(NotificationModel.read.is_(read))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        return (
            self._base_query(user_id)
            .filter(NotificationModel.read.is_(False))
            .count()
        )

    def get(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = self._get_model(notification_id, user_id=user_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Notification:
        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        if not model.read:
            model.read = True
            model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self._base_query(user_id)
            .filter(NotificationModel.read.is_(False))
            .update(
                {
                    NotificationModel.read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def soft_delete(self, notification_id: int, *, user_id: int) -> None:
        model = self._get_model(notification_id, user_id=user_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        model.deleted_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()

    def update_delivery_status(
        self,
        notification_id: int,
        *,
        email_status: str | None = None,
        sms_status: str | None = None,
    ) -> Notification:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        if email_status is not None:
            model.email_status = email_status
        if sms_status is not None:
            model.sms_status = sms_status
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _base_query(self, user_id: int):
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.deleted_at.is_(None))
        )

    def _get_model(
        self, notification_id: int, *, user_id: int
    ) -> NotificationModel | None:
        return (
            self._base_query(user_id)
            .filter(NotificationModel.id == notification_id)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
        model.user_id = notification.user_id
        model.alert_id = notification.alert_id
        model.title = notification.title
        model.message = notification.message
        model.details = dict(notification.metadata or {})
        model.email_status = notification.email_status
        model.sms_status = notification.sms_status
        model.read = notification.read
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            alert_id=model.alert_id,
            metadata=dict(model.details or {}),
            email_status=model.email_status,
            sms_status=model.sms_status,
            read=bool(model.read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["NotificationRepository"]
