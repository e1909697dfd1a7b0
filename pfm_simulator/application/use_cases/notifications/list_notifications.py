"""Use cases for reading a user's notifications."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Notification
from pfm_simulator.infrastructure.repositories import NotificationRepository

DEFAULT_PER_PAGE = 25
MAX_PER_PAGE = 100


@dataclass
class NotificationPage:
    notifications: Sequence[Notification]
    page: int
    per_page: int
    unread_count: int


def list_notifications(
    session: Session,
    user_id: int,
    *,
    read: bool | None = None,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
) -> NotificationPage:
    """Return one page of notifications, newest first."""

    page = max(page, 1)
    per_page = min(max(per_page, 1), MAX_PER_PAGE)
    repository = NotificationRepository(session)
    notifications = repository.list_for_user(
        user_id,
        read=read,
        offset=(page - 1) * per_page,
        limit=per_page,
    )
    return NotificationPage(
        notifications=notifications,
        page=page,
        per_page=per_page,
        unread_count=repository.count_unread(user_id),
    )


def get_notification(session: Session, user_id: int, notification_id: int) -> Notification:
    notification = NotificationRepository(session).get(notification_id, user_id=user_id)
    if notification is None:
        raise ValueError("Notification not found")
    return notification


__all__ = ["NotificationPage", "get_notification", "list_notifications"]
