"""Use cases that change the state of a user's notifications."""

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Notification
from pfm_simulator.infrastructure.repositories import NotificationRepository


def mark_notification_read(
    session: Session, user_id: int, notification_id: int
) -> Notification:
    """Mark a single notification as read. Already read notifications are unchanged."""

    try:
        return NotificationRepository(session).mark_as_read(
            notification_id, user_id=user_id
        )
    except ValueError as exc:
        raise ValueError("Notification not found") from exc


def mark_all_notifications_read(session: Session, user_id: int) -> int:
    """Mark every unread notification as read and return how many changed."""

    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, user_id: int, notification_id: int) -> None:
    try:
        NotificationRepository(session).soft_delete(notification_id, user_id=user_id)
    except ValueError as exc:
        raise ValueError("Notification not found") from exc
