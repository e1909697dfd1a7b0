"""Deliver committed alert notifications over websocket and email."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import (
    DELIVERY_FAILED,
    DELIVERY_SENT,
    Alert,
    Notification,
)
from pfm_simulator.infrastructure.email import (
    is_email_configured,
    send_alert_notification_email,
)
from pfm_simulator.infrastructure.notifications import dispatch_notification
from pfm_simulator.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


def _email_recipient(session: Session, user_id: int) -> str | None:
    user = UserRepository(session).get(user_id)
    if user is None:
        return None
    destinations = (user.preferences or {}).get("alert_destinations") or {}
    return destinations.get("email") or user.email


def deliver_notification(
    session: Session, notification: Notification, alert: Alert
) -> Notification:
    """Push ``notification`` to live clients and email it when enabled.

    The email status moves from ``pending`` to ``sent`` or ``failed`` only
    when SendGrid is configured. SMS has no provider and stays ``pending``.
    """

    dispatch_notification(notification)

    if not alert.email_delivery or not is_email_configured():
        return notification

    recipient = _email_recipient(session, notification.user_id)
    if not recipient:
        logger.warning(
            "No email destination for user %s; notification %s left pending",
            notification.user_id,
            notification.id,
        )
        return notification

    sent = send_alert_notification_email(
        recipient, notification.title, notification.message
    )
    status = DELIVERY_SENT if sent else DELIVERY_FAILED
    return NotificationRepository(session).update_delivery_status(
        notification.id, email_status=status
    )


__all__ = ["deliver_notification"]
