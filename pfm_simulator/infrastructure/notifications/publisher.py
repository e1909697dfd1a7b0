"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from pfm_simulator.domain.entities import Notification
from pfm_simulator.utils.serializers import serialize_datetime, serialize_special_types

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user."""

        if not self._manager.has_connections(notification.user_id):
            return

        message = {"type": "notification", "data": self._serialize(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(
                    self._manager.send_to_user, notification.user_id, message
                )
            except RuntimeError:
                # Called outside the server's worker threads (e.g. the cron script).
                logger.debug(
                    "No event loop available; skipped realtime push for notification %s",
                    notification.id,
                )
        else:
            loop.create_task(
                self._manager.send_to_user(notification.user_id, message)
            )

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "user_id": notification.user_id,
            "alert_id": notification.alert_id,
            "title": notification.title,
            "message": notification.message,
            "metadata": serialize_special_types(notification.metadata or {}),
            "read": notification.read,
            "created_at": serialize_datetime(notification.created_at),
        }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
]
