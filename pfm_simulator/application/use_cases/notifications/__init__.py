"""Use cases for reading, updating and delivering notifications."""

from .delivery import deliver_notification
from .list_notifications import NotificationPage, get_notification, list_notifications
from .manage_notifications import (
    delete_notification,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "NotificationPage",
    "delete_notification",
    "deliver_notification",
    "get_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
