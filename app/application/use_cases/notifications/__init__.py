"""Use cases for notifications and their realtime delivery."""

from .create_notification import (
    NotificationDraft,
    create_notification,
    send_bulk_notification,
    send_class_notification,
)
from .manage_notifications import (
    delete_notification,
    get_notification_stats,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .recipients import resolve_recipients

__all__ = [
    "NotificationDraft",
    "create_notification",
    "delete_notification",
    "get_notification_stats",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "resolve_recipients",
    "send_bulk_notification",
    "send_class_notification",
]
