"""Domain entity representing a notification addressed to a set of users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

NOTIFICATION_TYPES = ("info", "success", "warning", "error", "announcement")
NOTIFICATION_PRIORITIES = ("low", "medium", "high")
NOTIFICATION_CATEGORIES = ("academic", "fee", "attendance", "exam", "general", "system")


class RecipientMode(str, Enum):
    """How ``recipient_value`` is interpreted when resolving the audience."""

    ALL = "all"
    ROLE = "role"
    SPECIFIC = "specific"
    DEPARTMENT = "department"
    BATCH = "batch"


@dataclass
class Notification:
    """A persisted notification; ``is_read`` reflects a single viewer."""

    id: int | None
    title: str
    message: str
    sender_id: int
    recipient_mode: RecipientMode
    recipient_value: Any = None
    type: str = "info"
    priority: str = "medium"
    category: str = "general"
    action_url: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None
    sender_name: str | None = None
    is_read: bool = False
    read_at: datetime | None = None


__all__ = [
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "Notification",
    "RecipientMode",
]
