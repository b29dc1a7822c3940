"""Notification schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from app.domain.entities import RecipientMode

from .base import APIModel

_TYPES = "^(info|success|warning|error|announcement)$"
_PRIORITIES = "^(low|medium|high)$"
_CATEGORIES = "^(academic|fee|attendance|exam|general|system)$"


class NotificationContent(APIModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: str = Field(default="info", pattern=_TYPES)
    priority: str = Field(default="medium", pattern=_PRIORITIES)
    category: str = Field(default="general", pattern=_CATEGORIES)
    action_url: str | None = None
    payload: dict[str, Any] | None = Field(default=None, alias="data")
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None


class NotificationCreate(NotificationContent):
    recipient_mode: RecipientMode = Field(..., alias="recipientType")
    recipient_value: Any = Field(default=None, alias="recipients")


class BulkNotificationCreate(NotificationContent):
    roles: list[str] = Field(..., min_length=1)


class ClassNotificationCreate(NotificationContent):
    class_id: str = Field(..., min_length=1)


class NotificationRead(APIModel):
    id: int
    title: str
    message: str
    type: str
    priority: str
    category: str
    sender_id: int
    sender_name: str | None = None
    recipient_mode: RecipientMode = Field(..., serialization_alias="recipientType")
    action_url: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict, serialization_alias="data")
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None
    is_read: bool = False
    read_at: datetime | None = None


class NotificationCreatedRead(APIModel):
    notification: NotificationRead
    recipient_count: int


class MarkAllReadResponse(APIModel):
    message: str
    updated: int


class NotificationStatsRead(APIModel):
    total: int
    unread: int
    by_type: dict[str, int]
    by_category: dict[str, int]


__all__ = [
    "BulkNotificationCreate",
    "ClassNotificationCreate",
    "MarkAllReadResponse",
    "NotificationContent",
    "NotificationCreate",
    "NotificationCreatedRead",
    "NotificationRead",
    "NotificationStatsRead",
]
