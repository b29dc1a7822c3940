"""Use cases for creating notifications and pushing them to connected users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    Notification,
    RecipientMode,
    UserRole,
    class_room_id,
)
from app.domain.errors import DomainError
from app.infrastructure.realtime import RealtimePublisher, serialize_notification
from app.infrastructure.repositories import NotificationRepository, UserRepository
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime

from .recipients import resolve_recipients


@dataclass
class NotificationDraft:
    """Content shared by every notification entry point."""

    title: str
    message: str
    type: str = "info"
    priority: str = "medium"
    category: str = "general"
    action_url: str | None = None
    payload: dict[str, Any] | None = None
    scheduled_for: datetime | None = None
    expires_at: datetime | None = None

    def validate(self) -> None:
        if not self.title.strip() or not self.message.strip():
            raise DomainError("Title and message are required")
        if self.type not in NOTIFICATION_TYPES:
            raise DomainError(f"Invalid notification type: {self.type}")
        if self.priority not in NOTIFICATION_PRIORITIES:
            raise DomainError(f"Invalid priority: {self.priority}")
        if self.category not in NOTIFICATION_CATEGORIES:
            raise DomainError(f"Invalid category: {self.category}")


def _persist(
    session: Session,
    *,
    draft: NotificationDraft,
    sender_id: int,
    mode: RecipientMode,
    value: Any,
    recipient_ids: list[int],
) -> Notification:
    draft.validate()
    notification = Notification(
        id=None,
        title=draft.title.strip(),
        message=draft.message.strip(),
        sender_id=sender_id,
        recipient_mode=mode,
        recipient_value=value,
        type=draft.type,
        priority=draft.priority,
        category=draft.category,
        action_url=draft.action_url,
        payload=dict(draft.payload or {}),
        scheduled_for=ensure_app_naive_datetime(draft.scheduled_for),
        expires_at=ensure_app_naive_datetime(draft.expires_at),
    )
    return NotificationRepository(session).create(notification, recipient_ids)


def _is_due(notification: Notification) -> bool:
    return (
        notification.scheduled_for is None
        or notification.scheduled_for <= now_in_app_naive_datetime()
    )


def create_notification(
    session: Session,
    *,
    sender_id: int,
    draft: NotificationDraft,
    recipient_mode: RecipientMode | str,
    recipient_value: Any = None,
    publisher: RealtimePublisher | None = None,
) -> tuple[Notification, int]:
    """Persist a notification for its resolved audience and push it.

    Returns the notification together with the number of recipients.
    Scheduled notifications are stored but only surface in listings once due.
    """

    mode = RecipientMode(recipient_mode)
    recipient_ids = resolve_recipients(session, mode, recipient_value)
    notification = _persist(
        session,
        draft=draft,
        sender_id=sender_id,
        mode=mode,
        value=recipient_value,
        recipient_ids=recipient_ids,
    )
    if publisher is not None and _is_due(notification):
        publisher.to_users(
            recipient_ids, "new-notification", serialize_notification(notification)
        )
    return notification, len(recipient_ids)


def send_bulk_notification(
    session: Session,
    *,
    sender_id: int,
    roles: list[str],
    draft: NotificationDraft,
    publisher: RealtimePublisher | None = None,
) -> tuple[Notification, int]:
    """Notify every active user holding one of ``roles``."""

    try:
        role_values = [UserRole(role).value for role in roles]
    except ValueError as exc:
        raise DomainError(f"Unknown role in recipients: {roles}") from exc
    recipient_ids = resolve_recipients(session, RecipientMode.ROLE, role_values)
    if not recipient_ids:
        raise DomainError("No recipients found")

    notification = _persist(
        session,
        draft=draft,
        sender_id=sender_id,
        mode=RecipientMode.ROLE,
        value=role_values,
        recipient_ids=recipient_ids,
    )
    if publisher is not None:
        publisher.to_roles(
            role_values, "bulk-notification", serialize_notification(notification)
        )
    return notification, len(recipient_ids)


def send_class_notification(
    session: Session,
    *,
    sender_id: int,
    class_id: str,
    draft: NotificationDraft,
    publisher: RealtimePublisher | None = None,
) -> tuple[Notification, int]:
    """Notify the students of ``class_id`` and push to the class room."""

    if not class_id or not str(class_id).strip():
        raise DomainError("Class ID is required")
    recipient_ids = sorted(set(UserRepository(session).list_ids_by_class(class_id)))
    draft.category = "academic"
    draft.payload = {**(draft.payload or {}), "classId": class_id}

    notification = _persist(
        session,
        draft=draft,
        sender_id=sender_id,
        mode=RecipientMode.SPECIFIC,
        value=recipient_ids,
        recipient_ids=recipient_ids,
    )
    if publisher is not None:
        payload = serialize_notification(notification)
        payload["classId"] = class_id
        publisher.to_room(class_room_id(class_id), "class-notification", payload)
    return notification, len(recipient_ids)


__all__ = [
    "NotificationDraft",
    "create_notification",
    "send_bulk_notification",
    "send_class_notification",
]
