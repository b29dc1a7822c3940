"""Use cases for reading, acknowledging and deleting notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import NotificationRepository
from app.utils import PageRequest, PageResult


def list_notifications(
    session: Session,
    *,
    user_id: int,
    page: PageRequest,
    unread_only: bool = False,
    type: str | None = None,
    category: str | None = None,
) -> PageResult[Notification]:
    return NotificationRepository(session).list_for_user(
        user_id, page, unread_only=unread_only, type=type, category=category
    )


def mark_notification_read(
    session: Session, notification_id: int, *, user_id: int
) -> Notification:
    """Add the caller to the read-set; repeating the call changes nothing."""

    repository = NotificationRepository(session)
    if repository.get_for_recipient(notification_id, user_id) is None:
        raise NotFoundError("Notification not found")
    repository.mark_as_read(notification_id, user_id=user_id)
    return repository.get_for_recipient(notification_id, user_id)


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, notification_id: int, *, user_id: int) -> None:
    """Delete a notification; only its sender may do so."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None or notification.sender_id != user_id:
        raise NotFoundError("Notification not found")
    repository.delete(notification_id)


def get_notification_stats(session: Session, *, user_id: int) -> dict[str, object]:
    return NotificationRepository(session).stats_for_user(user_id)


__all__ = [
    "delete_notification",
    "get_notification_stats",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
