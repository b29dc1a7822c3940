"""Endpoints for creating, reading and acknowledging notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases import notifications
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import (
    get_current_user,
    get_page_request,
    get_realtime,
    require_admin,
    require_staff,
)
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    BulkNotificationCreate,
    ClassNotificationCreate,
    MarkAllReadResponse,
    NotificationContent,
    NotificationCreate,
    NotificationCreatedRead,
    NotificationRead,
    NotificationStatsRead,
    Page,
    page_of,
)
from app.utils import PageRequest

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _draft(payload: NotificationContent) -> notifications.NotificationDraft:
    return notifications.NotificationDraft(
        title=payload.title,
        message=payload.message,
        type=payload.type,
        priority=payload.priority,
        category=payload.category,
        action_url=payload.action_url,
        payload=payload.payload,
        scheduled_for=payload.scheduled_for,
        expires_at=payload.expires_at,
    )


def _created(result) -> NotificationCreatedRead:
    notification, count = result
    return NotificationCreatedRead(
        notification=NotificationRead.model_validate(notification), recipient_count=count
    )


@router.get("/", response_model=Page[NotificationRead])
def list_notifications(
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    type_filter: str | None = Query(default=None, alias="type"),
    category: str | None = None,
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Page[NotificationRead]:
    """Return the caller's non-expired notifications, newest first."""

    result = notifications.list_notifications(
        db,
        user_id=current_user.id,
        page=page,
        unread_only=unread_only,
        type=type_filter,
        category=category,
    )
    return page_of(NotificationRead, result)


@router.post("/", response_model=NotificationCreatedRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> NotificationCreatedRead:
    try:
        result = notifications.create_notification(
            db,
            sender_id=current_user.id,
            draft=_draft(payload),
            recipient_mode=payload.recipient_mode,
            recipient_value=payload.recipient_value,
            publisher=realtime,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _created(result)


@router.get("/stats", response_model=NotificationStatsRead)
def notification_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationStatsRead:
    return NotificationStatsRead.model_validate(
        notifications.get_notification_stats(db, user_id=current_user.id)
    )


@router.patch("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadResponse:
    updated = notifications.mark_all_notifications_read(db, user_id=current_user.id)
    return MarkAllReadResponse(message="All notifications marked as read", updated=updated)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    try:
        notification = notifications.mark_notification_read(
            db, notification_id, user_id=current_user.id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        notifications.delete_notification(db, notification_id, user_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/bulk", response_model=NotificationCreatedRead, status_code=status.HTTP_201_CREATED)
def send_bulk(
    payload: BulkNotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> NotificationCreatedRead:
    try:
        result = notifications.send_bulk_notification(
            db,
            sender_id=current_user.id,
            roles=payload.roles,
            draft=_draft(payload),
            publisher=realtime,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _created(result)


@router.post("/class", response_model=NotificationCreatedRead, status_code=status.HTTP_201_CREATED)
def send_to_class(
    payload: ClassNotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> NotificationCreatedRead:
    try:
        result = notifications.send_class_notification(
            db,
            sender_id=current_user.id,
            class_id=payload.class_id,
            draft=_draft(payload),
            publisher=realtime,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _created(result)
