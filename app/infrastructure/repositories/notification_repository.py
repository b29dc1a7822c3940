"""Persistence helpers for notification entities and their read-state."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.domain.entities import Notification, RecipientMode
from app.infrastructure.models import NotificationModel, NotificationRecipientModel
from app.utils import PageRequest, PageResult, now_in_app_naive_datetime, paginate


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification, recipient_ids: Iterable[int]) -> Notification:
        """Persist ``notification`` with one recipient row per unique user id."""

        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        model.recipients = [
            NotificationRecipientModel(user_id=user_id)
            for user_id in sorted({int(user_id) for user_id in recipient_ids})
        ]
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        page: PageRequest,
        *,
        unread_only: bool = False,
        type: str | None = None,
        category: str | None = None,
        now: datetime | None = None,
    ) -> PageResult[Notification]:
        query = self._visible_query(user_id, now or now_in_app_naive_datetime())
        if unread_only:
            query = query.filter(NotificationRecipientModel.read_at.is_(None))
        if type:
            query = query.filter(NotificationModel.type == type)
        if category:
            query = query.filter(NotificationModel.category == category)
        query = query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model, read_at=read_at) for model, read_at in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def get_for_recipient(self, notification_id: int, user_id: int) -> Notification | None:
        row = (
            self.session.query(NotificationModel, NotificationRecipientModel.read_at)
            .join(
                NotificationRecipientModel,
                NotificationRecipientModel.notification_id == NotificationModel.id,
            )
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationRecipientModel.user_id == user_id)
            .first()
        )
        if row is None:
            return None
        model, read_at = row
        return self._to_entity(model, read_at=read_at)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> None:
        """Add ``user_id`` to the read-set; already read rows keep their timestamp."""

        self.session.query(NotificationRecipientModel).filter(
            NotificationRecipientModel.notification_id == notification_id,
            NotificationRecipientModel.user_id == user_id,
            NotificationRecipientModel.read_at.is_(None),
        ).update(
            {NotificationRecipientModel.read_at: now_in_app_naive_datetime()},
            synchronize_session=False,
        )
        self.session.commit()

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationRecipientModel)
            .filter(
                NotificationRecipientModel.user_id == user_id,
                NotificationRecipientModel.read_at.is_(None),
            )
            .update(
                {NotificationRecipientModel.read_at: now_in_app_naive_datetime()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def delete(self, notification_id: int) -> None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def stats_for_user(self, user_id: int, *, now: datetime | None = None) -> dict[str, object]:
        visible = self._visible_query(user_id, now or now_in_app_naive_datetime()).subquery()
        total = self.session.query(func.count()).select_from(visible).scalar() or 0
        unread = (
            self.session.query(func.count())
            .select_from(visible)
            .filter(visible.c.read_at.is_(None))
            .scalar()
            or 0
        )
        by_type = dict(
            self.session.query(visible.c.type, func.count()).group_by(visible.c.type).all()
        )
        by_category = dict(
            self.session.query(visible.c.category, func.count())
            .group_by(visible.c.category)
            .all()
        )
        return {
            "total": total,
            "unread": unread,
            "by_type": by_type,
            "by_category": by_category,
        }

    def _visible_query(self, user_id: int, now: datetime):
        return (
            self.session.query(NotificationModel, NotificationRecipientModel.read_at)
            .join(
                NotificationRecipientModel,
                NotificationRecipientModel.notification_id == NotificationModel.id,
            )
            .filter(NotificationRecipientModel.user_id == user_id)
            .filter(or_(NotificationModel.expires_at.is_(None), NotificationModel.expires_at > now))
            .filter(
                or_(NotificationModel.scheduled_for.is_(None), NotificationModel.scheduled_for <= now)
            )
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.priority = notification.priority
        model.category = notification.category
        model.sender_id = notification.sender_id
        model.recipient_mode = RecipientMode(notification.recipient_mode).value
        model.recipient_value = notification.recipient_value
        model.action_url = notification.action_url
        model.payload = notification.payload or {}
        model.scheduled_for = notification.scheduled_for
        model.expires_at = notification.expires_at

    @staticmethod
    def _to_entity(
        model: NotificationModel, *, read_at: datetime | None = None
    ) -> Notification:
        sender = model.sender
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            sender_id=model.sender_id,
            recipient_mode=RecipientMode(model.recipient_mode),
            recipient_value=model.recipient_value,
            type=model.type,
            priority=model.priority,
            category=model.category,
            action_url=model.action_url,
            payload=model.payload or {},
            scheduled_for=model.scheduled_for,
            expires_at=model.expires_at,
            created_at=model.created_at,
            sender_name=f"{sender.first_name} {sender.last_name}" if sender else None,
            is_read=read_at is not None,
            read_at=read_at,
        )


__all__ = ["NotificationRepository"]
