"""Persistence helpers for the outbound email log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import EmailLog
from app.infrastructure.models import EmailLogModel
from app.utils import PageRequest, PageResult, paginate


class EmailLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entry: EmailLog) -> EmailLog:
        model = EmailLogModel(
            recipient=entry.recipient,
            subject=entry.subject,
            template=entry.template,
            status=entry.status,
            error_message=entry.error_message,
            sent_by=entry.sent_by,
            sent_at=entry.sent_at,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def search(
        self,
        page: PageRequest,
        *,
        status: str | None = None,
        recipient: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> PageResult[EmailLog]:
        query = self._filtered(start=start, end=end)
        if status:
            query = query.filter(EmailLogModel.status == status)
        if recipient:
            query = query.filter(EmailLogModel.recipient.ilike(f"%{recipient}%"))
        query = query.order_by(EmailLogModel.created_at.desc(), EmailLogModel.id.desc())
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def stats(self, *, start: datetime | None = None, end: datetime | None = None) -> dict[str, object]:
        query = self._filtered(start=start, end=end)
        by_status = dict(
            query.with_entities(EmailLogModel.status, func.count(EmailLogModel.id))
            .group_by(EmailLogModel.status)
            .all()
        )
        by_template = dict(
            query.with_entities(EmailLogModel.template, func.count(EmailLogModel.id))
            .filter(EmailLogModel.template.is_not(None))
            .group_by(EmailLogModel.template)
            .all()
        )
        return {
            "total": sum(by_status.values()),
            "sent": by_status.get("sent", 0),
            "failed": by_status.get("failed", 0),
            "by_template": by_template,
        }

    def _filtered(self, *, start: datetime | None, end: datetime | None):
        query = self.session.query(EmailLogModel)
        if start is not None:
            query = query.filter(EmailLogModel.created_at >= start)
        if end is not None:
            query = query.filter(EmailLogModel.created_at <= end)
        return query

    @staticmethod
    def _to_entity(model: EmailLogModel) -> EmailLog:
        return EmailLog(
            id=model.id,
            recipient=model.recipient,
            subject=model.subject,
            status=model.status,
            template=model.template,
            error_message=model.error_message,
            sent_by=model.sent_by,
            sent_at=model.sent_at,
            created_at=model.created_at,
        )


__all__ = ["EmailLogRepository"]
