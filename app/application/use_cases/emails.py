"""Use cases that send transactional email and keep the delivery log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from html import escape
from typing import Any, Iterable

from sqlalchemy.orm import Session

from app.domain.entities import EmailLog, User, UserRole
from app.domain.errors import DomainError, EmailDeliveryError, NotFoundError
from app.infrastructure import email as mailer
from app.infrastructure.repositories import EmailLogRepository, UserRepository
from app.utils import PageRequest, PageResult, now_in_app_naive_datetime

logger = logging.getLogger(__name__)


@dataclass
class BulkEmailResult:
    sent: int = 0
    failed: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)


def _deliver(
    session: Session,
    *,
    recipient: str,
    content: mailer.EmailContent,
    template: str | None,
    sent_by: int | None,
) -> EmailLog:
    delivered = mailer.send_email(content.subject, content.html, recipient)
    entry = EmailLogRepository(session).add(
        EmailLog(
            id=None,
            recipient=recipient,
            subject=content.subject,
            status="sent" if delivered else "failed",
            template=template,
            error_message=None if delivered else "Delivery was not accepted by the provider",
            sent_by=sent_by,
            sent_at=now_in_app_naive_datetime() if delivered else None,
        )
    )
    if not delivered:
        logger.warning("Email %r to %s could not be delivered", content.subject, recipient)
    return entry


def _send_or_raise(session: Session, **kwargs: Any) -> EmailLog:
    entry = _deliver(session, **kwargs)
    if entry.status != "sent":
        raise EmailDeliveryError("Failed to send email")
    return entry


def _get_user(session: Session, user_id: int, *, role: UserRole | None = None) -> User:
    user = UserRepository(session).get(user_id)
    if user is None or (role is not None and user.role is not role):
        label = "Student" if role is UserRole.STUDENT else "User"
        raise NotFoundError(f"{label} not found")
    return user


def _custom_content(subject: str, message: str | None, html: str | None) -> mailer.EmailContent:
    if not subject or not subject.strip():
        raise DomainError("Subject is required")
    if html:
        return mailer.EmailContent(subject=subject, html=html)
    if message:
        body = "".join(f"<p>{escape(line)}</p>" for line in message.splitlines() if line.strip())
        return mailer.EmailContent(subject=subject, html=body)
    raise DomainError("Email content is required")


def send_custom_email(
    session: Session,
    *,
    to: str,
    subject: str,
    message: str | None = None,
    html: str | None = None,
    sent_by: int | None = None,
) -> EmailLog:
    content = _custom_content(subject, message, html)
    return _send_or_raise(session, recipient=to, content=content, template="custom", sent_by=sent_by)


def send_bulk_email(
    session: Session,
    *,
    recipients: Iterable[str],
    subject: str,
    message: str | None = None,
    html: str | None = None,
    sent_by: int | None = None,
) -> BulkEmailResult:
    """Send the same message to every address, continuing past failures."""

    content = _custom_content(subject, message, html)
    addresses = list(dict.fromkeys(address for address in recipients if address))
    if not addresses:
        raise DomainError("No recipients found")
    result = BulkEmailResult()
    for address in addresses:
        entry = _deliver(session, recipient=address, content=content, template="bulk", sent_by=sent_by)
        if entry.status == "sent":
            result.sent += 1
        else:
            result.failed += 1
        result.results.append({"email": address, "status": entry.status})
    return result


def send_welcome_email(
    session: Session, *, user_id: int, password: str, sent_by: int | None = None
) -> EmailLog:
    user = _get_user(session, user_id)
    content = mailer.render_welcome(user.profile.full_name, user.email, password)
    return _send_or_raise(
        session, recipient=user.email, content=content, template="welcome", sent_by=sent_by
    )


def send_fee_reminder(
    session: Session, *, student_id: int, fee_details: dict[str, Any], sent_by: int | None = None
) -> EmailLog:
    student = _get_user(session, student_id, role=UserRole.STUDENT)
    content = mailer.render_fee_reminder(student.profile.full_name, fee_details)
    return _send_or_raise(
        session, recipient=student.email, content=content, template="fee_reminder", sent_by=sent_by
    )


def send_exam_notification(
    session: Session, *, student_id: int, exam_details: dict[str, Any], sent_by: int | None = None
) -> EmailLog:
    student = _get_user(session, student_id, role=UserRole.STUDENT)
    content = mailer.render_exam_notification(student.profile.full_name, exam_details)
    return _send_or_raise(
        session,
        recipient=student.email,
        content=content,
        template="exam_notification",
        sent_by=sent_by,
    )


def send_attendance_notification(
    session: Session,
    *,
    student_id: int,
    attendance_details: dict[str, Any],
    sent_by: int | None = None,
) -> EmailLog:
    student = _get_user(session, student_id, role=UserRole.STUDENT)
    content = mailer.render_attendance_notification(student.profile.full_name, attendance_details)
    return _send_or_raise(
        session,
        recipient=student.email,
        content=content,
        template="attendance_notification",
        sent_by=sent_by,
    )


def send_event_invitation(
    session: Session,
    *,
    recipient_ids: Iterable[int],
    event_details: dict[str, Any],
    sent_by: int | None = None,
) -> BulkEmailResult:
    users = UserRepository(session).get_map_by_ids(recipient_ids)
    if not users:
        raise NotFoundError("No recipients found")
    result = BulkEmailResult()
    for user in users.values():
        content = mailer.render_event_invitation(user.profile.full_name, event_details)
        entry = _deliver(
            session,
            recipient=user.email,
            content=content,
            template="event_invitation",
            sent_by=sent_by,
        )
        if entry.status == "sent":
            result.sent += 1
        else:
            result.failed += 1
        result.results.append({"email": user.email, "status": entry.status})
    return result


def send_test_email(session: Session, *, to: str, sent_by: int | None = None) -> EmailLog:
    return _send_or_raise(
        session, recipient=to, content=mailer.render_test_message(), template="test", sent_by=sent_by
    )


def get_email_stats(
    session: Session, *, start: datetime | None = None, end: datetime | None = None
) -> dict[str, object]:
    return EmailLogRepository(session).stats(start=start, end=end)


def list_email_logs(
    session: Session,
    *,
    page: PageRequest,
    status: str | None = None,
    recipient: str | None = None,
) -> PageResult[EmailLog]:
    return EmailLogRepository(session).search(page, status=status, recipient=recipient)


__all__ = [
    "BulkEmailResult",
    "get_email_stats",
    "list_email_logs",
    "send_attendance_notification",
    "send_bulk_email",
    "send_custom_email",
    "send_event_invitation",
    "send_exam_notification",
    "send_fee_reminder",
    "send_test_email",
    "send_welcome_email",
]
