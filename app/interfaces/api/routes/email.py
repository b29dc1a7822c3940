"""Transactional and bulk email endpoints."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases import emails
from app.domain.entities import EmailLog, User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_page_request, require_admin, require_staff
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    AttendanceNotificationRequest,
    BulkEmailItem,
    BulkEmailRequest,
    BulkEmailResponse,
    EmailLogRead,
    EmailSentResponse,
    EmailStatsRead,
    EmailTestRequest,
    EventInvitationRequest,
    ExamNotificationRequest,
    FeeReminderRequest,
    Page,
    SendEmailRequest,
    WelcomeEmailRequest,
    page_of,
)
from app.utils import PageRequest

router = APIRouter(prefix="/email", tags=["email"])


def _sent(message: str, entry: EmailLog) -> EmailSentResponse:
    return EmailSentResponse(message=message, log_id=entry.id)


def _bulk(result: emails.BulkEmailResult) -> BulkEmailResponse:
    return BulkEmailResponse(
        message=f"Sent {result.sent} email(s), {result.failed} failed",
        total_sent=result.sent,
        total_failed=result.failed,
        results=[BulkEmailItem(**item) for item in result.results],
    )


@router.post("/send", response_model=EmailSentResponse)
def send_email(
    payload: SendEmailRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> EmailSentResponse:
    try:
        entry = emails.send_custom_email(
            db,
            to=payload.to,
            subject=payload.subject,
            message=payload.text,
            html=payload.html,
            sent_by=current_user.id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _sent("Email sent successfully", entry)


@router.post("/send-bulk", response_model=BulkEmailResponse)
def send_bulk(
    payload: BulkEmailRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> BulkEmailResponse:
    try:
        result = emails.send_bulk_email(
            db,
            recipients=payload.recipients,
            subject=payload.subject,
            message=payload.text,
            html=payload.html,
            sent_by=current_user.id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _bulk(result)


@router.post("/welcome", response_model=EmailSentResponse)
def send_welcome(
    payload: WelcomeEmailRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailSentResponse:
    try:
        entry = emails.send_welcome_email(
            db, user_id=payload.user_id, password=payload.password, sent_by=current_user.id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _sent("Welcome email sent", entry)


@router.post("/fee-reminder", response_model=EmailSentResponse)
def send_fee_reminder(
    payload: FeeReminderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> EmailSentResponse:
    try:
        entry = emails.send_fee_reminder(
            db,
            student_id=payload.student_id,
            fee_details=payload.fee_details,
            sent_by=current_user.id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _sent("Fee reminder sent", entry)


@router.post("/exam-notification", response_model=EmailSentResponse)
def send_exam_notification(
    payload: ExamNotificationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> EmailSentResponse:
    try:
        entry = emails.send_exam_notification(
            db,
            student_id=payload.student_id,
            exam_details=payload.exam_details,
            sent_by=current_user.id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _sent("Exam notification sent", entry)


@router.post("/attendance-notification", response_model=EmailSentResponse)
def send_attendance_notification(
    payload: AttendanceNotificationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> EmailSentResponse:
    try:
        entry = emails.send_attendance_notification(
            db,
            student_id=payload.student_id,
            attendance_details=payload.attendance_details,
            sent_by=current_user.id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _sent("Attendance notification sent", entry)


@router.post("/event-invitation", response_model=BulkEmailResponse)
def send_event_invitation(
    payload: EventInvitationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> BulkEmailResponse:
    try:
        result = emails.send_event_invitation(
            db,
            recipient_ids=payload.recipient_ids,
            event_details=payload.event_details,
            sent_by=current_user.id,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _bulk(result)


@router.post("/test", response_model=EmailSentResponse)
def send_test(
    payload: EmailTestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> EmailSentResponse:
    entry = emails.send_test_email(db, to=payload.to, sent_by=current_user.id)
    return _sent("Test email sent", entry)


@router.get("/stats", response_model=EmailStatsRead)
def email_stats(
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> EmailStatsRead:
    return EmailStatsRead(**emails.get_email_stats(db, start=start_date, end=end_date))


@router.get("/logs", response_model=Page[EmailLogRead], status_code=status.HTTP_200_OK)
def email_logs(
    status_filter: str | None = Query(default=None, alias="status"),
    recipient: str | None = None,
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> Page[EmailLogRead]:
    result = emails.list_email_logs(db, page=page, status=status_filter, recipient=recipient)
    return page_of(EmailLogRead, result)
