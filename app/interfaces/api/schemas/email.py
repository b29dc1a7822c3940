"""Email schemas."""

from datetime import datetime
from typing import Any

from pydantic import EmailStr, Field

from .base import APIModel


class SendEmailRequest(APIModel):
    to: EmailStr
    subject: str = Field(..., min_length=1, max_length=200)
    text: str | None = None
    html: str | None = None


class BulkEmailRequest(APIModel):
    recipients: list[EmailStr] = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=200)
    text: str | None = None
    html: str | None = None


class WelcomeEmailRequest(APIModel):
    user_id: int
    password: str = Field(..., min_length=1)


class FeeReminderRequest(APIModel):
    student_id: int
    fee_details: dict[str, Any] = Field(default_factory=dict)


class ExamNotificationRequest(APIModel):
    student_id: int
    exam_details: dict[str, Any] = Field(default_factory=dict)


class AttendanceNotificationRequest(APIModel):
    student_id: int
    attendance_details: dict[str, Any] = Field(default_factory=dict)


class EventInvitationRequest(APIModel):
    recipient_ids: list[int] = Field(..., min_length=1)
    event_details: dict[str, Any] = Field(default_factory=dict)


class EmailTestRequest(APIModel):
    to: EmailStr


class EmailSentResponse(APIModel):
    message: str
    log_id: int


class BulkEmailItem(APIModel):
    email: str
    status: str


class BulkEmailResponse(APIModel):
    message: str
    total_sent: int
    total_failed: int
    results: list[BulkEmailItem]


class EmailLogRead(APIModel):
    id: int
    recipient: str
    subject: str
    status: str
    template: str | None = None
    error_message: str | None = None
    sent_by: int | None = None
    sent_at: datetime | None = None
    created_at: datetime | None = None


class EmailStatsRead(APIModel):
    total: int
    sent: int
    failed: int
    by_template: dict[str, int]


__all__ = [
    "AttendanceNotificationRequest",
    "BulkEmailItem",
    "BulkEmailRequest",
    "BulkEmailResponse",
    "EmailLogRead",
    "EmailSentResponse",
    "EmailStatsRead",
    "EventInvitationRequest",
    "ExamNotificationRequest",
    "FeeReminderRequest",
    "SendEmailRequest",
    "EmailTestRequest",
    "WelcomeEmailRequest",
]
