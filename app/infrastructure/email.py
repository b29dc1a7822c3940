"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        # Fall back to a JSON string for unrecognised payloads
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        try:
            return "; ".join(str(item) for item in parsed)
        except TypeError:
            return None

    return None


def _log_sendgrid_exception(exc: Exception) -> None:
    """Log a SendGrid API error with helpful troubleshooting details."""

    status_code = getattr(exc, "status_code", None)
    body = getattr(exc, "body", None)
    details = _extract_sendgrid_error_details(body)

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid API request failed: %s", details)
    else:
        logger.exception("Error sending email via SendGrid: %s", exc)


def _log_unsuccessful_response(response: Any) -> None:
    """Log details from an unsuccessful SendGrid response object."""

    status_code = getattr(response, "status_code", None)
    body = getattr(response, "body", None)
    details = _extract_sendgrid_error_details(body)

    if details:
        logger.error(
            "SendGrid API responded with status %s: %s", status_code, details
        )
    else:
        logger.error("SendGrid API responded with status %s", status_code)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_exception(exc)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_unsuccessful_response(response)
        return False

    logger.info("Email \"%s\" sent to %s", subject, recipient)
    return True


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str


def _paragraphs(*lines: str) -> str:
    return "".join(f"<p>{line}</p>" for line in lines)


def _rows(details: dict[str, Any]) -> str:
    cells = "".join(
        f"<tr><td><strong>{escape(str(key))}</strong></td><td>{escape(str(value))}</td></tr>"
        for key, value in details.items()
    )
    return f"<table>{cells}</table>"


def render_welcome(name: str, email: str, password: str) -> EmailContent:
    return EmailContent(
        subject="Welcome to the College Portal",
        html=_paragraphs(
            f"Hello {escape(name)},",
            "Your account has been created.",
            f"<strong>Email:</strong> {escape(email)}<br><strong>Password:</strong> {escape(password)}",
            "Please sign in and change your password as soon as possible.",
        ),
    )


def render_password_reset(name: str, password: str) -> EmailContent:
    return EmailContent(
        subject="Your temporary password",
        html=_paragraphs(
            f"Hello {escape(name)},",
            "A temporary password was generated for your account.",
            f"<strong>Password:</strong> {escape(password)}",
            "If you did not request this change, contact the administration office.",
        ),
    )


def render_fee_reminder(name: str, fee_details: dict[str, Any]) -> EmailContent:
    return EmailContent(
        subject="Fee payment reminder",
        html=_paragraphs(f"Dear {escape(name)},", "This is a reminder about your pending fees.")
        + _rows(fee_details),
    )


def render_exam_notification(name: str, exam_details: dict[str, Any]) -> EmailContent:
    return EmailContent(
        subject=f"Exam schedule: {escape(str(exam_details.get('name', 'Upcoming exam')))}",
        html=_paragraphs(f"Dear {escape(name)},", "An exam has been scheduled.")
        + _rows(exam_details),
    )


def render_event_invitation(name: str, event_details: dict[str, Any]) -> EmailContent:
    return EmailContent(
        subject=f"You are invited: {escape(str(event_details.get('title', 'Campus event')))}",
        html=_paragraphs(f"Hello {escape(name)},", "You are invited to the following event.")
        + _rows(event_details),
    )


def render_attendance_notification(name: str, attendance_details: dict[str, Any]) -> EmailContent:
    return EmailContent(
        subject="Attendance update",
        html=_paragraphs(f"Dear {escape(name)},", "Here is the latest attendance summary.")
        + _rows(attendance_details),
    )


def render_test_message() -> EmailContent:
    return EmailContent(
        subject="Email configuration test",
        html=_paragraphs("Email delivery is configured correctly."),
    )


def send_user_password_reset_email(email: str, name: str, password: str) -> bool:
    """Send a password reset email with the generated credentials."""

    content = render_password_reset(name, password)
    return send_email(content.subject, content.html, email)


__all__ = [
    "EmailContent",
    "render_attendance_notification",
    "render_event_invitation",
    "render_exam_notification",
    "render_fee_reminder",
    "render_password_reset",
    "render_test_message",
    "render_welcome",
    "send_email",
    "send_user_password_reset_email",
]
