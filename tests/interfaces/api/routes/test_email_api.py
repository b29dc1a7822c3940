"""Email endpoints and the delivery log."""

from __future__ import annotations

import pytest

from app.infrastructure import email as mailer


@pytest.fixture()
def outbox(monkeypatch) -> list[dict]:
    sent: list[dict] = []

    def fake_send(subject: str, html_content: str, recipient: str) -> bool:
        sent.append({"subject": subject, "html": html_content, "to": recipient})
        return not recipient.startswith("bounce")

    monkeypatch.setattr(mailer, "send_email", fake_send)
    return sent


def test_custom_email_is_sent_and_logged(client, accounts, outbox, teacher_headers, admin_headers) -> None:
    response = client.post(
        "/api/email/send",
        json={"to": "parent@college.edu", "subject": "Progress", "text": "Doing well"},
        headers=teacher_headers,
    )

    assert response.status_code == 200
    assert outbox[0]["to"] == "parent@college.edu"
    logs = client.get("/api/email/logs", headers=admin_headers).json()
    assert logs["items"][0]["status"] == "sent"
    assert logs["items"][0]["sentBy"] == accounts.teacher.id


def test_failed_delivery_returns_500_and_is_logged(client, outbox, teacher_headers, admin_headers) -> None:
    response = client.post(
        "/api/email/send",
        json={"to": "bounce@college.edu", "subject": "Progress", "text": "Doing well"},
        headers=teacher_headers,
    )

    assert response.status_code == 500
    stats = client.get("/api/email/stats", headers=admin_headers).json()
    assert stats["failed"] == 1
    assert stats["sent"] == 0


def test_bulk_email_continues_past_failures(client, outbox, admin_headers) -> None:
    response = client.post(
        "/api/email/send-bulk",
        json={
            "recipients": ["a@college.edu", "bounce@college.edu", "b@college.edu"],
            "subject": "Notice",
            "text": "Library closed",
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["totalSent"] == 2
    assert body["totalFailed"] == 1
    assert [item["status"] for item in body["results"]] == ["sent", "failed", "sent"]


def test_fee_reminder_targets_student(client, accounts, outbox, admin_headers) -> None:
    response = client.post(
        "/api/email/fee-reminder",
        json={"studentId": accounts.student.id, "feeDetails": {"amount": 5000}},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert outbox[0]["to"] == accounts.student.email
    assert "5000" in outbox[0]["html"]


def test_students_cannot_send_email(client, outbox, student_headers) -> None:
    response = client.post(
        "/api/email/send",
        json={"to": "x@college.edu", "subject": "Hi", "text": "Hi"},
        headers=student_headers,
    )

    assert response.status_code == 403
    assert outbox == []


def test_welcome_and_test_email_are_admin_only(client, accounts, outbox, teacher_headers, admin_headers) -> None:
    payload = {"userId": accounts.teacher.id, "password": "Temp1234"}

    assert client.post("/api/email/welcome", json=payload, headers=teacher_headers).status_code == 403
    assert client.post("/api/email/welcome", json=payload, headers=admin_headers).status_code == 200
    assert client.post("/api/email/test", json={"to": "ops@college.edu"}, headers=admin_headers).status_code == 200
    assert [mail["to"] for mail in outbox] == [accounts.teacher.email, "ops@college.edu"]
