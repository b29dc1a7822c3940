"""Notification fan-out, read tracking and ownership rules."""

from __future__ import annotations

from tests.conftest import login


def _notify(client, headers, **overrides):
    payload = {
        "title": "Exam schedule",
        "message": "Mid-terms start Monday",
        "type": "announcement",
        "category": "exam",
        "recipientType": "role",
        "recipients": ["student"],
    }
    payload.update(overrides)
    return client.post("/api/notifications/", json=payload, headers=headers)


def test_role_notification_reaches_every_student(client, accounts, teacher_headers, student_headers) -> None:
    response = _notify(client, teacher_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["recipientCount"] == 2
    assert body["notification"]["recipientType"] == "role"
    assert body["notification"]["senderId"] == accounts.teacher.id

    inbox = client.get("/api/notifications/", headers=student_headers).json()
    assert inbox["pagination"]["total"] == 1
    assert inbox["items"][0]["isRead"] is False


def test_marking_read_is_idempotent(client, accounts, teacher_headers, student_headers) -> None:
    notification_id = _notify(client, teacher_headers).json()["notification"]["id"]

    first = client.patch(f"/api/notifications/{notification_id}/read", headers=student_headers)
    second = client.patch(f"/api/notifications/{notification_id}/read", headers=student_headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["isRead"] is True
    assert first.json()["readAt"] == second.json()["readAt"]
    stats = client.get("/api/notifications/stats", headers=student_headers).json()
    assert stats["total"] == 1
    assert stats["unread"] == 0


def test_non_recipient_cannot_read_notification(client, accounts, teacher_headers, admin_headers) -> None:
    notification_id = _notify(client, teacher_headers).json()["notification"]["id"]

    response = client.patch(f"/api/notifications/{notification_id}/read", headers=admin_headers)

    assert response.status_code == 404


def test_mark_all_read_counts_updates(client, accounts, teacher_headers, student_headers) -> None:
    _notify(client, teacher_headers)
    _notify(client, teacher_headers, title="Second")

    response = client.patch("/api/notifications/mark-all-read", headers=student_headers)

    assert response.json()["updated"] == 2
    unread = client.get("/api/notifications/?unreadOnly=true", headers=student_headers).json()
    assert unread["items"] == []


def test_only_sender_may_delete(client, accounts, teacher_headers, student_headers) -> None:
    notification_id = _notify(client, teacher_headers).json()["notification"]["id"]

    assert client.delete(f"/api/notifications/{notification_id}", headers=student_headers).status_code == 404
    assert client.delete(f"/api/notifications/{notification_id}", headers=teacher_headers).status_code == 204


def test_specific_recipients_skip_unknown_ids(client, accounts, admin_headers) -> None:
    response = _notify(
        client,
        admin_headers,
        recipientType="specific",
        recipients=[accounts.student.id, 9999],
    )

    assert response.json()["recipientCount"] == 1


def test_bulk_notification_is_admin_only(client, accounts, teacher_headers, admin_headers) -> None:
    payload = {"title": "Holiday", "message": "Campus closed", "roles": ["student", "teacher"]}

    assert client.post("/api/notifications/bulk", json=payload, headers=teacher_headers).status_code == 403
    response = client.post("/api/notifications/bulk", json=payload, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["recipientCount"] == 3


def test_unknown_role_is_rejected(client, accounts, admin_headers) -> None:
    response = _notify(client, admin_headers, recipients=["janitor"])

    assert response.status_code == 400


def _mechanical_student(client, admin_headers) -> dict[str, str]:
    response = client.post(
        "/api/admin/students",
        json={
            "email": "mech@college.edu",
            "password": "Secret123",
            "profile": {"firstName": "Max", "lastName": "Mech"},
            "studentDetails": {
                "department": "Mechanical",
                "program": "B.Tech",
                "batch": "2023",
                "classId": "ME-A",
            },
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return login(client, "mech@college.edu")


def test_department_and_batch_audiences(client, accounts, admin_headers) -> None:
    _mechanical_student(client, admin_headers)

    department = _notify(
        client, admin_headers, recipientType="department", recipients="Computer Science"
    )
    batch = _notify(client, admin_headers, recipientType="batch", recipients="2023")
    missing = _notify(client, admin_headers, recipientType="department", recipients=None)

    assert department.json()["recipientCount"] == 3
    assert batch.json()["recipientCount"] == 1
    assert missing.status_code == 400


def test_scheduled_and_expired_notifications_are_hidden(
    client, accounts, teacher_headers, student_headers
) -> None:
    _notify(client, teacher_headers, title="Later", scheduledFor="2099-01-01T00:00:00")
    _notify(client, teacher_headers, title="Gone", expiresAt="2000-01-01T00:00:00")
    _notify(client, teacher_headers, title="Now")

    inbox = client.get("/api/notifications/", headers=student_headers).json()

    assert [item["title"] for item in inbox["items"]] == ["Now"]
    assert client.get("/api/notifications/stats", headers=student_headers).json()["total"] == 1


def test_class_notification_reaches_class_students(
    client, accounts, admin_headers, teacher_headers, student_headers
) -> None:
    mech_headers = _mechanical_student(client, admin_headers)

    response = client.post(
        "/api/notifications/class",
        json={"title": "Lab moved", "message": "Room 204 today", "classId": "ME-A"},
        headers=teacher_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["recipientCount"] == 1
    assert body["notification"]["category"] == "academic"
    assert body["notification"]["data"]["classId"] == "ME-A"
    assert client.get("/api/notifications/", headers=mech_headers).json()["pagination"]["total"] == 1
    assert client.get("/api/notifications/", headers=student_headers).json()["items"] == []
    assert (
        client.post(
            "/api/notifications/class",
            json={"title": "Lab moved", "message": "Room 204 today", "classId": "ME-A"},
            headers=student_headers,
        ).status_code
        == 403
    )
