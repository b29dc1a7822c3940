"""Events, registrations and clubs."""

from __future__ import annotations

from datetime import datetime, timedelta

from tests.conftest import login


def _event(client, headers, **overrides) -> dict:
    start = datetime.now() + timedelta(days=7)
    payload = {
        "title": "Hackathon",
        "description": "24 hour build sprint",
        "type": "technical",
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(hours=24)).isoformat(),
        "location": "Main hall",
        "requiresRegistration": True,
        "maxParticipants": 1,
    }
    payload.update(overrides)
    response = client.post("/api/events/events", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_students_cannot_create_events(client, accounts, student_headers) -> None:
    response = client.post(
        "/api/events/events",
        json={
            "title": "Party",
            "description": "No",
            "type": "cultural",
            "startDate": "2030-01-01T10:00:00",
            "endDate": "2030-01-01T12:00:00",
            "location": "Lawn",
        },
        headers=student_headers,
    )

    assert response.status_code == 403


def test_end_must_follow_start(client, accounts, teacher_headers) -> None:
    response = client.post(
        "/api/events/events",
        json={
            "title": "Backwards",
            "description": "Time travel",
            "type": "other",
            "startDate": "2030-01-02T10:00:00",
            "endDate": "2030-01-01T10:00:00",
            "location": "Lab",
        },
        headers=teacher_headers,
    )

    assert response.status_code == 400


def test_registration_capacity_and_cancellation(client, accounts, teacher_headers, student_headers) -> None:
    event = _event(client, teacher_headers)
    other_headers = login(client, accounts.other_student.email)

    registered = client.post(f"/api/events/events/{event['id']}/register", headers=student_headers)
    duplicate = client.post(f"/api/events/events/{event['id']}/register", headers=student_headers)
    full = client.post(f"/api/events/events/{event['id']}/register", headers=other_headers)

    assert registered.status_code == 201
    assert registered.json()["paymentStatus"] == "not_required"
    assert duplicate.status_code == 400
    assert full.status_code == 400
    assert full.json()["detail"] == "Event is full"

    registration_id = registered.json()["id"]
    cancelled = client.put(f"/api/events/registrations/{registration_id}/cancel", headers=student_headers)
    assert cancelled.json()["status"] == "cancelled"
    retry = client.post(f"/api/events/events/{event['id']}/register", headers=other_headers)
    assert retry.status_code == 201

    registrations = client.get(
        f"/api/events/events/{event['id']}/registrations", headers=teacher_headers
    ).json()
    assert {item["studentId"] for item in registrations} == {
        accounts.student.id,
        accounts.other_student.id,
    }


def test_passed_deadline_blocks_registration(client, accounts, teacher_headers, student_headers) -> None:
    event = _event(
        client,
        teacher_headers,
        registrationDeadline=(datetime.now() - timedelta(days=1)).isoformat(),
    )

    response = client.post(f"/api/events/events/{event['id']}/register", headers=student_headers)

    assert response.status_code == 400


def test_club_membership_lifecycle(client, accounts, teacher_headers, student_headers) -> None:
    club = client.post(
        "/api/events/clubs",
        json={"name": "Robotics", "description": "Build robots", "category": "technical"},
        headers=teacher_headers,
    )
    assert club.status_code == 201
    club_id = club.json()["id"]

    joined = client.post(f"/api/events/clubs/{club_id}/join", headers=student_headers)
    again = client.post(f"/api/events/clubs/{club_id}/join", headers=student_headers)
    assert joined.status_code == 201
    assert again.status_code == 400

    left = client.put(
        f"/api/events/memberships/{joined.json()['id']}/leave", headers=student_headers
    )
    assert left.status_code == 200
    assert left.json()["status"] == "inactive"
    assert left.json()["leftAt"] is not None
