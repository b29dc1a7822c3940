"""Chat rooms, message ownership and direct room privacy."""

from __future__ import annotations

from tests.conftest import login


def _send(client, headers, room_id="group-general", message="Hello"):
    return client.post(
        "/api/chat/message", json={"roomId": room_id, "message": message}, headers=headers
    )


def test_send_and_list_messages(client, accounts, student_headers, teacher_headers) -> None:
    assert _send(client, student_headers, message="first").status_code == 201
    created = _send(client, teacher_headers, message="second")

    assert created.json()["message"] == "second"
    assert created.json()["type"] == "text"
    history = client.get("/api/chat/room/group-general/messages", headers=student_headers).json()
    assert [item["message"] for item in history["items"]] == ["first", "second"]
    assert history["pagination"]["limit"] == 50


def test_sender_becomes_participant(client, accounts, student_headers) -> None:
    _send(client, student_headers)

    participants = client.get("/api/chat/room/group-general/participants", headers=student_headers)

    assert [item["userId"] for item in participants.json()] == [accounts.student.id]


def test_empty_message_is_rejected(client, accounts, student_headers) -> None:
    assert _send(client, student_headers, message="   ").status_code == 400


def test_only_author_can_edit_or_delete(client, accounts, student_headers, teacher_headers) -> None:
    message_id = _send(client, student_headers).json()["id"]

    assert client.delete(f"/api/chat/message/{message_id}", headers=teacher_headers).status_code == 404
    edited = client.put(
        f"/api/chat/message/{message_id}", json={"message": "Hello again"}, headers=student_headers
    )
    assert edited.status_code == 200
    assert edited.json()["isEdited"] is True

    assert client.delete(f"/api/chat/message/{message_id}", headers=student_headers).status_code == 204
    assert client.delete(f"/api/chat/message/{message_id}", headers=student_headers).status_code == 404
    history = client.get("/api/chat/room/group-general/messages", headers=student_headers).json()
    assert history["items"] == []


def test_direct_room_is_stable_and_private(client, accounts, student_headers, teacher_headers) -> None:
    first = client.get(f"/api/chat/direct/{accounts.teacher.id}", headers=student_headers)
    second = client.get(f"/api/chat/direct/{accounts.student.id}", headers=teacher_headers)

    assert first.status_code == second.status_code == 200
    room_id = first.json()["id"]
    assert room_id == second.json()["id"]
    assert first.json()["kind"] == "direct"

    participants = client.get(f"/api/chat/room/{room_id}/participants", headers=student_headers)
    assert sorted(item["userId"] for item in participants.json()) == sorted(
        [accounts.student.id, accounts.teacher.id]
    )

    outsider = login(client, accounts.other_student.email)
    assert client.get(f"/api/chat/room/{room_id}/messages", headers=outsider).status_code == 404
    assert _send(client, outsider, room_id=room_id).status_code == 404



def test_non_canonical_direct_ids_are_rejected(
    client, accounts, student_headers, teacher_headers
) -> None:
    opened = client.get(f"/api/chat/direct/{accounts.teacher.id}", headers=student_headers)
    room_id = opened.json()["id"]
    low, high = sorted((accounts.student.id, accounts.teacher.id))

    assert _send(client, teacher_headers, room_id=f"direct-{high}-{low}").status_code == 404
    assert _send(client, teacher_headers, room_id=f"direct-0{low}-{high}").status_code == 404
    self_room = f"direct-{accounts.teacher.id}-{accounts.teacher.id}"
    assert _send(client, teacher_headers, room_id=self_room).status_code == 404
    assert client.post(
        f"/api/chat/room/direct-{high}-{low}/join", headers=teacher_headers
    ).status_code == 404

    assert _send(client, teacher_headers, room_id=room_id).status_code == 201
    history = client.get(f"/api/chat/room/{room_id}/messages", headers=student_headers).json()
    assert history["pagination"]["total"] == 1


def test_direct_room_with_self_is_rejected(client, accounts, student_headers) -> None:
    response = client.get(f"/api/chat/direct/{accounts.student.id}", headers=student_headers)

    assert response.status_code == 400


def test_class_room_requires_staff(client, accounts, student_headers, teacher_headers) -> None:
    assert client.post("/api/chat/class/CSE-A", headers=student_headers).status_code == 403

    response = client.post("/api/chat/class/CSE-A", headers=teacher_headers)

    assert response.status_code == 200
    assert response.json()["id"] == "class-CSE-A"
    rooms = client.get("/api/chat/rooms", headers=teacher_headers).json()
    assert [summary["room"]["id"] for summary in rooms] == ["class-CSE-A"]
