"""Websocket handshake, room events and pushes from REST handlers."""

from __future__ import annotations

import pytest
from fastapi import WebSocketDisconnect


def _token(headers: dict[str, str]) -> str:
    return headers["Authorization"].split(" ", 1)[1]


def test_handshake_requires_valid_token(client, accounts) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/api/ws?token=garbage"):
            pass


def test_ping_and_room_messages(client, accounts, student_headers, teacher_headers) -> None:
    with client.websocket_connect(f"/api/ws?token={_token(student_headers)}") as student, \
            client.websocket_connect(f"/api/ws?token={_token(teacher_headers)}") as teacher:
        student.send_json({"event": "ping"})
        assert student.receive_json() == {"event": "pong", "data": {}}

        for socket in (student, teacher):
            socket.send_json({"event": "join-room", "roomId": "group-general"})
            assert socket.receive_json()["event"] == "room-joined"

        student.send_json({"event": "send-message", "roomId": "group-general", "message": "hi"})
        pushed = teacher.receive_json()
        echoed = student.receive_json()

    assert pushed["event"] == echoed["event"] == "new-message"
    assert pushed["data"]["message"] == "hi"
    history = client.get("/api/chat/room/group-general/messages", headers=teacher_headers).json()
    assert [item["message"] for item in history["items"]] == ["hi"]


def test_direct_room_join_is_refused_to_outsiders(client, accounts, student_headers) -> None:
    room_id = f"direct-{accounts.admin.id}-{accounts.teacher.id}"

    with client.websocket_connect(f"/api/ws?token={_token(student_headers)}") as socket:
        socket.send_json({"event": "join-room", "roomId": room_id})
        reply = socket.receive_json()

    assert reply["event"] == "error"


def test_invalid_json_gets_error_event(client, accounts, student_headers) -> None:
    with client.websocket_connect(f"/api/ws?token={_token(student_headers)}") as socket:
        socket.send_text("{not json")
        reply = socket.receive_json()

    assert reply == {"event": "error", "data": {"message": "Invalid JSON"}}


def test_rest_notification_is_pushed_to_recipient(client, accounts, student_headers, teacher_headers) -> None:
    with client.websocket_connect(f"/api/ws?token={_token(student_headers)}") as socket:
        response = client.post(
            "/api/notifications/",
            json={
                "title": "Quiz",
                "message": "Tomorrow",
                "recipientType": "specific",
                "recipients": [accounts.student.id],
            },
            headers=teacher_headers,
        )
        assert response.status_code == 201
        pushed = socket.receive_json()

    assert pushed["event"] == "new-notification"
    assert pushed["data"]["title"] == "Quiz"


def test_foreign_push_rooms_are_refused(client, accounts, student_headers) -> None:
    with client.websocket_connect(f"/api/ws?token={_token(student_headers)}") as socket:
        replies = []
        for room_id in ("role-admin", f"user-{accounts.teacher.id}", "role-student"):
            socket.send_json({"event": "join-room", "roomId": room_id})
            replies.append(socket.receive_json())
        socket.send_json({"event": "typing", "roomId": f"user-{accounts.teacher.id}", "isTyping": True})
        typing = socket.receive_json()

    assert [reply["event"] for reply in replies] == ["error", "error", "room-joined"]
    assert replies[0]["data"]["message"] == "Chat room not found"
    assert typing["event"] == "error"
