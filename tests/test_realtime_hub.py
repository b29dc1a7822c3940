"""Unit tests for the in-process websocket hub and publisher."""

from __future__ import annotations

import asyncio

from app.infrastructure.realtime import RealtimeHub, RealtimePublisher, role_room, user_room


class FakeWebSocket:
    def __init__(self, fail: bool = False) -> None:
        self.accepted = False
        self.sent: list[dict] = []
        self.fail = fail

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def test_connect_joins_personal_and_role_rooms() -> None:
    hub = RealtimeHub()
    socket = FakeWebSocket()

    asyncio.run(hub.connect(socket, user_id=7, role="student"))

    assert socket.accepted
    assert hub.is_online(7)
    assert hub.room_size(user_room(7)) == 1
    assert hub.room_size(role_room("student")) == 1


def test_room_delivery_excludes_sender_and_drops_dead_sockets() -> None:
    hub = RealtimeHub()
    sender, listener, dead = FakeWebSocket(), FakeWebSocket(), FakeWebSocket(fail=True)

    async def scenario() -> None:
        for user_id, socket in ((1, sender), (2, listener), (3, dead)):
            await hub.connect(socket, user_id=user_id, role="student")
            hub.join(socket, "group-general")
        await hub.send_to_room("group-general", {"event": "user-typing"}, exclude=sender)

    asyncio.run(scenario())

    assert sender.sent == []
    assert listener.sent == [{"event": "user-typing"}]
    assert not hub.is_online(3)
    assert hub.room_size("group-general") == 2


def test_disconnect_forgets_every_room() -> None:
    hub = RealtimeHub()
    socket = FakeWebSocket()

    async def scenario() -> None:
        await hub.connect(socket, user_id=4, role="teacher")
        hub.join(socket, "class-A")

    asyncio.run(scenario())
    hub.disconnect(socket)

    assert hub.online_user_ids() == []
    assert hub.room_size("class-A") == 0
    assert hub.room_size(role_room("teacher")) == 0


def test_publisher_wraps_and_copies_payload() -> None:
    hub = RealtimeHub()
    publisher = RealtimePublisher(hub)
    first, second = FakeWebSocket(), FakeWebSocket()
    payload = {"title": "Hello"}

    async def scenario() -> None:
        await hub.connect(first, user_id=1, role="student")
        await hub.connect(second, user_id=2, role="teacher")
        publisher.to_users([1, 2, 2, None], "new-notification", payload)
        payload["title"] = "Changed"
        await asyncio.sleep(0)
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert first.sent == [{"event": "new-notification", "data": {"title": "Hello"}}]
    assert second.sent == first.sent


def test_publisher_without_loop_drops_event() -> None:
    publisher = RealtimePublisher(RealtimeHub())

    publisher.broadcast("ping", {})
