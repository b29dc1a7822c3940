"""Connection registry for the realtime websocket channel."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, DefaultDict, Iterable, Set

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


def user_room(user_id: int) -> str:
    return f"user-{user_id}"


def role_room(role: str) -> str:
    return f"role-{role}"


@dataclass(frozen=True)
class Connection:
    """Identity attached to an accepted websocket."""

    user_id: int
    role: str


class RealtimeHub:
    """Track active websockets grouped by user and by joined room.

    The maps live in process memory; each worker process delivers only to its
    own sockets.
    """

    def __init__(self) -> None:
        self._identities: dict[WebSocket, Connection] = {}
        self._users: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._rooms: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, websocket: WebSocket, *, user_id: int, role: str) -> None:
        """Accept ``websocket`` and join the personal and role rooms."""

        await websocket.accept()
        self._identities[websocket] = Connection(user_id=user_id, role=role)
        self._users[user_id].add(websocket)
        self.join(websocket, user_room(user_id))
        self.join(websocket, role_room(role))

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget ``websocket`` and remove it from every room."""

        identity = self._identities.pop(websocket, None)
        if identity is not None:
            self._discard(self._users, identity.user_id, websocket)
        for room in [room for room, sockets in self._rooms.items() if websocket in sockets]:
            self._discard(self._rooms, room, websocket)

    def join(self, websocket: WebSocket, room: str) -> None:
        self._rooms[room].add(websocket)

    def leave(self, websocket: WebSocket, room: str) -> None:
        self._discard(self._rooms, room, websocket)

    def identity(self, websocket: WebSocket) -> Connection | None:
        return self._identities.get(websocket)

    def is_online(self, user_id: int) -> bool:
        return bool(self._users.get(user_id))

    def online_user_ids(self) -> list[int]:
        return sorted(self._users)

    def room_size(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``user_id``."""

        await self._deliver(self._users.get(user_id, set()), message)

    async def send_to_users(self, user_ids: Iterable[int], message: dict[str, Any]) -> None:
        sockets: set[WebSocket] = set()
        for user_id in set(user_ids):
            sockets.update(self._users.get(user_id, set()))
        await self._deliver(sockets, message)

    async def send_to_room(
        self,
        room: str,
        message: dict[str, Any],
        *,
        exclude: WebSocket | None = None,
    ) -> None:
        sockets = set(self._rooms.get(room, set()))
        sockets.discard(exclude)
        await self._deliver(sockets, message)

    async def broadcast(self, message: dict[str, Any]) -> None:
        await self._deliver(set(self._identities), message)

    async def _deliver(self, sockets: Iterable[WebSocket], message: dict[str, Any]) -> None:
        for connection in list(sockets):
            try:
                await connection.send_json(message)
            except (RuntimeError, OSError, WebSocketDisconnect) as exc:
                logger.info("Dropping websocket after failed delivery: %s", exc)
                self.disconnect(connection)

    @staticmethod
    def _discard(index: dict, key: Any, websocket: WebSocket) -> None:
        sockets = index.get(key)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            index.pop(key, None)


__all__ = ["Connection", "RealtimeHub", "role_room", "user_room"]
