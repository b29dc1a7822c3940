"""Fire-and-forget scheduling of realtime events from sync and async code."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable, Iterable

from anyio import from_thread

from .hub import RealtimeHub, role_room

logger = logging.getLogger(__name__)


class RealtimePublisher:
    """Wrap event payloads and schedule their delivery through a :class:`RealtimeHub`.

    Delivery is never awaited by the caller: from the event loop a task is
    created, from a worker thread the send is handed back to the loop. When
    neither is reachable the event is logged and dropped, clients recover
    through the history endpoints.
    """

    def __init__(self, hub: RealtimeHub) -> None:
        self._hub = hub
        self._tasks: set[asyncio.Task] = set()

    @property
    def hub(self) -> RealtimeHub:
        return self._hub

    def to_user(self, user_id: int | None, event_type: str, payload: Any) -> None:
        if not user_id:
            return
        self._schedule(self._hub.send_to_user, user_id, self._message(event_type, payload))

    def to_users(self, user_ids: Iterable[int | None], event_type: str, payload: Any) -> None:
        unique_ids = {user_id for user_id in user_ids if user_id}
        if not unique_ids:
            return
        self._schedule(self._hub.send_to_users, unique_ids, self._message(event_type, payload))

    def to_room(self, room: str, event_type: str, payload: Any) -> None:
        self._schedule(self._hub.send_to_room, room, self._message(event_type, payload))

    def to_roles(self, roles: Iterable[str], event_type: str, payload: Any) -> None:
        for role in dict.fromkeys(roles):
            self.to_room(role_room(role), event_type, payload)

    def broadcast(self, event_type: str, payload: Any) -> None:
        self._schedule(self._hub.broadcast, self._message(event_type, payload))

    @staticmethod
    def _message(event_type: str, payload: Any) -> dict[str, Any]:
        return {"event": event_type, "data": copy.deepcopy(payload)}

    def _schedule(self, send: Callable[..., Awaitable[None]], *args: Any) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, send, *args)
            except RuntimeError:
                logger.warning(
                    "No event loop reachable; realtime event %s dropped",
                    args[-1].get("event") if args and isinstance(args[-1], dict) else None,
                )
        else:
            self._spawn(send, *args)

    def _spawn(self, send: Callable[..., Awaitable[None]], *args: Any) -> None:
        task = asyncio.get_running_loop().create_task(send(*args))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


__all__ = ["RealtimePublisher"]
