"""Websocket channel for chat traffic and pushed events."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status
from starlette.concurrency import run_in_threadpool

from app.application.use_cases import chat
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import SessionLocal
from app.infrastructure.realtime import (
    RealtimeHub,
    RealtimePublisher,
    role_room,
    serialize_chat_message,
    user_room,
)
from app.interfaces.api.dependencies import resolve_current_user

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


def _token_from(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    header = websocket.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def _authenticate(token: str) -> User:
    session = SessionLocal()
    try:
        return resolve_current_user(token, session)
    finally:
        session.close()


def _persist_message(sender: User, message: dict[str, Any]) -> dict[str, Any]:
    session = SessionLocal()
    try:
        stored = chat.send_message(
            session,
            sender=sender,
            room_id=str(message.get("roomId") or ""),
            body=str(message.get("message") or ""),
            message_type=str(message.get("type") or "text"),
            metadata=message.get("metadata") if isinstance(message.get("metadata"), dict) else None,
        )
    finally:
        session.close()
    return serialize_chat_message(stored)


async def _error(websocket: WebSocket, detail: str) -> None:
    await websocket.send_json({"event": "error", "data": {"message": detail}})


def _push_room_allowed(user: User, room_id: str) -> bool:
    """Personal and role push rooms only admit the socket they belong to."""

    if room_id.startswith("user-"):
        return room_id == user_room(user.id)
    if room_id.startswith("role-"):
        return room_id == role_room(user.role.value)
    return True


async def _handle(hub: RealtimeHub, websocket: WebSocket, user: User, message: dict) -> None:
    event = message.get("event")
    room_id = message.get("roomId")

    if event == "ping":
        await websocket.send_json({"event": "pong", "data": {}})
        return

    if event in ("join-room", "leave-room", "typing", "send-message"):
        if not isinstance(room_id, str) or not room_id.strip():
            await _error(websocket, "Room ID is required")
            return
        try:
            chat.ensure_room_access(room_id, user.id)
        except DomainError as exc:
            await _error(websocket, str(exc))
            return
        if not _push_room_allowed(user, room_id):
            await _error(websocket, "Chat room not found")
            return

    if event == "join-room":
        hub.join(websocket, room_id)
        await websocket.send_json({"event": "room-joined", "data": {"roomId": room_id}})
    elif event == "leave-room":
        hub.leave(websocket, room_id)
        await websocket.send_json({"event": "room-left", "data": {"roomId": room_id}})
    elif event == "typing":
        await hub.send_to_room(
            room_id,
            {
                "event": "user-typing",
                "data": {
                    "userId": user.id,
                    "userName": user.profile.full_name,
                    "roomId": room_id,
                    "isTyping": bool(message.get("isTyping")),
                },
            },
            exclude=websocket,
        )
    elif event == "send-message":
        try:
            payload = await run_in_threadpool(_persist_message, user, message)
        except DomainError as exc:
            await _error(websocket, str(exc))
            return
        await hub.send_to_room(room_id, {"event": "new-message", "data": payload})
    else:
        await _error(websocket, f"Unknown event: {event}")


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Authenticate at handshake, then relay room and chat events."""

    token = _token_from(websocket)
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    try:
        user = await run_in_threadpool(_authenticate, token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    publisher: RealtimePublisher = websocket.app.state.realtime
    hub = publisher.hub
    await hub.connect(websocket, user_id=user.id, role=user.role.value)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                await _error(websocket, "Invalid JSON")
                continue
            if not isinstance(message, dict):
                await _error(websocket, "Messages must be JSON objects")
                continue
            await _handle(hub, websocket, user, message)
    except WebSocketDisconnect:
        logger.debug("Websocket for user %s disconnected", user.id)
    finally:
        hub.disconnect(websocket)
