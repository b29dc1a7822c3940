"""Use cases for chat rooms and messages."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    MESSAGE_TYPES,
    ChatMessage,
    ChatRoom,
    RoomParticipant,
    RoomSummary,
    User,
    class_room_id,
    direct_room_id,
)
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.realtime import RealtimePublisher, serialize_chat_message
from app.infrastructure.repositories import ChatRepository, UserRepository
from app.utils import PageRequest, PageResult, now_in_app_naive_datetime

DIRECT_PREFIX = "direct-"
CLASS_PREFIX = "class-"
MAX_MESSAGE_LENGTH = 5000


def _room_kind(room_id: str) -> str:
    if room_id.startswith(DIRECT_PREFIX):
        return "direct"
    if room_id.startswith(CLASS_PREFIX):
        return "class"
    return "group"


def _direct_participants(room_id: str) -> tuple[int, int] | None:
    parts = room_id[len(DIRECT_PREFIX):].split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return None
    return int(parts[0]), int(parts[1])


def ensure_room_access(room_id: str, user_id: int) -> None:
    """Direct rooms are private to the two users encoded in their id."""

    if not room_id or not room_id.strip():
        raise DomainError("Room ID is required")
    if _room_kind(room_id) != "direct":
        return
    participants = _direct_participants(room_id)
    if participants is None or user_id not in participants:
        raise NotFoundError("Chat room not found")
    first, second = participants
    if first == second or room_id != direct_room_id(first, second):
        raise NotFoundError("Chat room not found")


def send_message(
    session: Session,
    *,
    sender: User,
    room_id: str,
    body: str,
    message_type: str = "text",
    metadata: dict[str, Any] | None = None,
    publisher: RealtimePublisher | None = None,
) -> ChatMessage:
    """Persist a message, add the sender to the room and push ``new-message``."""

    ensure_room_access(room_id, sender.id)
    text = (body or "").strip()
    if not text:
        raise DomainError("Message cannot be empty")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise DomainError(f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters")
    if message_type not in MESSAGE_TYPES:
        raise DomainError(f"Invalid message type: {message_type}")

    repository = ChatRepository(session)
    repository.ensure_room(
        room_id, kind=_room_kind(room_id), created_by=sender.id, member_ids=(sender.id,)
    )
    message = repository.create_message(
        ChatMessage(
            id=None,
            room_id=room_id,
            sender_id=sender.id,
            body=text,
            message_type=message_type,
            payload=dict(metadata or {}),
        )
    )
    if publisher is not None:
        publisher.to_room(room_id, "new-message", serialize_chat_message(message))
    return message


def _get_own_message(repository: ChatRepository, message_id: int, user_id: int) -> ChatMessage:
    message = repository.get_message(message_id)
    if message is None or message.is_deleted or message.sender_id != user_id:
        raise NotFoundError("Message not found or unauthorized")
    return message


def delete_message(
    session: Session,
    message_id: int,
    *,
    user_id: int,
    publisher: RealtimePublisher | None = None,
) -> None:
    """Soft delete a message; only its author may do so."""

    repository = ChatRepository(session)
    message = _get_own_message(repository, message_id, user_id)
    repository.update_message(
        replace(message, is_deleted=True, deleted_at=now_in_app_naive_datetime())
    )
    if publisher is not None:
        publisher.to_room(
            message.room_id,
            "message-deleted",
            {"messageId": message.id, "roomId": message.room_id},
        )


def edit_message(
    session: Session,
    message_id: int,
    *,
    user_id: int,
    body: str,
    publisher: RealtimePublisher | None = None,
) -> ChatMessage:
    text = (body or "").strip()
    if not text:
        raise DomainError("Message cannot be empty")
    repository = ChatRepository(session)
    message = _get_own_message(repository, message_id, user_id)
    updated = repository.update_message(
        replace(message, body=text, is_edited=True, edited_at=now_in_app_naive_datetime())
    )
    if publisher is not None:
        publisher.to_room(updated.room_id, "message-edited", serialize_chat_message(updated))
    return updated


def get_room_messages(
    session: Session, room_id: str, *, user_id: int, page: PageRequest
) -> PageResult[ChatMessage]:
    """Return one page of the room history, oldest message first."""

    ensure_room_access(room_id, user_id)
    return ChatRepository(session).list_messages(room_id, page)


def get_recent_messages(
    session: Session, room_id: str, *, user_id: int, limit: int = 20
) -> list[ChatMessage]:
    return get_room_messages(
        session, room_id, user_id=user_id, page=PageRequest(page=1, limit=limit)
    ).items


def get_room_participants(
    session: Session, room_id: str, *, user_id: int
) -> list[RoomParticipant]:
    ensure_room_access(room_id, user_id)
    return ChatRepository(session).list_participants(room_id)


def join_room(session: Session, room_id: str, *, user_id: int) -> ChatRoom:
    """Record explicit membership, creating the room on first use."""

    ensure_room_access(room_id, user_id)
    return ChatRepository(session).ensure_room(
        room_id, kind=_room_kind(room_id), created_by=user_id, member_ids=(user_id,)
    )


def list_user_rooms(session: Session, *, user_id: int) -> list[RoomSummary]:
    return ChatRepository(session).list_rooms_for_user(user_id)


def get_direct_room(session: Session, *, user_id: int, other_user_id: int) -> ChatRoom:
    """Return the room shared by two users; calling it again yields the same room."""

    if other_user_id == user_id:
        raise DomainError("Cannot open a direct chat with yourself")
    if UserRepository(session).get(other_user_id) is None:
        raise NotFoundError("User not found")
    return ChatRepository(session).ensure_room(
        direct_room_id(user_id, other_user_id),
        kind="direct",
        created_by=user_id,
        member_ids=(user_id, other_user_id),
    )


def create_class_room(
    session: Session, *, user_id: int, class_id: str, name: str | None = None
) -> ChatRoom:
    if not class_id or not class_id.strip():
        raise DomainError("Class ID is required")
    return ChatRepository(session).ensure_room(
        class_room_id(class_id.strip()),
        kind="class",
        name=name or f"Class {class_id.strip()}",
        created_by=user_id,
        member_ids=(user_id,),
    )


def get_chat_stats(session: Session, *, user_id: int) -> dict[str, object]:
    return ChatRepository(session).stats_for_user(user_id)


__all__ = [
    "create_class_room",
    "delete_message",
    "edit_message",
    "ensure_room_access",
    "get_chat_stats",
    "get_direct_room",
    "get_recent_messages",
    "get_room_messages",
    "get_room_participants",
    "join_room",
    "list_user_rooms",
    "send_message",
]
