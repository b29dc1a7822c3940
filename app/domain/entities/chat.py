"""Domain entities for chat rooms and messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

MESSAGE_TYPES = ("text", "file", "image", "system")


def direct_room_id(first_user_id: int, second_user_id: int) -> str:
    """Return the room id shared by two users regardless of argument order."""

    low, high = sorted((int(first_user_id), int(second_user_id)))
    return f"direct-{low}-{high}"


def class_room_id(class_id: str) -> str:
    return f"class-{class_id}"


@dataclass
class ChatRoom:
    id: str
    kind: str
    name: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    last_message_at: datetime | None = None


@dataclass
class ChatMessage:
    id: int | None
    room_id: str
    sender_id: int
    body: str
    message_type: str = "text"
    payload: dict[str, Any] = field(default_factory=dict)
    is_edited: bool = False
    edited_at: datetime | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    sender_name: str | None = None
    sender_role: str | None = None


@dataclass
class RoomParticipant:
    user_id: int
    name: str
    role: str
    avatar: str | None = None
    joined_at: datetime | None = None


@dataclass
class RoomSummary:
    room: ChatRoom
    last_message: ChatMessage | None
    member_count: int


__all__ = [
    "ChatMessage",
    "ChatRoom",
    "MESSAGE_TYPES",
    "RoomParticipant",
    "RoomSummary",
    "class_room_id",
    "direct_room_id",
]
