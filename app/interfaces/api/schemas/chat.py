"""Chat schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import APIModel


class MessageCreate(APIModel):
    room_id: str = Field(..., min_length=1, max_length=120)
    message: str
    type: str = Field(default="text", pattern="^(text|file|image|system)$")
    metadata: dict[str, Any] | None = None


class MessageUpdate(APIModel):
    message: str


class ChatMessageRead(APIModel):
    id: int
    room_id: str
    sender_id: int
    sender_name: str | None = None
    sender_role: str | None = None
    body: str = Field(..., serialization_alias="message")
    message_type: str = Field(..., serialization_alias="type")
    payload: dict[str, Any] = Field(default_factory=dict, serialization_alias="metadata")
    is_edited: bool
    edited_at: datetime | None = None
    created_at: datetime | None = None


class RoomRead(APIModel):
    id: str
    kind: str
    name: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    last_message_at: datetime | None = None


class RoomSummaryRead(APIModel):
    room: RoomRead
    last_message: ChatMessageRead | None = None
    member_count: int


class ParticipantRead(APIModel):
    user_id: int
    name: str
    role: str
    avatar: str | None = None
    joined_at: datetime | None = None


class ChatStatsRead(APIModel):
    total_messages: int
    total_rooms: int
    messages_by_type: dict[str, int]


__all__ = [
    "ChatMessageRead",
    "ChatStatsRead",
    "MessageCreate",
    "MessageUpdate",
    "ParticipantRead",
    "RoomRead",
    "RoomSummaryRead",
]
