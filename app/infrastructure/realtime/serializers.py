"""Websocket payload representations of domain entities."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from app.domain.entities import ChatMessage, Notification


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "priority": notification.priority,
        "category": notification.category,
        "senderId": notification.sender_id,
        "senderName": notification.sender_name,
        "actionUrl": notification.action_url,
        "payload": notification.payload or {},
        "createdAt": _isoformat(notification.created_at),
        "expiresAt": _isoformat(notification.expires_at),
        "isRead": notification.is_read,
    }


def serialize_chat_message(message: ChatMessage) -> dict[str, Any]:
    """Return the websocket payload representation for ``message``."""

    return {
        "id": message.id,
        "roomId": message.room_id,
        "senderId": message.sender_id,
        "senderName": message.sender_name,
        "senderRole": message.sender_role,
        "message": message.body,
        "type": message.message_type,
        "metadata": message.payload or {},
        "isEdited": message.is_edited,
        "editedAt": _isoformat(message.edited_at),
        "createdAt": _isoformat(message.created_at),
    }


__all__ = ["serialize_chat_message", "serialize_notification"]
