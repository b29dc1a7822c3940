"""Realtime websocket helpers for the infrastructure layer."""

from .hub import Connection, RealtimeHub, role_room, user_room
from .publisher import RealtimePublisher
from .serializers import serialize_chat_message, serialize_notification

__all__ = [
    "Connection",
    "RealtimeHub",
    "RealtimePublisher",
    "role_room",
    "serialize_chat_message",
    "serialize_notification",
    "user_room",
]
