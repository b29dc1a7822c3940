"""SQLAlchemy models for chat rooms, their members and messages."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ChatRoomModel(Base):
    __tablename__ = "chat_room"

    id = Column(String(100), primary_key=True)
    kind = Column(String(10), nullable=False, default="group")
    name = Column(String(200), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    last_message_at = Column(DateTime, nullable=True, index=True)


class ChatRoomMemberModel(Base):
    __tablename__ = "chat_room_member"

    room_id = Column(String(100), ForeignKey("chat_room.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True)
    joined_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", lazy="joined")


class ChatMessageModel(Base):
    __tablename__ = "chat_message"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(String(100), ForeignKey("chat_room.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    body = Column(Text, nullable=False)
    message_type = Column(String(10), nullable=False, default="text")
    payload = Column(JSON, nullable=False, default=dict)
    is_edited = Column(Boolean, nullable=False, default=False)
    edited_at = Column(DateTime, nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime, index=True)

    sender = relationship("UserModel", lazy="joined")


__all__ = ["ChatMessageModel", "ChatRoomMemberModel", "ChatRoomModel"]
