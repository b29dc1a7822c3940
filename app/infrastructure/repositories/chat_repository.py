"""Persistence helpers for chat rooms, explicit room membership and messages."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import ChatMessage, ChatRoom, RoomParticipant, RoomSummary
from app.infrastructure.models import (
    ChatMessageModel,
    ChatRoomMemberModel,
    ChatRoomModel,
)
from app.utils import PageRequest, PageResult, now_in_app_naive_datetime, paginate


class ChatRepository:
    """Store rooms, their members and the messages posted in them."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def ensure_room(
        self,
        room_id: str,
        *,
        kind: str,
        name: str | None = None,
        created_by: int | None = None,
        member_ids: tuple[int, ...] = (),
    ) -> ChatRoom:
        """Return the room identified by ``room_id``, creating it on first use."""

        model = self.session.get(ChatRoomModel, room_id)
        if model is None:
            model = ChatRoomModel(id=room_id, kind=kind, name=name, created_by=created_by)
            self.session.add(model)
            try:
                self.session.flush()
            except IntegrityError:
                # Another request created the room first; reuse it.
                self.session.rollback()
                model = self.session.get(ChatRoomModel, room_id)
        for user_id in dict.fromkeys(member_ids):
            self._stage_member(room_id, user_id)
        self.session.commit()
        self.session.refresh(model)
        return self._room_to_entity(model)

    def list_participants(self, room_id: str) -> list[RoomParticipant]:
        query = (
            self.session.query(ChatRoomMemberModel)
            .filter(ChatRoomMemberModel.room_id == room_id)
            .order_by(ChatRoomMemberModel.joined_at)
        )
        return [
            RoomParticipant(
                user_id=member.user_id,
                name=f"{member.user.first_name} {member.user.last_name}",
                role=member.user.role,
                avatar=member.user.avatar,
                joined_at=member.joined_at,
            )
            for member in query.all()
        ]

    def create_message(self, message: ChatMessage) -> ChatMessage:
        """Persist ``message``, record the sender as a member and bump room activity."""

        room = self.session.get(ChatRoomModel, message.room_id)
        if room is None:
            msg = f"Chat room {message.room_id} not found"
            raise ValueError(msg)
        model = ChatMessageModel(
            room_id=message.room_id,
            sender_id=message.sender_id,
            body=message.body,
            message_type=message.message_type,
            payload=message.payload or {},
        )
        self.session.add(model)
        self._stage_member(message.room_id, message.sender_id)
        room.last_message_at = now_in_app_naive_datetime()
        self.session.commit()
        self.session.refresh(model)
        return self._message_to_entity(model)

    def get_message(self, message_id: int) -> ChatMessage | None:
        model = self.session.get(ChatMessageModel, message_id)
        return self._message_to_entity(model) if model else None

    def update_message(self, message: ChatMessage) -> ChatMessage:
        model = self.session.get(ChatMessageModel, message.id)
        if model is None:
            msg = f"Message with id {message.id} not found"
            raise ValueError(msg)
        model.body = message.body
        model.is_edited = message.is_edited
        model.edited_at = message.edited_at
        model.is_deleted = message.is_deleted
        model.deleted_at = message.deleted_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._message_to_entity(model)

    def list_messages(self, room_id: str, page: PageRequest) -> PageResult[ChatMessage]:
        """Return one page counted back from the newest message, oldest first."""

        query = (
            self.session.query(ChatMessageModel)
            .filter(ChatMessageModel.room_id == room_id)
            .filter(ChatMessageModel.is_deleted.is_(False))
            .order_by(ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc())
        )
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._message_to_entity(model) for model in reversed(rows)],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def list_rooms_for_user(self, user_id: int) -> list[RoomSummary]:
        member_counts = (
            self.session.query(
                ChatRoomMemberModel.room_id, func.count(ChatRoomMemberModel.user_id).label("members")
            )
            .group_by(ChatRoomMemberModel.room_id)
            .subquery()
        )
        query = (
            self.session.query(ChatRoomModel, member_counts.c.members)
            .join(ChatRoomMemberModel, ChatRoomMemberModel.room_id == ChatRoomModel.id)
            .join(member_counts, member_counts.c.room_id == ChatRoomModel.id)
            .filter(ChatRoomMemberModel.user_id == user_id)
        )
        summaries = []
        for room, members in query.all():
            last = (
                self.session.query(ChatMessageModel)
                .filter(ChatMessageModel.room_id == room.id)
                .filter(ChatMessageModel.is_deleted.is_(False))
                .order_by(ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc())
                .first()
            )
            summaries.append(
                RoomSummary(
                    room=self._room_to_entity(room),
                    last_message=self._message_to_entity(last) if last else None,
                    member_count=members,
                )
            )
        summaries.sort(
            key=lambda summary: summary.room.last_message_at or summary.room.created_at,
            reverse=True,
        )
        return summaries

    def stats_for_user(self, user_id: int) -> dict[str, object]:
        base = (
            self.session.query(ChatMessageModel)
            .filter(ChatMessageModel.sender_id == user_id)
            .filter(ChatMessageModel.is_deleted.is_(False))
        )
        by_type = dict(
            base.with_entities(ChatMessageModel.message_type, func.count(ChatMessageModel.id))
            .group_by(ChatMessageModel.message_type)
            .all()
        )
        total_rooms = (
            self.session.query(func.count(ChatRoomMemberModel.room_id))
            .filter(ChatRoomMemberModel.user_id == user_id)
            .scalar()
            or 0
        )
        return {
            "total_messages": sum(by_type.values()),
            "total_rooms": total_rooms,
            "messages_by_type": by_type,
        }

    def _stage_member(self, room_id: str, user_id: int) -> None:
        if self.session.get(ChatRoomMemberModel, (room_id, user_id)) is None:
            self.session.add(ChatRoomMemberModel(room_id=room_id, user_id=user_id))

    @staticmethod
    def _room_to_entity(model: ChatRoomModel) -> ChatRoom:
        return ChatRoom(
            id=model.id,
            kind=model.kind,
            name=model.name,
            created_by=model.created_by,
            created_at=model.created_at,
            last_message_at=model.last_message_at,
        )

    @staticmethod
    def _message_to_entity(model: ChatMessageModel) -> ChatMessage:
        sender = model.sender
        return ChatMessage(
            id=model.id,
            room_id=model.room_id,
            sender_id=model.sender_id,
            body=model.body,
            message_type=model.message_type,
            payload=model.payload or {},
            is_edited=model.is_edited,
            edited_at=model.edited_at,
            is_deleted=model.is_deleted,
            deleted_at=model.deleted_at,
            created_at=model.created_at,
            sender_name=f"{sender.first_name} {sender.last_name}" if sender else None,
            sender_role=sender.role if sender else None,
        )


__all__ = ["ChatRepository"]
