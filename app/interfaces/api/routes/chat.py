"""Endpoints for chat rooms and messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases import chat
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import get_current_user, get_realtime, require_staff
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    ChatMessageRead,
    ChatStatsRead,
    MessageCreate,
    MessageUpdate,
    Page,
    ParticipantRead,
    RoomRead,
    RoomSummaryRead,
    page_of,
)
from app.utils import PageRequest

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/message", response_model=ChatMessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> ChatMessageRead:
    try:
        message = chat.send_message(
            db,
            sender=current_user,
            room_id=payload.room_id,
            body=payload.message,
            message_type=payload.type,
            metadata=payload.metadata,
            publisher=realtime,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ChatMessageRead.model_validate(message)


@router.get("/room/{room_id}/messages", response_model=Page[ChatMessageRead])
def room_messages(
    room_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Page[ChatMessageRead]:
    """Return a page of the room history in chronological order."""

    try:
        result = chat.get_room_messages(
            db, room_id, user_id=current_user.id, page=PageRequest(page=page, limit=limit)
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return page_of(ChatMessageRead, result)


@router.get("/room/{room_id}/recent", response_model=list[ChatMessageRead])
def recent_messages(
    room_id: str,
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ChatMessageRead]:
    try:
        messages = chat.get_recent_messages(db, room_id, user_id=current_user.id, limit=limit)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [ChatMessageRead.model_validate(message) for message in messages]


@router.delete("/message/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> Response:
    try:
        chat.delete_message(db, message_id, user_id=current_user.id, publisher=realtime)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/message/{message_id}", response_model=ChatMessageRead)
def edit_message(
    message_id: int,
    payload: MessageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> ChatMessageRead:
    try:
        message = chat.edit_message(
            db, message_id, user_id=current_user.id, body=payload.message, publisher=realtime
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ChatMessageRead.model_validate(message)


@router.get("/room/{room_id}/participants", response_model=list[ParticipantRead])
def room_participants(
    room_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ParticipantRead]:
    try:
        participants = chat.get_room_participants(db, room_id, user_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [ParticipantRead.model_validate(item) for item in participants]


@router.post("/room/{room_id}/join", response_model=RoomRead)
def join_room(
    room_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RoomRead:
    try:
        room = chat.join_room(db, room_id, user_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RoomRead.model_validate(room)


@router.get("/rooms", response_model=list[RoomSummaryRead])
def list_rooms(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RoomSummaryRead]:
    summaries = chat.list_user_rooms(db, user_id=current_user.id)
    return [RoomSummaryRead.model_validate(summary) for summary in summaries]


@router.get("/direct/{other_user_id}", response_model=RoomRead)
def direct_room(
    other_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RoomRead:
    try:
        room = chat.get_direct_room(db, user_id=current_user.id, other_user_id=other_user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RoomRead.model_validate(room)


@router.post("/class/{class_id}", response_model=RoomRead)
def class_room(
    class_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> RoomRead:
    try:
        room = chat.create_class_room(db, user_id=current_user.id, class_id=class_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RoomRead.model_validate(room)


@router.get("/stats", response_model=ChatStatsRead)
def chat_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatStatsRead:
    return ChatStatsRead.model_validate(chat.get_chat_stats(db, user_id=current_user.id))
