"""Endpoints for campus events, registrations and clubs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases import events
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_user,
    get_page_request,
    require_staff,
    require_student,
)
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    ClubCreate,
    ClubRead,
    EventCreate,
    EventRead,
    EventUpdate,
    MembershipRead,
    Page,
    RegistrationRead,
    page_of,
)
from app.utils import PageRequest

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/events", response_model=Page[EventRead])
def list_events(
    event_type: str | None = Query(default=None, alias="type"),
    status_filter: str | None = Query(default=None, alias="status"),
    upcoming: bool = False,
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> Page[EventRead]:
    result = events.list_events(
        db, page=page, event_type=event_type, status=status_filter, upcoming=upcoming
    )
    return page_of(EventRead, result)


@router.get("/events/{event_id}", response_model=EventRead)
def read_event(
    event_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> EventRead:
    try:
        event = events.get_event(db, event_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.post("/events", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> EventRead:
    try:
        event = events.create_event(db, organizer=current_user, values=payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.put("/events/{event_id}", response_model=EventRead)
def update_event(
    event_id: int,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> EventRead:
    try:
        event = events.update_event(
            db, event_id, user=current_user, changes=payload.model_dump(exclude_unset=True)
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
) -> Response:
    try:
        events.delete_event(db, event_id, user=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/events/{event_id}/register",
    response_model=RegistrationRead,
    status_code=status.HTTP_201_CREATED,
)
def register_for_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> RegistrationRead:
    try:
        registration = events.register_for_event(db, event_id, student_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RegistrationRead.model_validate(registration)


@router.put("/registrations/{registration_id}/cancel", response_model=RegistrationRead)
def cancel_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> RegistrationRead:
    try:
        registration = events.cancel_registration(
            db, registration_id, student_id=current_user.id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RegistrationRead.model_validate(registration)


@router.get("/events/{event_id}/registrations", response_model=list[RegistrationRead])
def list_registrations(
    event_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
) -> list[RegistrationRead]:
    try:
        registrations = events.list_event_registrations(db, event_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [RegistrationRead.model_validate(item) for item in registrations]


@router.get("/clubs", response_model=list[ClubRead])
def list_clubs(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[ClubRead]:
    return [ClubRead.model_validate(club) for club in events.list_clubs(db)]


@router.post("/clubs", response_model=ClubRead, status_code=status.HTTP_201_CREATED)
def create_club(
    payload: ClubCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
) -> ClubRead:
    try:
        club = events.create_club(db, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ClubRead.model_validate(club)


@router.post(
    "/clubs/{club_id}/join",
    response_model=MembershipRead,
    status_code=status.HTTP_201_CREATED,
)
def join_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> MembershipRead:
    try:
        membership = events.join_club(db, club_id, student_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return MembershipRead.model_validate(membership)


@router.put("/memberships/{membership_id}/leave", response_model=MembershipRead)
def leave_club(
    membership_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> MembershipRead:
    try:
        membership = events.leave_club(db, membership_id, student_id=current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return MembershipRead.model_validate(membership)


@router.get("/clubs/{club_id}/members", response_model=list[MembershipRead])
def list_members(
    club_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[MembershipRead]:
    try:
        members = events.list_club_members(db, club_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [MembershipRead.model_validate(member) for member in members]
