"""Use cases for campus events, registrations, clubs and memberships."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    Club,
    ClubMembership,
    Event,
    EventRegistration,
    User,
    UserRole,
)
from app.domain.errors import ConflictError, DomainError, NotFoundError
from app.infrastructure.repositories import ClubRepository, EventRepository, UserRepository
from app.utils import (
    PageRequest,
    PageResult,
    ensure_app_naive_datetime,
    now_in_app_naive_datetime,
)

_DATETIME_FIELDS = ("start_at", "end_at", "registration_deadline")


def _normalize_datetimes(values: dict[str, Any]) -> dict[str, Any]:
    for name in _DATETIME_FIELDS:
        if isinstance(values.get(name), datetime):
            values[name] = ensure_app_naive_datetime(values[name])
    return values


def _validate_schedule(event: Event) -> None:
    if event.end_at < event.start_at:
        raise DomainError("Event end must not precede its start")
    if event.max_participants is not None and event.max_participants < 1:
        raise DomainError("Maximum participants must be at least 1")


def list_events(
    session: Session,
    *,
    page: PageRequest,
    event_type: str | None = None,
    status: str | None = None,
    upcoming: bool = False,
    reference: datetime | None = None,
) -> PageResult[Event]:
    starting_after = None
    if upcoming:
        starting_after = ensure_app_naive_datetime(reference) or now_in_app_naive_datetime()
    return EventRepository(session).search(
        page, event_type=event_type, status=status, starting_after=starting_after
    )


def get_event(session: Session, event_id: int) -> Event:
    event = EventRepository(session).get(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def create_event(session: Session, *, organizer: User, values: dict[str, Any]) -> Event:
    event = Event(id=None, organizer_id=organizer.id, **_normalize_datetimes(dict(values)))
    _validate_schedule(event)
    return EventRepository(session).create(event)


def _get_managed_event(session: Session, event_id: int, user: User) -> Event:
    event = get_event(session, event_id)
    if not user.is_admin() and event.organizer_id != user.id:
        raise NotFoundError("Event not found")
    return event


def update_event(
    session: Session, event_id: int, *, user: User, changes: dict[str, Any]
) -> Event:
    """Update an event; only its organizer or an admin may do so."""

    event = _get_managed_event(session, event_id, user)
    changes = _normalize_datetimes(dict(changes))
    changes.pop("organizer_id", None)
    updated = replace(event, **changes)
    _validate_schedule(updated)
    return EventRepository(session).update(updated)


def delete_event(session: Session, event_id: int, *, user: User) -> None:
    _get_managed_event(session, event_id, user)
    EventRepository(session).delete(event_id)


def register_for_event(
    session: Session,
    event_id: int,
    *,
    student_id: int,
    reference: datetime | None = None,
) -> EventRegistration:
    """Register a student, enforcing deadline, capacity and uniqueness."""

    repository = EventRepository(session)
    event = get_event(session, event_id)
    now = ensure_app_naive_datetime(reference) or now_in_app_naive_datetime()

    if not event.requires_registration:
        raise DomainError("This event does not require registration")
    if event.registration_deadline is not None and now > event.registration_deadline:
        raise DomainError("Registration deadline has passed")
    if event.max_participants is not None and event.registered_count >= event.max_participants:
        raise DomainError("Event is full")
    if repository.get_active_registration(event_id, student_id) is not None:
        raise ConflictError("Already registered for this event")

    registration = EventRegistration(
        id=None,
        event_id=event_id,
        student_id=student_id,
        payment_status="pending" if event.registration_fee > 0 else "not_required",
    )
    return repository.add_registration(registration)


def cancel_registration(
    session: Session, registration_id: int, *, student_id: int
) -> EventRegistration:
    repository = EventRepository(session)
    registration = repository.get_registration(registration_id)
    if registration is None or registration.student_id != student_id:
        raise NotFoundError("Registration not found")
    if registration.status == "cancelled":
        return registration
    return repository.set_registration_status(registration_id, "cancelled")


def list_event_registrations(session: Session, event_id: int) -> list[EventRegistration]:
    get_event(session, event_id)
    return EventRepository(session).list_registrations(event_id)


def list_clubs(session: Session) -> list[Club]:
    return ClubRepository(session).list_active()


def get_club(session: Session, club_id: int) -> Club:
    club = ClubRepository(session).get(club_id)
    if club is None or not club.is_active:
        raise NotFoundError("Club not found")
    return club


def create_club(
    session: Session,
    *,
    name: str,
    description: str,
    category: str,
    president_id: int | None = None,
    faculty_advisor_id: int | None = None,
    established_on: date | None = None,
    logo_url: str | None = None,
) -> Club:
    """Create a club; the president becomes its first member."""

    users = UserRepository(session)
    if president_id is not None:
        president = users.get(president_id)
        if president is None or president.role is not UserRole.STUDENT:
            raise DomainError("Club president must be a student")
    if faculty_advisor_id is not None:
        advisor = users.get(faculty_advisor_id)
        if advisor is None or advisor.role is not UserRole.TEACHER:
            raise DomainError("Faculty advisor must be a teacher")

    club = Club(
        id=None,
        name=name.strip(),
        description=description,
        category=category,
        president_id=president_id,
        faculty_advisor_id=faculty_advisor_id,
        established_on=established_on,
        logo_url=logo_url,
    )
    return ClubRepository(session).create(club)


def join_club(session: Session, club_id: int, *, student_id: int) -> ClubMembership:
    repository = ClubRepository(session)
    get_club(session, club_id)
    if repository.get_active_membership(club_id, student_id) is not None:
        raise ConflictError("Already a member of this club")
    return repository.add_membership(
        ClubMembership(id=None, club_id=club_id, student_id=student_id)
    )


def leave_club(session: Session, membership_id: int, *, student_id: int) -> ClubMembership:
    repository = ClubRepository(session)
    membership = repository.get_membership(membership_id)
    if membership is None or membership.student_id != student_id:
        raise NotFoundError("Membership not found")
    if membership.status != "active":
        return membership
    return repository.end_membership(membership_id)


def list_club_members(session: Session, club_id: int) -> list[ClubMembership]:
    get_club(session, club_id)
    return ClubRepository(session).list_members(club_id)


__all__ = [
    "cancel_registration",
    "create_club",
    "create_event",
    "delete_event",
    "get_club",
    "get_event",
    "join_club",
    "leave_club",
    "list_club_members",
    "list_clubs",
    "list_event_registrations",
    "list_events",
    "register_for_event",
    "update_event",
]
