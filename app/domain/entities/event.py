"""Domain entities for events, registrations, clubs and memberships."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class Event:
    id: int | None
    title: str
    description: str
    event_type: str
    start_at: datetime
    end_at: datetime
    location: str
    organizer_id: int
    max_participants: int | None = None
    registration_deadline: datetime | None = None
    is_public: bool = True
    requires_registration: bool = False
    registration_fee: float = 0.0
    status: str = "upcoming"
    image_url: str | None = None
    tags: list[str] = field(default_factory=list)
    registered_count: int = 0
    created_at: datetime | None = None


@dataclass
class EventRegistration:
    id: int | None
    event_id: int
    student_id: int
    status: str = "registered"
    payment_status: str = "not_required"
    registered_at: datetime | None = None
    student_name: str | None = None


@dataclass
class Club:
    id: int | None
    name: str
    description: str
    category: str
    president_id: int | None = None
    faculty_advisor_id: int | None = None
    established_on: date | None = None
    is_active: bool = True
    logo_url: str | None = None
    member_count: int = 0
    created_at: datetime | None = None


@dataclass
class ClubMembership:
    id: int | None
    club_id: int
    student_id: int
    position: str = "member"
    status: str = "active"
    joined_at: datetime | None = None
    left_at: datetime | None = None
    student_name: str | None = None


__all__ = ["Club", "ClubMembership", "Event", "EventRegistration"]
