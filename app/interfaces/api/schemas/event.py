"""Schemas for events, registrations and clubs."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from .base import APIModel

_EVENT_TYPES = "^(academic|cultural|sports|technical|workshop|seminar|other)$"
_EVENT_STATUSES = "^(upcoming|ongoing|completed|cancelled)$"


class EventCreate(APIModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    event_type: str = Field(..., alias="type", pattern=_EVENT_TYPES)
    start_at: dt.datetime = Field(..., alias="startDate")
    end_at: dt.datetime = Field(..., alias="endDate")
    location: str = Field(..., min_length=1)
    max_participants: int | None = Field(default=None, ge=1)
    registration_deadline: dt.datetime | None = None
    is_public: bool = True
    requires_registration: bool = False
    registration_fee: float = Field(default=0, ge=0)
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)


class EventUpdate(APIModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    event_type: str | None = Field(default=None, alias="type", pattern=_EVENT_TYPES)
    start_at: dt.datetime | None = Field(default=None, alias="startDate")
    end_at: dt.datetime | None = Field(default=None, alias="endDate")
    location: str | None = None
    max_participants: int | None = Field(default=None, ge=1)
    registration_deadline: dt.datetime | None = None
    is_public: bool | None = None
    requires_registration: bool | None = None
    registration_fee: float | None = Field(default=None, ge=0)
    status: str | None = Field(default=None, pattern=_EVENT_STATUSES)
    image_url: str | None = None
    tags: list[str] | None = None


class EventRead(APIModel):
    id: int
    title: str
    description: str
    event_type: str = Field(..., serialization_alias="type")
    start_at: dt.datetime = Field(..., serialization_alias="startDate")
    end_at: dt.datetime = Field(..., serialization_alias="endDate")
    location: str
    organizer_id: int
    max_participants: int | None = None
    registration_deadline: dt.datetime | None = None
    is_public: bool
    requires_registration: bool
    registration_fee: float
    status: str
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    registered_count: int = 0
    created_at: dt.datetime | None = None


class RegistrationRead(APIModel):
    id: int
    event_id: int
    student_id: int
    student_name: str | None = None
    status: str
    payment_status: str
    registered_at: dt.datetime | None = None


class ClubCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1)
    category: str = Field(..., pattern="^(academic|cultural|sports|technical|social|other)$")
    president_id: int | None = None
    faculty_advisor_id: int | None = None
    established_on: dt.date | None = Field(default=None, alias="establishedDate")
    logo_url: str | None = None


class ClubRead(APIModel):
    id: int
    name: str
    description: str
    category: str
    president_id: int | None = None
    faculty_advisor_id: int | None = None
    established_on: dt.date | None = Field(default=None, serialization_alias="establishedDate")
    is_active: bool
    logo_url: str | None = None
    member_count: int = 0
    created_at: dt.datetime | None = None


class MembershipRead(APIModel):
    id: int
    club_id: int
    student_id: int
    student_name: str | None = None
    position: str
    status: str
    joined_at: dt.datetime | None = None
    left_at: dt.datetime | None = None


__all__ = [
    "ClubCreate",
    "ClubRead",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "MembershipRead",
    "RegistrationRead",
]
