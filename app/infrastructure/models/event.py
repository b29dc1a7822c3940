"""SQLAlchemy models for campus events, clubs and their memberships."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class EventModel(Base):
    __tablename__ = "event"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    event_type = Column(String(20), nullable=False, index=True)
    start_at = Column(DateTime, nullable=False, index=True)
    end_at = Column(DateTime, nullable=False)
    location = Column(String(200), nullable=False)
    organizer_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    max_participants = Column(Integer, nullable=True)
    registration_deadline = Column(DateTime, nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    requires_registration = Column(Boolean, nullable=False, default=False)
    registration_fee = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default="upcoming", index=True)
    image_url = Column(String(500), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class EventRegistrationModel(Base):
    __tablename__ = "event_registration"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("event.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    registered_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    status = Column(String(20), nullable=False, default="registered")
    payment_status = Column(String(20), nullable=False, default="not_required")


class ClubModel(Base):
    __tablename__ = "club"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False)
    president_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    faculty_advisor_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    established_on = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    logo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class ClubMembershipModel(Base):
    __tablename__ = "club_membership"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(Integer, ForeignKey("club.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(String(30), nullable=False, default="member")
    joined_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    left_at = Column(DateTime, nullable=True)
    status = Column(String(10), nullable=False, default="active")


__all__ = [
    "ClubMembershipModel",
    "ClubModel",
    "EventModel",
    "EventRegistrationModel",
]
