"""Persistence helpers for events and event registrations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Event, EventRegistration
from app.infrastructure.models import EventModel, EventRegistrationModel, UserModel
from app.utils import PageRequest, PageResult, paginate

_EVENT_FIELDS = (
    "title",
    "description",
    "event_type",
    "start_at",
    "end_at",
    "location",
    "organizer_id",
    "max_participants",
    "registration_deadline",
    "is_public",
    "requires_registration",
    "registration_fee",
    "status",
    "image_url",
)


class EventRepository:
    """Provide CRUD operations for events and their registrations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: int) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model, self._registered_count(event_id)) if model else None

    def search(
        self,
        page: PageRequest,
        *,
        event_type: str | None = None,
        status: str | None = None,
        starting_after: datetime | None = None,
    ) -> PageResult[Event]:
        query = self.session.query(EventModel)
        if event_type:
            query = query.filter(EventModel.event_type == event_type)
        if status:
            query = query.filter(EventModel.status == status)
        if starting_after is not None:
            query = query.filter(EventModel.start_at >= starting_after)
        query = query.order_by(EventModel.start_at)
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model, self._registered_count(model.id)) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def create(self, event: Event) -> Event:
        model = EventModel()
        self._apply_entity_to_model(model, event)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, 0)

    def update(self, event: Event) -> Event:
        model = self.session.get(EventModel, event.id)
        if model is None:
            msg = f"Event with id {event.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, event)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, self._registered_count(model.id))

    def delete(self, event_id: int) -> None:
        model = self.session.get(EventModel, event_id)
        if model is None:
            msg = f"Event with id {event_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def get_registration(self, registration_id: int) -> EventRegistration | None:
        model = self.session.get(EventRegistrationModel, registration_id)
        return self._registration_to_entity(model) if model else None

    def get_active_registration(self, event_id: int, student_id: int) -> EventRegistration | None:
        model = (
            self.session.query(EventRegistrationModel)
            .filter_by(event_id=event_id, student_id=student_id)
            .filter(EventRegistrationModel.status != "cancelled")
            .first()
        )
        return self._registration_to_entity(model) if model else None

    def list_registrations(self, event_id: int) -> list[EventRegistration]:
        query = (
            self.session.query(EventRegistrationModel, UserModel)
            .join(UserModel, UserModel.id == EventRegistrationModel.student_id)
            .filter(EventRegistrationModel.event_id == event_id)
            .order_by(EventRegistrationModel.registered_at)
        )
        registrations = []
        for model, student in query.all():
            registration = self._registration_to_entity(model)
            registration.student_name = f"{student.first_name} {student.last_name}"
            registrations.append(registration)
        return registrations

    def add_registration(self, registration: EventRegistration) -> EventRegistration:
        model = EventRegistrationModel(
            event_id=registration.event_id,
            student_id=registration.student_id,
            status=registration.status,
            payment_status=registration.payment_status,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._registration_to_entity(model)

    def set_registration_status(self, registration_id: int, status: str) -> EventRegistration:
        model = self.session.get(EventRegistrationModel, registration_id)
        if model is None:
            msg = f"Registration with id {registration_id} not found"
            raise ValueError(msg)
        model.status = status
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._registration_to_entity(model)

    def _registered_count(self, event_id: int) -> int:
        return (
            self.session.query(func.count(EventRegistrationModel.id))
            .filter(EventRegistrationModel.event_id == event_id)
            .filter(EventRegistrationModel.status != "cancelled")
            .scalar()
            or 0
        )

    @staticmethod
    def _apply_entity_to_model(model: EventModel, event: Event) -> None:
        for name in _EVENT_FIELDS:
            setattr(model, name, getattr(event, name))
        model.tags = list(event.tags)

    @staticmethod
    def _to_entity(model: EventModel, registered_count: int) -> Event:
        return Event(
            id=model.id,
            **{name: getattr(model, name) for name in _EVENT_FIELDS},
            tags=list(model.tags or []),
            registered_count=registered_count,
            created_at=model.created_at,
        )

    @staticmethod
    def _registration_to_entity(model: EventRegistrationModel) -> EventRegistration:
        return EventRegistration(
            id=model.id,
            event_id=model.event_id,
            student_id=model.student_id,
            status=model.status,
            payment_status=model.payment_status,
            registered_at=model.registered_at,
        )


__all__ = ["EventRepository"]
