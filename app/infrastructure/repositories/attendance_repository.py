"""Persistence helpers for attendance records."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import AttendanceRecord
from app.infrastructure.models import AttendanceModel


class AttendanceRepository:
    """Store one attendance mark per student, subject and day."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_many(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Insert or overwrite the marks in ``records`` within one commit."""

        models: list[AttendanceModel] = []
        for record in records:
            model = (
                self.session.query(AttendanceModel)
                .filter_by(
                    student_id=record.student_id,
                    subject_id=record.subject_id,
                    date=record.date,
                )
                .first()
            )
            if model is None:
                model = AttendanceModel(
                    student_id=record.student_id,
                    subject_id=record.subject_id,
                    date=record.date,
                )
                self.session.add(model)
            model.status = record.status
            model.marked_by = record.marked_by
            model.remarks = record.remarks
            models.append(model)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def list_for_subject(
        self,
        subject_id: int,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> list[AttendanceRecord]:
        query = self.session.query(AttendanceModel).filter(
            AttendanceModel.subject_id == subject_id
        )
        if start is not None:
            query = query.filter(AttendanceModel.date >= start)
        if end is not None:
            query = query.filter(AttendanceModel.date <= end)
        query = query.order_by(AttendanceModel.date.desc(), AttendanceModel.student_id)
        return [self._to_entity(model) for model in query.all()]

    def list_for_student(
        self, student_id: int, *, subject_id: int | None = None
    ) -> list[AttendanceRecord]:
        query = self.session.query(AttendanceModel).filter(
            AttendanceModel.student_id == student_id
        )
        if subject_id is not None:
            query = query.filter(AttendanceModel.subject_id == subject_id)
        query = query.order_by(AttendanceModel.date.desc())
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: AttendanceModel) -> AttendanceRecord:
        return AttendanceRecord(
            id=model.id,
            student_id=model.student_id,
            subject_id=model.subject_id,
            date=model.date,
            status=model.status,
            marked_by=model.marked_by,
            remarks=model.remarks,
        )


__all__ = ["AttendanceRepository"]
