"""Persistence helpers for exams."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Exam
from app.infrastructure.models import ExamModel


class ExamRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, exam_id: int) -> Exam | None:
        model = self.session.get(ExamModel, exam_id)
        return self._to_entity(model) if model else None

    def list_by_subject(self, subject_id: int) -> list[Exam]:
        query = (
            self.session.query(ExamModel)
            .filter(ExamModel.subject_id == subject_id)
            .order_by(ExamModel.exam_date)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, exam: Exam) -> Exam:
        model = ExamModel(
            name=exam.name,
            exam_type=exam.exam_type,
            subject_id=exam.subject_id,
            exam_date=exam.exam_date,
            maximum_marks=exam.maximum_marks,
            created_by=exam.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ExamModel) -> Exam:
        return Exam(
            id=model.id,
            name=model.name,
            exam_type=model.exam_type,
            subject_id=model.subject_id,
            exam_date=model.exam_date,
            maximum_marks=model.maximum_marks,
            created_by=model.created_by,
            created_at=model.created_at,
        )


__all__ = ["ExamRepository"]
