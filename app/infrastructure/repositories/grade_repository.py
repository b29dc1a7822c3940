"""Persistence helpers for exam grades."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Grade
from app.infrastructure.models import GradeModel
from app.utils import now_in_app_naive_datetime


class GradeRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_many(self, grades: Sequence[Grade]) -> list[Grade]:
        models: list[GradeModel] = []
        for grade in grades:
            model = (
                self.session.query(GradeModel)
                .filter_by(student_id=grade.student_id, exam_id=grade.exam_id)
                .first()
            )
            if model is None:
                model = GradeModel(student_id=grade.student_id, exam_id=grade.exam_id)
                self.session.add(model)
            model.subject_id = grade.subject_id
            model.marks_obtained = grade.marks_obtained
            model.maximum_marks = grade.maximum_marks
            model.letter = grade.letter
            model.remarks = grade.remarks
            model.graded_by = grade.graded_by
            model.updated_at = now_in_app_naive_datetime()
            models.append(model)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def list_for_subjects(self, subject_ids: Sequence[int]) -> list[Grade]:
        if not subject_ids:
            return []
        query = (
            self.session.query(GradeModel)
            .filter(GradeModel.subject_id.in_(set(subject_ids)))
            .order_by(GradeModel.updated_at.desc(), GradeModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_student(self, student_id: int) -> list[Grade]:
        query = (
            self.session.query(GradeModel)
            .filter(GradeModel.student_id == student_id)
            .order_by(GradeModel.updated_at.desc(), GradeModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: GradeModel) -> Grade:
        return Grade(
            id=model.id,
            student_id=model.student_id,
            exam_id=model.exam_id,
            subject_id=model.subject_id,
            marks_obtained=model.marks_obtained,
            maximum_marks=model.maximum_marks,
            letter=model.letter,
            graded_by=model.graded_by,
            remarks=model.remarks,
            updated_at=model.updated_at,
        )


__all__ = ["GradeRepository"]
