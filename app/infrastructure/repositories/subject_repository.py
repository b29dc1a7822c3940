"""Persistence helpers for subjects."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Subject
from app.infrastructure.models import SubjectModel
from app.utils import PageRequest, PageResult, paginate


class SubjectRepository:
    """Provide CRUD operations for :class:`Subject` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, subject_id: int) -> Subject | None:
        model = self.session.get(SubjectModel, subject_id)
        return self._to_entity(model) if model else None

    def get_by_code(self, code: str) -> Subject | None:
        model = self.session.query(SubjectModel).filter_by(code=code).first()
        return self._to_entity(model) if model else None

    def search(
        self,
        page: PageRequest,
        *,
        department: str | None = None,
        semester: int | None = None,
    ) -> PageResult[Subject]:
        query = self.session.query(SubjectModel)
        if department:
            query = query.filter(SubjectModel.department == department)
        if semester is not None:
            query = query.filter(SubjectModel.semester == semester)
        query = query.order_by(SubjectModel.code)
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def list_by_teacher(self, teacher_id: int) -> Sequence[Subject]:
        query = (
            self.session.query(SubjectModel)
            .filter(SubjectModel.teacher_id == teacher_id)
            .order_by(SubjectModel.code)
        )
        return [self._to_entity(model) for model in query.all()]

    def get_map_by_ids(self, subject_ids: Sequence[int]) -> dict[int, Subject]:
        if not subject_ids:
            return {}
        query = self.session.query(SubjectModel).filter(SubjectModel.id.in_(set(subject_ids)))
        return {model.id: self._to_entity(model) for model in query.all()}

    def count(self) -> int:
        return self.session.query(SubjectModel).count()

    def list_departments(self) -> list[str]:
        query = (
            self.session.query(SubjectModel.department)
            .distinct()
            .order_by(SubjectModel.department)
        )
        return [department for (department,) in query.all() if department]

    def create(self, subject: Subject) -> Subject:
        model = SubjectModel()
        self._apply_entity_to_model(model, subject)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, subject: Subject) -> Subject:
        model = self.session.get(SubjectModel, subject.id)
        if model is None:
            msg = f"Subject with id {subject.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, subject)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, subject_id: int) -> None:
        model = self.session.get(SubjectModel, subject_id)
        if model is None:
            msg = f"Subject with id {subject_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(model: SubjectModel, subject: Subject) -> None:
        model.code = subject.code
        model.name = subject.name
        model.credits = subject.credits
        model.department = subject.department
        model.semester = subject.semester
        model.teacher_id = subject.teacher_id
        model.description = subject.description
        model.outcome_mapping = dict(subject.outcome_mapping or {})

    @staticmethod
    def _to_entity(model: SubjectModel) -> Subject:
        teacher = model.teacher
        return Subject(
            id=model.id,
            code=model.code,
            name=model.name,
            credits=model.credits,
            department=model.department,
            semester=model.semester,
            teacher_id=model.teacher_id,
            teacher_name=f"{teacher.first_name} {teacher.last_name}" if teacher else None,
            description=model.description,
            outcome_mapping=dict(model.outcome_mapping or {}),
            created_at=model.created_at,
        )


__all__ = ["SubjectRepository"]
