"""Persistence helpers for assignments and their submissions."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Assignment, Submission
from app.infrastructure.models import (
    AssignmentModel,
    AssignmentSubmissionModel,
    SubjectModel,
)


class AssignmentRepository:
    """Provide CRUD operations for assignments and submissions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, assignment_id: int) -> Assignment | None:
        model = self.session.get(AssignmentModel, assignment_id)
        return self._to_entity(model) if model else None

    def list_by_teacher(self, teacher_id: int) -> list[Assignment]:
        query = (
            self.session.query(AssignmentModel)
            .filter(AssignmentModel.teacher_id == teacher_id)
            .order_by(AssignmentModel.due_date.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_cohort(self, department: str, semester: int) -> list[Assignment]:
        query = (
            self.session.query(AssignmentModel)
            .join(SubjectModel, SubjectModel.id == AssignmentModel.subject_id)
            .filter(SubjectModel.department == department)
            .filter(SubjectModel.semester == semester)
            .order_by(AssignmentModel.due_date)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, assignment: Assignment) -> Assignment:
        model = AssignmentModel(
            title=assignment.title,
            description=assignment.description,
            subject_id=assignment.subject_id,
            teacher_id=assignment.teacher_id,
            due_date=assignment.due_date,
            maximum_marks=assignment.maximum_marks,
            attachments=list(assignment.attachments),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_submission(self, submission_id: int) -> Submission | None:
        model = self.session.get(AssignmentSubmissionModel, submission_id)
        return self._submission_to_entity(model) if model else None

    def get_submission_for(self, assignment_id: int, student_id: int) -> Submission | None:
        model = (
            self.session.query(AssignmentSubmissionModel)
            .filter_by(assignment_id=assignment_id, student_id=student_id)
            .first()
        )
        return self._submission_to_entity(model) if model else None

    def list_submissions(self, assignment_id: int) -> list[Submission]:
        query = (
            self.session.query(AssignmentSubmissionModel)
            .filter(AssignmentSubmissionModel.assignment_id == assignment_id)
            .order_by(AssignmentSubmissionModel.submitted_at)
        )
        return [self._submission_to_entity(model) for model in query.all()]

    def list_submissions_by_student(
        self, student_id: int, assignment_ids: Sequence[int]
    ) -> dict[int, Submission]:
        if not assignment_ids:
            return {}
        query = (
            self.session.query(AssignmentSubmissionModel)
            .filter(AssignmentSubmissionModel.student_id == student_id)
            .filter(AssignmentSubmissionModel.assignment_id.in_(set(assignment_ids)))
        )
        return {
            model.assignment_id: self._submission_to_entity(model) for model in query.all()
        }

    def add_submission(self, submission: Submission) -> Submission:
        model = AssignmentSubmissionModel(
            assignment_id=submission.assignment_id,
            student_id=submission.student_id,
            file_url=submission.file_url,
            status=submission.status,
        )
        if submission.submitted_at is not None:
            model.submitted_at = submission.submitted_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._submission_to_entity(model)

    def update_submission(self, submission: Submission) -> Submission:
        model = self.session.get(AssignmentSubmissionModel, submission.id)
        if model is None:
            msg = f"Submission with id {submission.id} not found"
            raise ValueError(msg)
        model.status = submission.status
        model.marks = submission.marks
        model.feedback = submission.feedback
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._submission_to_entity(model)

    @staticmethod
    def _to_entity(model: AssignmentModel) -> Assignment:
        return Assignment(
            id=model.id,
            title=model.title,
            description=model.description,
            subject_id=model.subject_id,
            teacher_id=model.teacher_id,
            due_date=model.due_date,
            maximum_marks=model.maximum_marks,
            attachments=list(model.attachments or []),
            subject_name=model.subject.name if model.subject else None,
            created_at=model.created_at,
        )

    @staticmethod
    def _submission_to_entity(model: AssignmentSubmissionModel) -> Submission:
        return Submission(
            id=model.id,
            assignment_id=model.assignment_id,
            student_id=model.student_id,
            status=model.status,
            submitted_at=model.submitted_at,
            file_url=model.file_url,
            marks=model.marks,
            feedback=model.feedback,
        )


__all__ = ["AssignmentRepository"]
