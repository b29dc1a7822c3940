"""Use cases for exams."""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import Exam
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.repositories import ExamRepository, SubjectRepository

from .subjects import get_owned_subject


def create_exam(
    session: Session,
    *,
    teacher_id: int,
    subject_id: int,
    name: str,
    exam_type: str,
    exam_date: date,
    maximum_marks: float,
) -> Exam:
    """Create an exam for a subject taught by ``teacher_id``."""

    get_owned_subject(session, subject_id, teacher_id)
    if maximum_marks <= 0:
        raise DomainError("Maximum marks must be greater than zero")

    exam = Exam(
        id=None,
        name=name.strip(),
        exam_type=exam_type,
        subject_id=subject_id,
        exam_date=exam_date,
        maximum_marks=maximum_marks,
        created_by=teacher_id,
    )
    return ExamRepository(session).create(exam)


def list_subject_exams(session: Session, *, teacher_id: int, subject_id: int) -> list[Exam]:
    get_owned_subject(session, subject_id, teacher_id)
    return ExamRepository(session).list_by_subject(subject_id)


def get_owned_exam(session: Session, exam_id: int, teacher_id: int) -> Exam:
    exam = ExamRepository(session).get(exam_id)
    subject = SubjectRepository(session).get(exam.subject_id) if exam else None
    if subject is None or subject.teacher_id != teacher_id:
        raise NotFoundError("Exam not found")
    return exam


__all__ = ["create_exam", "get_owned_exam", "list_subject_exams"]
