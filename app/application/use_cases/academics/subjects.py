"""Use cases for managing subjects and their teaching assignments."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Subject, User, UserRole
from app.domain.errors import ConflictError, DomainError, NotFoundError
from app.infrastructure.repositories import SubjectRepository, UserRepository
from app.utils import PageRequest, PageResult


def _ensure_teacher(session: Session, teacher_id: int | None) -> None:
    if teacher_id is None:
        return
    teacher = UserRepository(session).get(teacher_id)
    if teacher is None or teacher.role is not UserRole.TEACHER:
        raise DomainError("Assigned teacher does not exist")


def list_subjects(
    session: Session,
    *,
    page: PageRequest,
    department: str | None = None,
    semester: int | None = None,
) -> PageResult[Subject]:
    return SubjectRepository(session).search(page, department=department, semester=semester)


def get_subject(session: Session, subject_id: int) -> Subject:
    subject = SubjectRepository(session).get(subject_id)
    if subject is None:
        raise NotFoundError("Subject not found")
    return subject


def create_subject(
    session: Session,
    *,
    code: str,
    name: str,
    credits: int,
    department: str,
    semester: int,
    teacher_id: int | None = None,
    description: str | None = None,
    outcome_mapping: dict[str, Any] | None = None,
) -> Subject:
    """Create a subject; ``code`` must be unique."""

    repository = SubjectRepository(session)
    normalized_code = code.strip().upper()
    if repository.get_by_code(normalized_code):
        raise ConflictError("Subject code already exists")
    _ensure_teacher(session, teacher_id)

    subject = Subject(
        id=None,
        code=normalized_code,
        name=name.strip(),
        credits=credits,
        department=department,
        semester=semester,
        teacher_id=teacher_id,
        description=description,
        outcome_mapping=dict(outcome_mapping or {}),
    )
    return repository.create(subject)


def update_subject(session: Session, subject_id: int, changes: dict[str, Any]) -> Subject:
    """Apply ``changes`` (entity field names) to an existing subject."""

    repository = SubjectRepository(session)
    current = get_subject(session, subject_id)

    if "code" in changes and changes["code"] is not None:
        changes["code"] = changes["code"].strip().upper()
        existing = repository.get_by_code(changes["code"])
        if existing and existing.id != subject_id:
            raise ConflictError("Subject code already exists")
    if "teacher_id" in changes:
        _ensure_teacher(session, changes["teacher_id"])

    return repository.update(replace(current, **changes))


def delete_subject(session: Session, subject_id: int) -> None:
    get_subject(session, subject_id)
    SubjectRepository(session).delete(subject_id)


def list_departments(session: Session) -> list[str]:
    return SubjectRepository(session).list_departments()


def list_teacher_subjects(session: Session, teacher_id: int) -> list[Subject]:
    return list(SubjectRepository(session).list_by_teacher(teacher_id))


def get_owned_subject(session: Session, subject_id: int, teacher_id: int) -> Subject:
    """Return the subject when ``teacher_id`` teaches it; otherwise report it missing."""

    subject = SubjectRepository(session).get(subject_id)
    if subject is None or subject.teacher_id != teacher_id:
        raise NotFoundError("Subject not found")
    return subject


def list_subject_students(session: Session, subject_id: int, teacher_id: int) -> list[User]:
    """Students enrolled in the subject's department and semester."""

    subject = get_owned_subject(session, subject_id, teacher_id)
    return list(
        UserRepository(session).list_students(
            department=subject.department, semester=subject.semester
        )
    )


__all__ = [
    "create_subject",
    "delete_subject",
    "get_owned_subject",
    "get_subject",
    "list_departments",
    "list_subject_students",
    "list_subjects",
    "list_teacher_subjects",
    "update_subject",
]
