"""Use cases for assignments and student submissions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Assignment, Submission, User
from app.domain.errors import ConflictError, DomainError, NotFoundError
from app.infrastructure.repositories import AssignmentRepository
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime

from .subjects import get_owned_subject

STUDENT_FILTERS = ("submitted", "pending", "overdue")


@dataclass
class TeacherAssignment:
    assignment: Assignment
    status: str
    submission_count: int


@dataclass
class StudentAssignment:
    assignment: Assignment
    submission: Submission | None
    status: str


def _now(reference: datetime | None) -> datetime:
    return ensure_app_naive_datetime(reference) or now_in_app_naive_datetime()


def create_assignment(
    session: Session,
    *,
    teacher_id: int,
    subject_id: int,
    title: str,
    due_date: datetime,
    maximum_marks: float,
    description: str | None = None,
    attachments: list[str] | None = None,
) -> Assignment:
    get_owned_subject(session, subject_id, teacher_id)
    if maximum_marks <= 0:
        raise DomainError("Maximum marks must be greater than zero")

    assignment = Assignment(
        id=None,
        title=title.strip(),
        subject_id=subject_id,
        teacher_id=teacher_id,
        due_date=ensure_app_naive_datetime(due_date),
        maximum_marks=maximum_marks,
        description=description,
        attachments=list(attachments or []),
    )
    return AssignmentRepository(session).create(assignment)


def list_teacher_assignments(
    session: Session, *, teacher_id: int, reference: datetime | None = None
) -> list[TeacherAssignment]:
    """List the teacher's assignments as ``active`` until their due date, then ``closed``."""

    now = _now(reference)
    repository = AssignmentRepository(session)
    return [
        TeacherAssignment(
            assignment=assignment,
            status="active" if assignment.is_open(now) else "closed",
            submission_count=len(repository.list_submissions(assignment.id)),
        )
        for assignment in repository.list_by_teacher(teacher_id)
    ]


def _get_owned_assignment(
    repository: AssignmentRepository, assignment_id: int, teacher_id: int
) -> Assignment:
    assignment = repository.get(assignment_id)
    if assignment is None or assignment.teacher_id != teacher_id:
        raise NotFoundError("Assignment not found")
    return assignment


def list_assignment_submissions(
    session: Session, *, teacher_id: int, assignment_id: int
) -> list[Submission]:
    repository = AssignmentRepository(session)
    _get_owned_assignment(repository, assignment_id, teacher_id)
    return repository.list_submissions(assignment_id)


def grade_submission(
    session: Session,
    *,
    teacher_id: int,
    assignment_id: int,
    submission_id: int,
    marks: float,
    feedback: str | None = None,
) -> Submission:
    repository = AssignmentRepository(session)
    assignment = _get_owned_assignment(repository, assignment_id, teacher_id)
    submission = repository.get_submission(submission_id)
    if submission is None or submission.assignment_id != assignment.id:
        raise NotFoundError("Submission not found")
    if not 0 <= marks <= assignment.maximum_marks:
        raise DomainError(
            f"Marks must be between 0 and {assignment.maximum_marks:g}"
        )
    graded = replace(submission, marks=marks, feedback=feedback, status="graded")
    return repository.update_submission(graded)


def list_student_assignments(
    session: Session,
    *,
    student: User,
    status: str | None = None,
    reference: datetime | None = None,
) -> list[StudentAssignment]:
    """Assignments of the student's department and semester.

    ``status`` narrows the list to ``submitted`` ones, unsubmitted ones still
    open (``pending``) or unsubmitted ones past due (``overdue``).
    """

    if status is not None and status not in STUDENT_FILTERS:
        raise DomainError(f"Status must be one of: {', '.join(STUDENT_FILTERS)}")
    details = student.student
    if details is None:
        raise DomainError("Only students have assignments")

    now = _now(reference)
    repository = AssignmentRepository(session)
    assignments = repository.list_for_cohort(details.department, details.current_semester)
    submissions = repository.list_submissions_by_student(
        student.id, [assignment.id for assignment in assignments]
    )

    results = []
    for assignment in assignments:
        submission = submissions.get(assignment.id)
        if submission is not None:
            derived = "submitted"
        elif assignment.is_open(now):
            derived = "pending"
        else:
            derived = "overdue"
        if status is None or status == derived:
            results.append(
                StudentAssignment(assignment=assignment, submission=submission, status=derived)
            )
    return results


def submit_assignment(
    session: Session,
    *,
    student_id: int,
    assignment_id: int,
    file_url: str,
    reference: datetime | None = None,
) -> Submission:
    """Record a submission; one per student, ``late`` after the due date."""

    repository = AssignmentRepository(session)
    assignment = repository.get(assignment_id)
    if assignment is None:
        raise NotFoundError("Assignment not found")
    if repository.get_submission_for(assignment_id, student_id) is not None:
        raise ConflictError("Assignment already submitted")

    now = _now(reference)
    submission = Submission(
        id=None,
        assignment_id=assignment_id,
        student_id=student_id,
        status="submitted" if assignment.is_open(now) else "late",
        submitted_at=now,
        file_url=file_url,
    )
    return repository.add_submission(submission)


__all__ = [
    "StudentAssignment",
    "TeacherAssignment",
    "create_assignment",
    "grade_submission",
    "list_assignment_submissions",
    "list_student_assignments",
    "list_teacher_assignments",
    "submit_assignment",
]
