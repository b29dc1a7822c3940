"""Use cases for grading exams and computing student performance."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import GRADE_POINTS, Grade, letter_for_percentage
from app.domain.errors import DomainError
from app.infrastructure.repositories import GradeRepository, SubjectRepository

from .exams import get_owned_exam
from .subjects import get_owned_subject


@dataclass
class GradeEntry:
    student_id: int
    marks_obtained: float
    remarks: str | None = None


@dataclass
class StudentPerformance:
    grades: list[Grade]
    total_subjects: int
    overall_percentage: float
    cgpa: float
    total_credits: int


def record_grades(
    session: Session,
    *,
    teacher_id: int,
    exam_id: int,
    entries: Iterable[GradeEntry],
) -> list[Grade]:
    """Upsert one grade per student for ``exam_id`` with its letter."""

    exam = get_owned_exam(session, exam_id, teacher_id)
    entries = list(entries)
    if not entries:
        raise DomainError("At least one grade is required")

    grades = []
    for entry in entries:
        if not 0 <= entry.marks_obtained <= exam.maximum_marks:
            raise DomainError(
                f"Marks for student {entry.student_id} must be between 0 and "
                f"{exam.maximum_marks:g}"
            )
        percentage = entry.marks_obtained / exam.maximum_marks * 100
        grades.append(
            Grade(
                id=None,
                student_id=entry.student_id,
                exam_id=exam.id,
                subject_id=exam.subject_id,
                marks_obtained=entry.marks_obtained,
                maximum_marks=exam.maximum_marks,
                letter=letter_for_percentage(percentage),
                graded_by=teacher_id,
                remarks=entry.remarks,
            )
        )
    return GradeRepository(session).upsert_many(grades)


def list_teacher_grades(
    session: Session, *, teacher_id: int, subject_id: int | None = None
) -> list[Grade]:
    if subject_id is not None:
        subject_ids = [get_owned_subject(session, subject_id, teacher_id).id]
    else:
        subject_ids = [
            subject.id for subject in SubjectRepository(session).list_by_teacher(teacher_id)
        ]
    return GradeRepository(session).list_for_subjects(subject_ids)


def get_student_performance(session: Session, *, student_id: int) -> StudentPerformance:
    """Return the student's grades with a credit weighted CGPA.

    Subjects without a credit value weigh as one credit.
    """

    grades = GradeRepository(session).list_for_student(student_id)
    subjects = SubjectRepository(session).get_map_by_ids([grade.subject_id for grade in grades])

    total_marks = sum(grade.marks_obtained for grade in grades)
    total_maximum = sum(grade.maximum_marks for grade in grades)

    total_credits = 0
    weighted_points = 0.0
    for grade in grades:
        subject = subjects.get(grade.subject_id)
        credits = (subject.credits if subject else None) or 1
        total_credits += credits
        weighted_points += GRADE_POINTS.get(grade.letter, 0.0) * credits

    return StudentPerformance(
        grades=grades,
        total_subjects=len({grade.subject_id for grade in grades}),
        overall_percentage=round(total_marks / total_maximum * 100, 2) if total_maximum else 0.0,
        cgpa=round(weighted_points / total_credits, 2) if total_credits else 0.0,
        total_credits=total_credits,
    )


__all__ = [
    "GradeEntry",
    "StudentPerformance",
    "get_student_performance",
    "list_teacher_grades",
    "record_grades",
]
