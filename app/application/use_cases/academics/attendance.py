"""Use cases for marking and reviewing attendance."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import ATTENDANCE_STATUSES, AttendanceRecord
from app.domain.errors import DomainError
from app.infrastructure.repositories import (
    AttendanceRepository,
    SubjectRepository,
    UserRepository,
)
from app.utils import month_bounds

from .subjects import get_owned_subject


@dataclass
class AttendanceMark:
    student_id: int
    status: str
    remarks: str | None = None


@dataclass
class SubjectAttendanceSummary:
    subject_id: int
    subject_name: str | None
    total: int
    present: int
    absent: int
    percentage: float


@dataclass
class StudentAttendance:
    records: list[AttendanceRecord]
    summary: list[SubjectAttendanceSummary]


def mark_attendance(
    session: Session,
    *,
    teacher_id: int,
    subject_id: int,
    day: date,
    marks: Iterable[AttendanceMark],
) -> list[AttendanceRecord]:
    """Upsert one mark per student for ``subject_id`` on ``day``."""

    get_owned_subject(session, subject_id, teacher_id)
    marks = list(marks)
    if not marks:
        raise DomainError("At least one attendance record is required")

    for mark in marks:
        if mark.status not in ATTENDANCE_STATUSES:
            raise DomainError(f"Invalid attendance status: {mark.status}")

    student_ids = {mark.student_id for mark in marks}
    known = UserRepository(session).get_map_by_ids(student_ids)
    missing = sorted(
        student_id
        for student_id in student_ids
        if student_id not in known or known[student_id].student is None
    )
    if missing:
        raise DomainError(f"Unknown students: {', '.join(map(str, missing))}")

    records = [
        AttendanceRecord(
            id=None,
            student_id=mark.student_id,
            subject_id=subject_id,
            date=day,
            status=mark.status,
            marked_by=teacher_id,
            remarks=mark.remarks,
        )
        for mark in marks
    ]
    return AttendanceRepository(session).upsert_many(records)


def get_subject_attendance(
    session: Session,
    *,
    teacher_id: int,
    subject_id: int,
    day: date | None = None,
    month: int | None = None,
    year: int | None = None,
) -> list[AttendanceRecord]:
    """List marks for a subject on ``day`` or within ``month``/``year``."""

    get_owned_subject(session, subject_id, teacher_id)
    start = end = None
    if day is not None:
        start = end = day
    elif month is not None and year is not None:
        try:
            start, end = month_bounds(year, month)
        except ValueError as exc:
            raise DomainError(str(exc)) from exc
    return AttendanceRepository(session).list_for_subject(subject_id, start=start, end=end)


def get_student_attendance(
    session: Session,
    *,
    student_id: int,
    subject_id: int | None = None,
) -> StudentAttendance:
    """Return the student's marks and a per-subject summary.

    ``late`` counts as present in the percentage.
    """

    records = AttendanceRepository(session).list_for_student(
        student_id, subject_id=subject_id
    )
    grouped: dict[int, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        grouped[record.subject_id].append(record)

    subjects = SubjectRepository(session).get_map_by_ids(list(grouped))
    summary = []
    for grouped_subject_id, subject_records in sorted(grouped.items()):
        total = len(subject_records)
        present = sum(1 for record in subject_records if record.counts_as_present)
        subject = subjects.get(grouped_subject_id)
        summary.append(
            SubjectAttendanceSummary(
                subject_id=grouped_subject_id,
                subject_name=subject.name if subject else None,
                total=total,
                present=present,
                absent=total - present,
                percentage=round(present / total * 100, 2) if total else 0.0,
            )
        )
    return StudentAttendance(records=records, summary=summary)


__all__ = [
    "AttendanceMark",
    "StudentAttendance",
    "SubjectAttendanceSummary",
    "get_student_attendance",
    "get_subject_attendance",
    "mark_attendance",
]
