"""Domain entities for subjects, exams, attendance, grades and assignments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

# Lower bounds of each letter band, checked in order.
GRADE_BANDS: tuple[tuple[float, str], ...] = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
    (40, "E"),
)

GRADE_POINTS: dict[str, float] = {
    "A+": 4.0,
    "A": 4.0,
    "B": 3.0,
    "C": 2.0,
    "D": 1.0,
    "E": 0.5,
    "F": 0.0,
}

ATTENDANCE_STATUSES = ("present", "absent", "late")


def letter_for_percentage(percentage: float) -> str:
    """Return the letter grade for ``percentage`` (0-100)."""

    for lower_bound, letter in GRADE_BANDS:
        if percentage >= lower_bound:
            return letter
    return "F"


@dataclass
class Subject:
    id: int | None
    code: str
    name: str
    credits: int
    department: str
    semester: int
    teacher_id: int | None = None
    teacher_name: str | None = None
    description: str | None = None
    outcome_mapping: dict = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass
class Exam:
    id: int | None
    name: str
    exam_type: str
    subject_id: int
    exam_date: date
    maximum_marks: float
    created_by: int
    created_at: datetime | None = None


@dataclass
class AttendanceRecord:
    id: int | None
    student_id: int
    subject_id: int
    date: date
    status: str
    marked_by: int
    remarks: str | None = None

    @property
    def counts_as_present(self) -> bool:
        return self.status in ("present", "late")


@dataclass
class Grade:
    id: int | None
    student_id: int
    exam_id: int
    subject_id: int
    marks_obtained: float
    maximum_marks: float
    letter: str
    graded_by: int
    remarks: str | None = None
    updated_at: datetime | None = None

    @property
    def percentage(self) -> float:
        return round(self.marks_obtained / self.maximum_marks * 100, 2)


@dataclass
class Assignment:
    id: int | None
    title: str
    subject_id: int
    teacher_id: int
    due_date: datetime
    maximum_marks: float
    description: str | None = None
    attachments: list[str] = field(default_factory=list)
    subject_name: str | None = None
    created_at: datetime | None = None

    def is_open(self, now: datetime) -> bool:
        return now <= self.due_date


@dataclass
class Submission:
    id: int | None
    assignment_id: int
    student_id: int
    status: str
    submitted_at: datetime | None = None
    file_url: str | None = None
    marks: float | None = None
    feedback: str | None = None


__all__ = [
    "ATTENDANCE_STATUSES",
    "Assignment",
    "AttendanceRecord",
    "Exam",
    "GRADE_POINTS",
    "Grade",
    "Subject",
    "Submission",
    "letter_for_percentage",
]
