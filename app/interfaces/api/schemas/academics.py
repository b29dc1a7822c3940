"""Schemas for subjects, exams, attendance, grades and assignments."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import Field

from .base import APIModel


class SubjectRead(APIModel):
    id: int
    code: str
    name: str
    credits: int
    department: str
    semester: int
    teacher_id: int | None = None
    teacher_name: str | None = None
    description: str | None = None
    outcome_mapping: dict[str, Any] = Field(default_factory=dict)
    created_at: dt.datetime | None = None


class SubjectCreate(APIModel):
    code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=150)
    credits: int = Field(..., ge=1, le=10)
    department: str = Field(..., min_length=1)
    semester: int = Field(..., ge=1, le=12)
    teacher_id: int | None = None
    description: str | None = None
    outcome_mapping: dict[str, Any] | None = None


class SubjectUpdate(APIModel):
    code: str | None = Field(default=None, min_length=1, max_length=20)
    name: str | None = Field(default=None, min_length=1, max_length=150)
    credits: int | None = Field(default=None, ge=1, le=10)
    department: str | None = None
    semester: int | None = Field(default=None, ge=1, le=12)
    teacher_id: int | None = None
    description: str | None = None
    outcome_mapping: dict[str, Any] | None = None


class ExamCreate(APIModel):
    subject_id: int
    name: str = Field(..., min_length=1, max_length=150)
    exam_type: str = Field(..., alias="type", pattern="^(internal|midterm|final|quiz|practical)$")
    exam_date: dt.date = Field(..., alias="date")
    maximum_marks: float = Field(..., gt=0)


class ExamRead(APIModel):
    id: int
    name: str
    exam_type: str = Field(..., serialization_alias="type")
    subject_id: int
    exam_date: dt.date = Field(..., serialization_alias="date")
    maximum_marks: float
    created_by: int


class AttendanceMarkInput(APIModel):
    student_id: int
    status: str = Field(..., pattern="^(present|absent|late)$")
    remarks: str | None = None


class AttendanceRequest(APIModel):
    subject_id: int
    date: dt.date
    records: list[AttendanceMarkInput] = Field(..., min_length=1)


class AttendanceRead(APIModel):
    id: int
    student_id: int
    subject_id: int
    date: dt.date
    status: str
    marked_by: int
    remarks: str | None = None


class SubjectAttendanceSummaryRead(APIModel):
    subject_id: int
    subject_name: str | None = None
    total: int
    present: int
    absent: int
    percentage: float


class StudentAttendanceRead(APIModel):
    records: list[AttendanceRead]
    summary: list[SubjectAttendanceSummaryRead]


class GradeEntryInput(APIModel):
    student_id: int
    marks_obtained: float = Field(..., ge=0)
    remarks: str | None = None


class GradesRequest(APIModel):
    exam_id: int
    grades: list[GradeEntryInput] = Field(..., min_length=1)


class GradeRead(APIModel):
    id: int
    student_id: int
    exam_id: int
    subject_id: int
    marks_obtained: float
    maximum_marks: float
    percentage: float
    letter: str = Field(..., serialization_alias="grade")
    graded_by: int
    remarks: str | None = None
    updated_at: dt.datetime | None = None


class StudentPerformanceRead(APIModel):
    grades: list[GradeRead]
    total_subjects: int
    overall_percentage: float
    cgpa: float
    total_credits: int


class AssignmentCreate(APIModel):
    subject_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    due_date: dt.datetime
    maximum_marks: float = Field(..., gt=0)
    attachments: list[str] = Field(default_factory=list)


class AssignmentRead(APIModel):
    id: int
    title: str
    subject_id: int
    subject_name: str | None = None
    teacher_id: int
    due_date: dt.datetime
    maximum_marks: float
    description: str | None = None
    attachments: list[str] = Field(default_factory=list)
    created_at: dt.datetime | None = None


class TeacherAssignmentRead(APIModel):
    assignment: AssignmentRead
    status: str
    submission_count: int


class SubmissionRead(APIModel):
    id: int
    assignment_id: int
    student_id: int
    status: str
    submitted_at: dt.datetime | None = None
    file_url: str | None = None
    marks: float | None = None
    feedback: str | None = None


class StudentAssignmentRead(APIModel):
    assignment: AssignmentRead
    submission: SubmissionRead | None = None
    status: str


class SubmissionGradeRequest(APIModel):
    marks: float = Field(..., ge=0)
    feedback: str | None = None


class SubmitAssignmentRequest(APIModel):
    file_url: str = Field(..., min_length=1)


__all__ = [
    "AssignmentCreate",
    "AssignmentRead",
    "AttendanceMarkInput",
    "AttendanceRead",
    "AttendanceRequest",
    "ExamCreate",
    "ExamRead",
    "GradeEntryInput",
    "GradeRead",
    "GradesRequest",
    "StudentAssignmentRead",
    "StudentAttendanceRead",
    "StudentPerformanceRead",
    "SubjectAttendanceSummaryRead",
    "SubjectCreate",
    "SubjectRead",
    "SubjectUpdate",
    "SubmissionGradeRequest",
    "SubmissionRead",
    "SubmitAssignmentRequest",
    "TeacherAssignmentRead",
]
