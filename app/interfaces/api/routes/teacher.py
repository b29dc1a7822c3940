"""Teacher endpoints for owned subjects, attendance, grades and assignments."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases import academics
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_teacher
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    AssignmentCreate,
    AssignmentRead,
    AttendanceRead,
    AttendanceRequest,
    ExamCreate,
    ExamRead,
    GradeRead,
    GradesRequest,
    SubjectRead,
    SubmissionGradeRequest,
    SubmissionRead,
    TeacherAssignmentRead,
    UserRead,
)

router = APIRouter(prefix="/teacher", tags=["teacher"])


@router.get("/subjects", response_model=list[SubjectRead])
def list_subjects(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[SubjectRead]:
    subjects = academics.list_teacher_subjects(db, current_user.id)
    return [SubjectRead.model_validate(subject) for subject in subjects]


@router.get("/subjects/{subject_id}/students", response_model=list[UserRead])
def list_subject_students(
    subject_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[UserRead]:
    try:
        students = academics.list_subject_students(db, subject_id, current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [UserRead.from_entity(student) for student in students]


@router.get("/subjects/{subject_id}/exams", response_model=list[ExamRead])
def list_subject_exams(
    subject_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[ExamRead]:
    try:
        exams = academics.list_subject_exams(db, teacher_id=current_user.id, subject_id=subject_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [ExamRead.model_validate(exam) for exam in exams]


@router.post("/exams", response_model=ExamRead, status_code=status.HTTP_201_CREATED)
def create_exam(
    payload: ExamCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> ExamRead:
    try:
        exam = academics.create_exam(db, teacher_id=current_user.id, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ExamRead.model_validate(exam)


@router.post("/attendance", response_model=list[AttendanceRead])
def mark_attendance(
    payload: AttendanceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[AttendanceRead]:
    marks = [
        academics.AttendanceMark(
            student_id=record.student_id, status=record.status, remarks=record.remarks
        )
        for record in payload.records
    ]
    try:
        records = academics.mark_attendance(
            db,
            teacher_id=current_user.id,
            subject_id=payload.subject_id,
            day=payload.date,
            marks=marks,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [AttendanceRead.model_validate(record) for record in records]


@router.get("/attendance/{subject_id}", response_model=list[AttendanceRead])
def read_attendance(
    subject_id: int,
    day: dt.date | None = Query(default=None, alias="date"),
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=2000),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[AttendanceRead]:
    try:
        records = academics.get_subject_attendance(
            db,
            teacher_id=current_user.id,
            subject_id=subject_id,
            day=day,
            month=month,
            year=year,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [AttendanceRead.model_validate(record) for record in records]


@router.post("/grades", response_model=list[GradeRead])
def record_grades(
    payload: GradesRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[GradeRead]:
    entries = [
        academics.GradeEntry(
            student_id=entry.student_id,
            marks_obtained=entry.marks_obtained,
            remarks=entry.remarks,
        )
        for entry in payload.grades
    ]
    try:
        grades = academics.record_grades(
            db, teacher_id=current_user.id, exam_id=payload.exam_id, entries=entries
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [GradeRead.model_validate(grade) for grade in grades]


@router.get("/grades", response_model=list[GradeRead])
def list_grades(
    subject_id: int | None = Query(default=None, alias="subjectId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[GradeRead]:
    try:
        grades = academics.list_teacher_grades(
            db, teacher_id=current_user.id, subject_id=subject_id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [GradeRead.model_validate(grade) for grade in grades]


@router.get("/assignments", response_model=list[TeacherAssignmentRead])
def list_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[TeacherAssignmentRead]:
    assignments = academics.list_teacher_assignments(db, teacher_id=current_user.id)
    return [TeacherAssignmentRead.model_validate(item) for item in assignments]


@router.post("/assignments", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> AssignmentRead:
    try:
        assignment = academics.create_assignment(
            db, teacher_id=current_user.id, **payload.model_dump()
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AssignmentRead.model_validate(assignment)


@router.get("/assignments/{assignment_id}/submissions", response_model=list[SubmissionRead])
def list_submissions(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> list[SubmissionRead]:
    try:
        submissions = academics.list_assignment_submissions(
            db, teacher_id=current_user.id, assignment_id=assignment_id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [SubmissionRead.model_validate(submission) for submission in submissions]


@router.put(
    "/assignments/{assignment_id}/submissions/{submission_id}/grade",
    response_model=SubmissionRead,
)
def grade_submission(
    assignment_id: int,
    submission_id: int,
    payload: SubmissionGradeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
) -> SubmissionRead:
    try:
        submission = academics.grade_submission(
            db,
            teacher_id=current_user.id,
            assignment_id=assignment_id,
            submission_id=submission_id,
            marks=payload.marks,
            feedback=payload.feedback,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return SubmissionRead.model_validate(submission)
