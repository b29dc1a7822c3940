"""Student self-service endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases import academics, fees
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_student
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    FeeSummaryRead,
    StudentAssignmentRead,
    StudentAttendanceRead,
    StudentPerformanceRead,
    SubmissionRead,
    SubmitAssignmentRequest,
    UserRead,
)

router = APIRouter(prefix="/student", tags=["student"])


@router.get("/profile", response_model=UserRead)
def read_profile(current_user: User = Depends(require_student)) -> UserRead:
    return UserRead.from_entity(current_user)


@router.get("/attendance", response_model=StudentAttendanceRead)
def read_attendance(
    subject_id: int | None = Query(default=None, alias="subjectId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> StudentAttendanceRead:
    attendance = academics.get_student_attendance(
        db, student_id=current_user.id, subject_id=subject_id
    )
    return StudentAttendanceRead.model_validate(attendance)


@router.get("/grades", response_model=StudentPerformanceRead)
def read_grades(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> StudentPerformanceRead:
    performance = academics.get_student_performance(db, student_id=current_user.id)
    return StudentPerformanceRead.model_validate(performance)


@router.get("/assignments", response_model=list[StudentAssignmentRead])
def list_assignments(
    status_filter: str | None = Query(
        default=None, alias="status", pattern="^(submitted|pending|overdue)$"
    ),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> list[StudentAssignmentRead]:
    assignments = academics.list_student_assignments(
        db, student=current_user, status=status_filter
    )
    return [StudentAssignmentRead.model_validate(item) for item in assignments]


@router.post(
    "/assignments/{assignment_id}/submit",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: int,
    payload: SubmitAssignmentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> SubmissionRead:
    try:
        submission = academics.submit_assignment(
            db,
            student_id=current_user.id,
            assignment_id=assignment_id,
            file_url=payload.file_url,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return SubmissionRead.model_validate(submission)


@router.get("/fees", response_model=FeeSummaryRead)
def read_fees(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_student),
) -> FeeSummaryRead:
    summary = fees.get_student_fees(db, student_id=current_user.id)
    return FeeSummaryRead.model_validate(summary)
