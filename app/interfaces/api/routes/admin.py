"""Admin endpoints: dashboard, people, subjects and fees."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases import academics, fees
from app.application.use_cases.dashboard import get_dashboard_stats
from app.application.use_cases.users import (
    create_student as create_student_uc,
    create_teacher as create_teacher_uc,
    delete_user,
    get_user,
    list_users,
    update_user,
)
from app.domain.entities import Profile, User, UserRole
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_page_request, require_admin
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    DashboardStatsRead,
    FeeCreate,
    FeeRead,
    FeeUpdate,
    Page,
    StudentCreate,
    StudentUpdate,
    SubjectCreate,
    SubjectRead,
    SubjectUpdate,
    TeacherCreate,
    TeacherUpdate,
    UserRead,
    page_of,
)
from app.utils import PageRequest

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/dashboard/stats", response_model=DashboardStatsRead)
def dashboard_stats(db: Session = Depends(get_db)) -> DashboardStatsRead:
    stats = get_dashboard_stats(db)
    return DashboardStatsRead(
        total_students=stats.total_students,
        total_teachers=stats.total_teachers,
        total_subjects=stats.total_subjects,
        admissions_last_30_days=stats.admissions_last_30_days,
        recent_admissions=[UserRead.from_entity(user) for user in stats.recent_admissions],
    )


def _user_page(result) -> Page[UserRead]:
    return page_of(UserRead, result, items=[UserRead.from_entity(user) for user in result.items])


def _read_user(db: Session, user_id: int, role: UserRole) -> User:
    try:
        return get_user(db, user_id, role=role)
    except DomainError as exc:
        raise to_http_exception(exc) from exc


def _update_person(db: Session, user_id: int, role: UserRole, payload, details) -> UserRead:
    try:
        user = update_user(
            db,
            user_id=user_id,
            role=role,
            email=payload.email,
            password=payload.password,
            is_active=payload.is_active,
            profile=payload.profile.model_dump(exclude_unset=True) if payload.profile else None,
            details=details.model_dump(exclude_unset=True) if details else None,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.from_entity(user)


def _delete_person(db: Session, user_id: int, role: UserRole) -> Response:
    try:
        delete_user(db, user_id, role=role)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/students", response_model=Page[UserRead])
def list_students(
    search: str | None = None,
    department: str | None = None,
    semester: int | None = Query(default=None, ge=1),
    batch: str | None = None,
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> Page[UserRead]:
    result = list_users(
        db,
        role=UserRole.STUDENT,
        page=page,
        search=search,
        department=department,
        semester=semester,
        batch=batch,
    )
    return _user_page(result)


@router.get("/students/{student_id}", response_model=UserRead)
def read_student(student_id: int, db: Session = Depends(get_db)) -> UserRead:
    return UserRead.from_entity(_read_user(db, student_id, UserRole.STUDENT))


@router.post("/students", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = create_student_uc(
            db,
            email=payload.email,
            password=payload.password,
            profile=Profile(**payload.profile.model_dump()),
            details=payload.student_details.model_dump(exclude_none=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.from_entity(user)


@router.put("/students/{student_id}", response_model=UserRead)
def update_student(
    student_id: int, payload: StudentUpdate, db: Session = Depends(get_db)
) -> UserRead:
    return _update_person(db, student_id, UserRole.STUDENT, payload, payload.student_details)


@router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_student(student_id: int, db: Session = Depends(get_db)) -> Response:
    return _delete_person(db, student_id, UserRole.STUDENT)


@router.get("/teachers", response_model=Page[UserRead])
def list_teachers(
    search: str | None = None,
    department: str | None = None,
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> Page[UserRead]:
    result = list_users(
        db, role=UserRole.TEACHER, page=page, search=search, department=department
    )
    return _user_page(result)


@router.get("/teachers/{teacher_id}", response_model=UserRead)
def read_teacher(teacher_id: int, db: Session = Depends(get_db)) -> UserRead:
    return UserRead.from_entity(_read_user(db, teacher_id, UserRole.TEACHER))


@router.post("/teachers", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = create_teacher_uc(
            db,
            email=payload.email,
            password=payload.password,
            profile=Profile(**payload.profile.model_dump()),
            details=payload.teacher_details.model_dump(exclude_none=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.from_entity(user)


@router.put("/teachers/{teacher_id}", response_model=UserRead)
def update_teacher(
    teacher_id: int, payload: TeacherUpdate, db: Session = Depends(get_db)
) -> UserRead:
    return _update_person(db, teacher_id, UserRole.TEACHER, payload, payload.teacher_details)


@router.delete("/teachers/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_teacher(teacher_id: int, db: Session = Depends(get_db)) -> Response:
    return _delete_person(db, teacher_id, UserRole.TEACHER)


@router.get("/subjects", response_model=Page[SubjectRead])
def list_subjects(
    department: str | None = None,
    semester: int | None = Query(default=None, ge=1),
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> Page[SubjectRead]:
    result = academics.list_subjects(db, page=page, department=department, semester=semester)
    return page_of(SubjectRead, result)


@router.post("/subjects", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
def create_subject(payload: SubjectCreate, db: Session = Depends(get_db)) -> SubjectRead:
    try:
        subject = academics.create_subject(db, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return SubjectRead.model_validate(subject)


@router.put("/subjects/{subject_id}", response_model=SubjectRead)
def update_subject(
    subject_id: int, payload: SubjectUpdate, db: Session = Depends(get_db)
) -> SubjectRead:
    try:
        subject = academics.update_subject(db, subject_id, payload.model_dump(exclude_unset=True))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return SubjectRead.model_validate(subject)


@router.delete("/subjects/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subject(subject_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        academics.delete_subject(db, subject_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/fees", response_model=Page[FeeRead])
def list_fees(
    status_filter: str | None = Query(default=None, alias="status"),
    academic_year: str | None = Query(default=None, alias="academicYear"),
    student_id: int | None = Query(default=None, alias="studentId"),
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> Page[FeeRead]:
    result = fees.list_fees(
        db, page=page, status=status_filter, academic_year=academic_year, student_id=student_id
    )
    return page_of(FeeRead, result)


@router.post("/fees", response_model=FeeRead, status_code=status.HTTP_201_CREATED)
def create_fee(payload: FeeCreate, db: Session = Depends(get_db)) -> FeeRead:
    try:
        fee = fees.create_fee(db, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return FeeRead.model_validate(fee)


@router.put("/fees/{fee_id}", response_model=FeeRead)
def update_fee(fee_id: int, payload: FeeUpdate, db: Session = Depends(get_db)) -> FeeRead:
    try:
        fee = fees.update_fee(db, fee_id, payload.model_dump(exclude_unset=True))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return FeeRead.model_validate(fee)


@router.delete("/fees/{fee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fee(fee_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        fees.delete_fee(db, fee_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
