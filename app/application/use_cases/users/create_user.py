"""Use cases for creating student, teacher and admin accounts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    AdminDetails,
    Profile,
    StudentDetails,
    TeacherDetails,
    User,
    UserRole,
)
from app.domain.errors import ConflictError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import generate_code, get_password_hash
from app.utils import now_in_app_naive_datetime, today_in_app_timezone

STUDENT_CODE_PREFIX = "STU"
TEACHER_CODE_PREFIX = "TCH"
ADMIN_CODE_PREFIX = "ADM"


def _unique_code(repository: UserRepository, prefix: str) -> str:
    while True:
        code = generate_code(prefix)
        if not repository.code_exists(code):
            return code


def _create(
    session: Session,
    *,
    email: str,
    password: str,
    role: UserRole,
    profile: Profile,
    build_details,
) -> User:
    repository = UserRepository(session)
    normalized_email = email.strip().lower()
    if repository.get_by_email(normalized_email):
        raise ConflictError("User already exists")

    user = User(
        id=None,
        email=normalized_email,
        password=get_password_hash(password),
        role=role,
        profile=profile,
        details=build_details(repository),
        is_active=True,
        created_at=now_in_app_naive_datetime(),
    )
    return repository.create(user)


def create_student(
    session: Session,
    *,
    email: str,
    password: str,
    profile: Profile,
    details: Mapping[str, Any],
) -> User:
    """Create a student with an auto generated ``STU`` code.

    ``details`` holds the :class:`StudentDetails` fields other than the code.
    """

    def build(repository: UserRepository) -> StudentDetails:
        values = dict(details)
        values.setdefault("admission_date", today_in_app_timezone())
        return StudentDetails(
            student_code=_unique_code(repository, STUDENT_CODE_PREFIX), **values
        )

    return _create(
        session,
        email=email,
        password=password,
        role=UserRole.STUDENT,
        profile=profile,
        build_details=build,
    )


def register_student(
    session: Session,
    *,
    email: str,
    password: str,
    profile: Profile,
    details: Mapping[str, Any],
) -> User:
    """Self registration entry point; students are the only role that may sign up."""

    return create_student(
        session, email=email, password=password, profile=profile, details=details
    )


def create_teacher(
    session: Session,
    *,
    email: str,
    password: str,
    profile: Profile,
    details: Mapping[str, Any],
) -> User:
    """Create a teacher with an auto generated ``TCH`` code."""

    def build(repository: UserRepository) -> TeacherDetails:
        values = dict(details)
        values.setdefault("joining_date", today_in_app_timezone())
        return TeacherDetails(
            employee_code=_unique_code(repository, TEACHER_CODE_PREFIX), **values
        )

    return _create(
        session,
        email=email,
        password=password,
        role=UserRole.TEACHER,
        profile=profile,
        build_details=build,
    )


def create_admin(
    session: Session,
    *,
    email: str,
    password: str,
    profile: Profile,
    permissions: list[str] | None = None,
) -> User:
    def build(repository: UserRepository) -> AdminDetails:
        return AdminDetails(
            admin_code=_unique_code(repository, ADMIN_CODE_PREFIX),
            permissions=list(permissions or []),
        )

    return _create(
        session,
        email=email,
        password=password,
        role=UserRole.ADMIN,
        profile=profile,
        build_details=build,
    )


__all__ = ["create_admin", "create_student", "create_teacher", "register_student"]
