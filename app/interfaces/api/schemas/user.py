"""User schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import EmailStr, Field

from app.domain.entities import User, UserRole

from .base import APIModel


class ProfileRead(APIModel):
    first_name: str
    last_name: str
    phone: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    avatar: str | None = None


class ProfileInput(APIModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    date_of_birth: date | None = None
    gender: str | None = Field(default=None, pattern="^(male|female|other)$")


class ProfileUpdate(APIModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    date_of_birth: date | None = None
    gender: str | None = Field(default=None, pattern="^(male|female|other)$")


class AdminDetailsRead(APIModel):
    admin_code: str
    permissions: list[str]


class TeacherDetailsRead(APIModel):
    employee_code: str
    department: str
    designation: str
    qualifications: list[str]
    joining_date: date | None = None
    salary: float | None = None


class StudentDetailsRead(APIModel):
    student_code: str
    department: str
    program: str
    batch: str
    current_semester: int
    admission_date: date | None = None
    class_id: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    guardian_phone: str | None = None
    guardian_email: str | None = None


_DETAILS_SCHEMAS = {
    UserRole.ADMIN: AdminDetailsRead,
    UserRole.TEACHER: TeacherDetailsRead,
    UserRole.STUDENT: StudentDetailsRead,
}


class UserRead(APIModel):
    id: int
    email: str
    role: UserRole
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None
    profile: ProfileRead
    details: AdminDetailsRead | TeacherDetailsRead | StudentDetailsRead

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            last_login=user.last_login,
            created_at=user.created_at,
            profile=ProfileRead.model_validate(user.profile),
            details=_DETAILS_SCHEMAS[user.role].model_validate(user.details),
        )


class UserSummaryRead(APIModel):
    id: int
    email: str
    role: UserRole
    name: str

    @classmethod
    def from_entity(cls, user: User) -> "UserSummaryRead":
        return cls(id=user.id, email=user.email, role=user.role, name=user.profile.full_name)


class StudentDetailsInput(APIModel):
    department: str = Field(..., min_length=1)
    program: str = Field(..., min_length=1)
    batch: str = Field(..., min_length=1)
    current_semester: int = Field(default=1, ge=1, le=12)
    admission_date: date | None = None
    class_id: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    guardian_phone: str | None = None
    guardian_email: EmailStr | None = None


class StudentCreate(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    profile: ProfileInput
    student_details: StudentDetailsInput


class StudentDetailsUpdate(APIModel):
    department: str | None = None
    program: str | None = None
    batch: str | None = None
    current_semester: int | None = Field(default=None, ge=1, le=12)
    admission_date: date | None = None
    class_id: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    guardian_phone: str | None = None
    guardian_email: EmailStr | None = None


class StudentUpdate(APIModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    is_active: bool | None = None
    profile: ProfileUpdate | None = None
    student_details: StudentDetailsUpdate | None = None


class TeacherDetailsInput(APIModel):
    department: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    qualifications: list[str] = Field(default_factory=list)
    joining_date: date | None = None
    salary: float | None = Field(default=None, ge=0)


class TeacherCreate(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    profile: ProfileInput
    teacher_details: TeacherDetailsInput


class TeacherDetailsUpdate(APIModel):
    department: str | None = None
    designation: str | None = None
    qualifications: list[str] | None = None
    joining_date: date | None = None
    salary: float | None = Field(default=None, ge=0)


class TeacherUpdate(APIModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    is_active: bool | None = None
    profile: ProfileUpdate | None = None
    teacher_details: TeacherDetailsUpdate | None = None


class DashboardStatsRead(APIModel):
    total_students: int
    total_teachers: int
    total_subjects: int
    admissions_last_30_days: int
    recent_admissions: list[UserRead]


__all__ = [
    "AdminDetailsRead",
    "DashboardStatsRead",
    "ProfileInput",
    "ProfileRead",
    "ProfileUpdate",
    "StudentCreate",
    "StudentDetailsInput",
    "StudentDetailsRead",
    "StudentDetailsUpdate",
    "StudentUpdate",
    "TeacherCreate",
    "TeacherDetailsInput",
    "TeacherDetailsRead",
    "TeacherDetailsUpdate",
    "TeacherUpdate",
    "UserRead",
    "UserSummaryRead",
]
