"""Domain entities representing users and their role specific details."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Union


class UserRole(str, Enum):
    """Tag that selects which details variant a user carries."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


@dataclass
class Profile:
    """Personal information shared by every role."""

    first_name: str
    last_name: str
    phone: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    avatar: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class AdminDetails:
    admin_code: str
    permissions: list[str] = field(default_factory=list)


@dataclass
class TeacherDetails:
    employee_code: str
    department: str
    designation: str
    qualifications: list[str] = field(default_factory=list)
    joining_date: date | None = None
    salary: float | None = None


@dataclass
class StudentDetails:
    student_code: str
    department: str
    program: str
    batch: str
    current_semester: int = 1
    admission_date: date | None = None
    class_id: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    guardian_phone: str | None = None
    guardian_email: str | None = None


RoleDetails = Union[AdminDetails, TeacherDetails, StudentDetails]

DETAILS_BY_ROLE: dict[UserRole, type] = {
    UserRole.ADMIN: AdminDetails,
    UserRole.TEACHER: TeacherDetails,
    UserRole.STUDENT: StudentDetails,
}


@dataclass
class User:
    """An account whose ``details`` variant is selected by ``role``."""

    id: int | None
    email: str
    password: str
    role: UserRole
    profile: Profile
    details: RoleDetails
    is_active: bool = True
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.role = UserRole(self.role)
        expected = DETAILS_BY_ROLE[self.role]
        if not isinstance(self.details, expected):
            msg = f"A {self.role.value} account requires {expected.__name__}"
            raise ValueError(msg)

    def has_role(self, *roles: UserRole | str) -> bool:
        """Return ``True`` when the user's role is one of ``roles``."""

        return self.role in {UserRole(role) for role in roles}

    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    @property
    def student(self) -> StudentDetails | None:
        return self.details if isinstance(self.details, StudentDetails) else None

    @property
    def teacher(self) -> TeacherDetails | None:
        return self.details if isinstance(self.details, TeacherDetails) else None


__all__ = [
    "AdminDetails",
    "DETAILS_BY_ROLE",
    "Profile",
    "RoleDetails",
    "StudentDetails",
    "TeacherDetails",
    "User",
    "UserRole",
]
