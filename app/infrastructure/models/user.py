"""SQLAlchemy models for users and their role specific profiles."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Fields shared by every account regardless of its role."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)
    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)
    avatar = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    admin_profile = relationship(
        "AdminProfileModel", uselist=False, lazy="joined", cascade="all, delete-orphan"
    )
    teacher_profile = relationship(
        "TeacherProfileModel", uselist=False, lazy="joined", cascade="all, delete-orphan"
    )
    student_profile = relationship(
        "StudentProfileModel", uselist=False, lazy="joined", cascade="all, delete-orphan"
    )


class AdminProfileModel(Base):
    __tablename__ = "admin_profile"

    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    admin_code = Column(String(20), nullable=False, unique=True)
    permissions = Column(JSON, nullable=False, default=list)


class TeacherProfileModel(Base):
    __tablename__ = "teacher_profile"

    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    employee_code = Column(String(20), nullable=False, unique=True, index=True)
    department = Column(String(100), nullable=False, index=True)
    designation = Column(String(100), nullable=False)
    qualifications = Column(JSON, nullable=False, default=list)
    joining_date = Column(Date, nullable=True)
    salary = Column(Float, nullable=True)


class StudentProfileModel(Base):
    __tablename__ = "student_profile"

    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    student_code = Column(String(20), nullable=False, unique=True, index=True)
    admission_date = Column(Date, nullable=True)
    current_semester = Column(Integer, nullable=False, default=1)
    department = Column(String(100), nullable=False, index=True)
    program = Column(String(100), nullable=False)
    batch = Column(String(20), nullable=False, index=True)
    class_id = Column(String(50), nullable=True, index=True)
    father_name = Column(String(120), nullable=True)
    mother_name = Column(String(120), nullable=True)
    guardian_phone = Column(String(20), nullable=True)
    guardian_email = Column(String(120), nullable=True)


__all__ = [
    "AdminProfileModel",
    "StudentProfileModel",
    "TeacherProfileModel",
    "UserModel",
]
