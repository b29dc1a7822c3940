"""SQLAlchemy models for subjects, exams, attendance, grades and assignments."""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class SubjectModel(Base):
    __tablename__ = "subject"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(120), nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    department = Column(String(100), nullable=False, index=True)
    semester = Column(Integer, nullable=False)
    teacher_id = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True)
    description = Column(Text, nullable=True)
    outcome_mapping = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    teacher = relationship("UserModel", lazy="joined")


class ExamModel(Base):
    __tablename__ = "exam"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    exam_type = Column(String(20), nullable=False, default="internal")
    subject_id = Column(Integer, ForeignKey("subject.id", ondelete="CASCADE"), nullable=False, index=True)
    exam_date = Column(Date, nullable=False)
    maximum_marks = Column(Float, nullable=False)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class AttendanceModel(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", "date", name="uq_attendance_student_subject_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subject.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(10), nullable=False)
    marked_by = Column(Integer, ForeignKey("user.id"), nullable=False)
    remarks = Column(String(255), nullable=True)


class GradeModel(Base):
    __tablename__ = "grade"
    __table_args__ = (
        UniqueConstraint("student_id", "exam_id", name="uq_grade_student_exam"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    exam_id = Column(Integer, ForeignKey("exam.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subject.id", ondelete="CASCADE"), nullable=False, index=True)
    marks_obtained = Column(Float, nullable=False)
    maximum_marks = Column(Float, nullable=False)
    letter = Column(String(2), nullable=False)
    remarks = Column(String(255), nullable=True)
    graded_by = Column(Integer, ForeignKey("user.id"), nullable=False)
    updated_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class AssignmentModel(Base):
    __tablename__ = "assignment"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    subject_id = Column(Integer, ForeignKey("subject.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    due_date = Column(DateTime, nullable=False)
    maximum_marks = Column(Float, nullable=False)
    attachments = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    subject = relationship("SubjectModel", lazy="joined")


class AssignmentSubmissionModel(Base):
    __tablename__ = "assignment_submission"
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),
    )

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(
        Integer, ForeignKey("assignment.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    file_url = Column(String(500), nullable=True)
    submitted_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    status = Column(String(10), nullable=False, default="submitted")
    marks = Column(Float, nullable=True)
    feedback = Column(Text, nullable=True)


__all__ = [
    "AssignmentModel",
    "AssignmentSubmissionModel",
    "AttendanceModel",
    "ExamModel",
    "GradeModel",
    "SubjectModel",
]
