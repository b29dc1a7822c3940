"""SQLAlchemy model for student fee ledgers."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class FeeModel(Base):
    """Amount owed by a student for one academic year and semester."""

    __tablename__ = "fee"
    __table_args__ = (
        UniqueConstraint("student_id", "academic_year", "semester", name="uq_fee_student_term"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    academic_year = Column(String(9), nullable=False, index=True)
    semester = Column(Integer, nullable=False)
    total_amount = Column(Float, nullable=False)
    paid_amount = Column(Float, nullable=False, default=0.0)
    due_amount = Column(Float, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["FeeModel"]
