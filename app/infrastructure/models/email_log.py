"""SQLAlchemy model recording outbound email attempts."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class EmailLogModel(Base):
    __tablename__ = "email_log"

    id = Column(Integer, primary_key=True, index=True)
    recipient = Column(String(255), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    template = Column(String(50), nullable=True, index=True)
    status = Column(String(10), nullable=False, index=True)
    error_message = Column(Text, nullable=True)
    sent_by = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime, index=True)


__all__ = ["EmailLogModel"]
