"""SQLAlchemy model describing stored uploads."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class UploadedFileModel(Base):
    __tablename__ = "uploaded_file"

    id = Column(Integer, primary_key=True, index=True)
    file_id = Column(String(64), nullable=False, unique=True, index=True)
    original_name = Column(String(255), nullable=False)
    content_type = Column(String(100), nullable=True)
    size = Column(Integer, nullable=False)
    storage = Column(String(10), nullable=False)
    path = Column(String(500), nullable=False)
    url = Column(String(500), nullable=False)
    uploaded_by = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UploadedFileModel"]
