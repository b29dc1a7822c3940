"""SQLAlchemy models for persisted notifications and their recipients."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """A notification authored by one user and addressed to a recipient rule."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")
    priority = Column(String(10), nullable=False, default="medium")
    category = Column(String(20), nullable=False, default="general", index=True)
    sender_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_mode = Column(String(20), nullable=False)
    recipient_value = Column(JSON, nullable=True)
    action_url = Column(String(500), nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    scheduled_for = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    sender = relationship("UserModel", lazy="joined")
    recipients = relationship(
        "NotificationRecipientModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class NotificationRecipientModel(Base):
    """Membership of a user in a notification's audience; ``read_at`` marks it read."""

    __tablename__ = "notification_recipient"

    notification_id = Column(
        Integer, ForeignKey("notification.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True, index=True)
    read_at = Column(DateTime(), nullable=True)

    notification = relationship("NotificationModel", back_populates="recipients")


__all__ = ["NotificationModel", "NotificationRecipientModel"]
