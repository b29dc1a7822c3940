"""SQLAlchemy models for payments, saved methods, refunds and gateway settings."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

Money = Numeric(12, 2, asdecimal=False)


class PaymentModel(Base):
    """A monetary transaction tied to a business reference such as a fee."""

    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_type = Column(String(20), nullable=False, index=True)
    reference_id = Column(String(64), nullable=True)
    amount = Column(Money, nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    status = Column(String(20), nullable=False, default="pending", index=True)
    method = Column(String(20), nullable=False, default="online")
    gateway = Column(String(20), nullable=True)
    transaction_id = Column(String(100), nullable=True)
    gateway_order_id = Column(String(100), nullable=True, unique=True, index=True)
    gateway_payment_id = Column(String(100), nullable=True, index=True)
    gateway_signature = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    paid_at = Column(DateTime, nullable=True)
    refund_amount = Column(Money, nullable=True)
    refund_reason = Column(String(500), nullable=True)
    refunded_at = Column(DateTime, nullable=True)
    refund_requested_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime, index=True)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


class PaymentMethodModel(Base):
    __tablename__ = "payment_method"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    method_type = Column(String(20), nullable=False)
    provider = Column(String(50), nullable=True)
    label = Column(String(100), nullable=True)
    last_four = Column(String(4), nullable=True)
    expiry_month = Column(Integer, nullable=True)
    expiry_year = Column(Integer, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class RefundModel(Base):
    __tablename__ = "refund"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(Integer, ForeignKey("payment.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Money, nullable=False)
    reason = Column(String(500), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    gateway_refund_id = Column(String(100), nullable=True, index=True)
    processed_by = Column(Integer, ForeignKey("user.id"), nullable=True)
    processed_at = Column(DateTime, nullable=True)
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class PaymentGatewayConfigModel(Base):
    __tablename__ = "payment_gateway_config"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    provider = Column(String(20), nullable=False)
    environment = Column(String(10), nullable=False, default="sandbox")
    is_active = Column(Boolean, nullable=False, default=True)
    key_id = Column(String(200), nullable=True)
    key_secret = Column(String(200), nullable=True)
    webhook_secret = Column(String(200), nullable=True)
    supported_methods = Column(JSON, nullable=False, default=list)
    processing_fee_percent = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    minimum_amount = Column(Money, nullable=True)
    maximum_amount = Column(Money, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = [
    "PaymentGatewayConfigModel",
    "PaymentMethodModel",
    "PaymentModel",
    "RefundModel",
]
