"""Schemas for payments, refunds, saved methods and gateway configuration."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from app.domain.entities import PaymentStatus

from .base import APIModel

_PAYMENT_TYPES = "^(fee|event|fine|other)$"
_PAYMENT_METHODS = "^(online|cash|cheque|bank_transfer|card|upi)$"


class PaymentRead(APIModel):
    id: int
    student_id: int
    payment_type: str = Field(..., serialization_alias="type")
    amount: float
    currency: str
    status: PaymentStatus
    reference_id: str | None = None
    method: str
    gateway: str | None = None
    transaction_id: str | None = None
    gateway_order_id: str | None = None
    gateway_payment_id: str | None = None
    description: str | None = None
    paid_at: datetime | None = None
    refund_amount: float | None = None
    refund_reason: str | None = None
    refunded_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaymentCreate(APIModel):
    student_id: int | None = None
    payment_type: str = Field(..., alias="type", pattern=_PAYMENT_TYPES)
    amount: float = Field(..., gt=0)
    currency: str = Field(default="INR", min_length=3, max_length=3)
    method: str = Field(default="cash", pattern=_PAYMENT_METHODS)
    reference_id: str | None = None
    description: str | None = None
    transaction_id: str | None = None


class PaymentStatusUpdate(APIModel):
    status: PaymentStatus
    transaction_id: str | None = None


class PaymentStatusChangeRead(APIModel):
    payment: PaymentRead
    previous: PaymentStatus = Field(..., serialization_alias="previousStatus")
    applied: bool


class PaymentMethodRead(APIModel):
    id: int
    student_id: int
    method_type: str = Field(..., serialization_alias="type")
    provider: str | None = None
    label: str | None = None
    last_four: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    is_default: bool
    is_active: bool
    created_at: datetime | None = None


class PaymentMethodCreate(APIModel):
    student_id: int | None = None
    method_type: str = Field(..., alias="type", pattern=_PAYMENT_METHODS)
    provider: str | None = None
    label: str | None = None
    last_four: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    is_default: bool = False


class PaymentMethodUpdate(APIModel):
    provider: str | None = None
    label: str | None = None
    last_four: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    is_default: bool | None = None


class RefundCreate(APIModel):
    payment_id: int
    amount: float | None = Field(default=None, gt=0)
    reason: str = Field(..., min_length=1)
    remarks: str | None = None


class RefundRead(APIModel):
    id: int
    payment_id: int
    student_id: int
    amount: float
    reason: str
    status: str
    gateway_refund_id: str | None = None
    processed_by: int | None = None
    processed_at: datetime | None = None
    remarks: str | None = None
    created_at: datetime | None = None


class RefundResultRead(APIModel):
    refund: RefundRead
    payment: PaymentRead


class RefundStatusUpdate(APIModel):
    status: str = Field(..., pattern="^(pending|processing|completed|failed)$")
    remarks: str | None = None


class GatewayConfigRead(APIModel):
    id: int
    name: str
    provider: str
    environment: str
    is_active: bool
    key_id: str | None = None
    supported_methods: list[str] = Field(default_factory=list)
    processing_fee_percent: float
    minimum_amount: float | None = None
    maximum_amount: float | None = None
    created_at: datetime | None = None


class GatewayConfigCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    provider: str = Field(..., min_length=1, max_length=50)
    environment: str = "sandbox"
    is_active: bool = True
    key_id: str | None = None
    key_secret: str | None = None
    webhook_secret: str | None = None
    supported_methods: list[str] = Field(default_factory=list)
    processing_fee_percent: float = Field(default=0, ge=0)
    minimum_amount: float | None = Field(default=None, ge=0)
    maximum_amount: float | None = Field(default=None, ge=0)


class GatewayConfigUpdate(APIModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    environment: str | None = None
    is_active: bool | None = None
    key_id: str | None = None
    key_secret: str | None = None
    webhook_secret: str | None = None
    supported_methods: list[str] | None = None
    processing_fee_percent: float | None = Field(default=None, ge=0)
    minimum_amount: float | None = Field(default=None, ge=0)
    maximum_amount: float | None = Field(default=None, ge=0)


class AmountBreakdown(APIModel):
    count: int
    amount: float


class PaymentStatsRead(APIModel):
    total_payments: int
    total_amount: float
    completed_amount: float
    by_status: dict[str, AmountBreakdown]
    by_type: dict[str, AmountBreakdown]
    by_method: dict[str, AmountBreakdown]


class CheckoutRequest(APIModel):
    amount: float = Field(..., gt=0)
    currency: str = Field(default="INR", min_length=3, max_length=3)
    payment_type: str = Field(..., alias="type", pattern=_PAYMENT_TYPES)
    reference_id: str = Field(..., min_length=1)
    description: str | None = None
    student_id: int | None = None


class OrderRead(APIModel):
    order_id: str
    amount: float
    currency: str
    key: str | None = None
    payment: PaymentRead


class VerifyPaymentRequest(APIModel):
    razorpay_order_id: str = Field(..., alias="razorpayOrderId")
    razorpay_payment_id: str = Field(..., alias="razorpayPaymentId")
    razorpay_signature: str = Field(..., alias="razorpaySignature")


class VerifyPaymentRead(APIModel):
    message: str
    payment: PaymentRead


class GatewayRefundRequest(APIModel):
    payment_id: int
    amount: float | None = Field(default=None, gt=0)
    reason: str | None = None


class GatewayRefundRead(APIModel):
    refund: RefundRead
    payment: PaymentRead
    gateway_refund_id: str | None = None


class GatewayRefundStatusRead(APIModel):
    id: str
    status: str | None = None
    amount: float
    payment_id: str | None = None
    refund: RefundRead | None = None


class PaymentLinkRead(APIModel):
    id: str
    short_url: str | None = None
    payment: PaymentRead


class WebhookAck(APIModel):
    status: str = "ok"
    event: str
    handled: bool
    payment_id: int | None = None


__all__ = [
    "AmountBreakdown",
    "CheckoutRequest",
    "GatewayConfigCreate",
    "GatewayConfigRead",
    "GatewayConfigUpdate",
    "GatewayRefundRead",
    "GatewayRefundRequest",
    "GatewayRefundStatusRead",
    "OrderRead",
    "PaymentCreate",
    "PaymentLinkRead",
    "PaymentMethodCreate",
    "PaymentMethodRead",
    "PaymentMethodUpdate",
    "PaymentRead",
    "PaymentStatsRead",
    "PaymentStatusChangeRead",
    "PaymentStatusUpdate",
    "RefundCreate",
    "RefundRead",
    "RefundResultRead",
    "RefundStatusUpdate",
    "VerifyPaymentRead",
    "VerifyPaymentRequest",
    "WebhookAck",
]
