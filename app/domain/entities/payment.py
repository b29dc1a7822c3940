"""Domain entities for payments and the payment status state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


ALLOWED_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset(
        {
            PaymentStatus.PROCESSING,
            PaymentStatus.COMPLETED,
            PaymentStatus.FAILED,
            PaymentStatus.CANCELLED,
        }
    ),
    PaymentStatus.PROCESSING: frozenset(
        {PaymentStatus.COMPLETED, PaymentStatus.FAILED, PaymentStatus.CANCELLED}
    ),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.CANCELLED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

PAYMENT_TYPES = ("fee", "event", "fine", "other")
PAYMENT_METHODS = ("online", "cash", "cheque", "bank_transfer", "card", "upi")
REFUND_STATUSES = ("pending", "processing", "completed", "failed")


def can_transition(current: PaymentStatus | str, target: PaymentStatus | str) -> bool:
    """Return ``True`` when ``current -> target`` is an allowed edge."""

    return PaymentStatus(target) in ALLOWED_TRANSITIONS[PaymentStatus(current)]


@dataclass
class Payment:
    id: int | None
    student_id: int
    payment_type: str
    amount: float
    status: PaymentStatus = PaymentStatus.PENDING
    currency: str = "INR"
    reference_id: str | None = None
    method: str = "online"
    gateway: str | None = None
    transaction_id: str | None = None
    gateway_order_id: str | None = None
    gateway_payment_id: str | None = None
    gateway_signature: str | None = None
    description: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    paid_at: datetime | None = None
    refund_amount: float | None = None
    refund_reason: str | None = None
    refunded_at: datetime | None = None
    refund_requested_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return PaymentStatus(self.status) in TERMINAL_STATUSES


@dataclass
class TransitionResult:
    """Outcome of a compare-and-swap status change."""

    payment: Payment
    previous: PaymentStatus
    applied: bool


@dataclass
class PaymentMethod:
    id: int | None
    student_id: int
    method_type: str
    provider: str | None = None
    label: str | None = None
    last_four: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    is_default: bool = False
    is_active: bool = True
    created_at: datetime | None = None


@dataclass
class Refund:
    id: int | None
    payment_id: int
    student_id: int
    amount: float
    reason: str
    status: str = "pending"
    gateway_refund_id: str | None = None
    processed_by: int | None = None
    processed_at: datetime | None = None
    remarks: str | None = None
    created_at: datetime | None = None


@dataclass
class PaymentGatewayConfig:
    id: int | None
    name: str
    provider: str
    environment: str = "sandbox"
    is_active: bool = True
    key_id: str | None = None
    key_secret: str | None = None
    webhook_secret: str | None = None
    supported_methods: list[str] = field(default_factory=list)
    processing_fee_percent: float = 0.0
    minimum_amount: float | None = None
    maximum_amount: float | None = None
    created_at: datetime | None = None


__all__ = [
    "ALLOWED_TRANSITIONS",
    "PAYMENT_METHODS",
    "PAYMENT_TYPES",
    "Payment",
    "PaymentGatewayConfig",
    "PaymentMethod",
    "PaymentStatus",
    "REFUND_STATUSES",
    "Refund",
    "TERMINAL_STATUSES",
    "TransitionResult",
    "can_transition",
]
