"""Use cases for payment records."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import (
    PAYMENT_METHODS,
    PAYMENT_TYPES,
    Payment,
    PaymentStatus,
    TransitionResult,
    User,
    UserRole,
)
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.repositories import FeeRepository, PaymentRepository, UserRepository
from app.utils import PageRequest, PageResult

from .transitions import transition_payment


def ensure_student(session: Session, student_id: int) -> User:
    student = UserRepository(session).get(student_id)
    if student is None or student.role is not UserRole.STUDENT:
        raise DomainError("Student does not exist")
    return student


def validate_reference(
    session: Session, *, student_id: int, payment_type: str, reference_id: str | None
) -> None:
    """Check the payment type and, for fees, that the fee belongs to the student."""

    if payment_type not in PAYMENT_TYPES:
        raise DomainError(f"Invalid payment type: {payment_type}")
    if payment_type != "fee" or not reference_id:
        return
    fee = FeeRepository(session).get(int(reference_id)) if str(reference_id).isdigit() else None
    if fee is None or fee.student_id != student_id:
        raise DomainError("Fee reference does not exist for this student")


def list_payments(
    session: Session,
    *,
    viewer: User,
    page: PageRequest,
    status: str | None = None,
    payment_type: str | None = None,
    student_id: int | None = None,
) -> PageResult[Payment]:
    """List payments; students only ever see their own."""

    if viewer.role is UserRole.STUDENT:
        student_id = viewer.id
    return PaymentRepository(session).search(
        page, status=status, payment_type=payment_type, student_id=student_id
    )


def get_payment(session: Session, payment_id: int, *, viewer: User | None = None) -> Payment:
    payment = PaymentRepository(session).get(payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    if viewer is not None and viewer.role is UserRole.STUDENT and payment.student_id != viewer.id:
        raise NotFoundError("Payment not found")
    return payment


def create_payment(
    session: Session,
    *,
    viewer: User,
    student_id: int | None,
    payment_type: str,
    amount: float,
    method: str = "cash",
    currency: str = "INR",
    reference_id: str | None = None,
    description: str | None = None,
    transaction_id: str | None = None,
) -> Payment:
    """Record an offline payment in ``pending``; it completes via a status update."""

    if viewer.role is UserRole.STUDENT:
        student_id = viewer.id
    if student_id is None:
        raise DomainError("Student is required")
    ensure_student(session, student_id)
    if amount <= 0:
        raise DomainError("Amount must be greater than zero")
    if method not in PAYMENT_METHODS:
        raise DomainError(f"Invalid payment method: {method}")
    validate_reference(
        session, student_id=student_id, payment_type=payment_type, reference_id=reference_id
    )

    payment = Payment(
        id=None,
        student_id=student_id,
        payment_type=payment_type,
        amount=amount,
        status=PaymentStatus.PENDING,
        currency=currency.upper(),
        reference_id=reference_id,
        method=method,
        transaction_id=transaction_id,
        description=description or f"{payment_type} payment",
    )
    return PaymentRepository(session).create(payment)


def update_payment_status(
    session: Session,
    payment_id: int,
    *,
    status: str,
    transaction_id: str | None = None,
) -> TransitionResult:
    """Administrative status change, routed through the state machine."""

    try:
        target = PaymentStatus(status)
    except ValueError as exc:
        raise DomainError(f"Invalid payment status: {status}") from exc
    fields = {"transaction_id": transaction_id} if transaction_id else {}
    return transition_payment(session, payment_id, target, **fields)


def get_payment_stats(session: Session) -> dict[str, object]:
    return PaymentRepository(session).stats()


__all__ = [
    "create_payment",
    "ensure_student",
    "get_payment",
    "get_payment_stats",
    "list_payments",
    "update_payment_status",
    "validate_reference",
]
