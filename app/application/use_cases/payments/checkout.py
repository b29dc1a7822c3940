"""Use cases for paying through the Razorpay gateway."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Payment, PaymentStatus, Refund, TransitionResult, User, UserRole
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.payment_gateway import PaymentGatewayError, RazorpayGateway
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import PaymentRepository, RefundRepository
from app.utils import now_in_app_naive_datetime

from .records import ensure_student, get_payment, validate_reference
from .refunds import issue_gateway_refund
from .transitions import transition_payment

logger = logging.getLogger(__name__)

GATEWAY_NAME = "razorpay"

# Gateway payment states mapped onto local payment states.
PAYMENT_STATUS_MAP = {
    "captured": PaymentStatus.COMPLETED,
    "authorized": PaymentStatus.PROCESSING,
    "failed": PaymentStatus.FAILED,
}

ORDER_STATUS_MAP = {
    "paid": PaymentStatus.COMPLETED,
    "attempted": PaymentStatus.PROCESSING,
}


@dataclass
class CheckoutOrder:
    payment: Payment
    order: dict[str, Any]
    key_id: str | None


@dataclass
class CheckoutLink:
    payment: Payment
    link: dict[str, Any]


def _receipt() -> str:
    stamp = now_in_app_naive_datetime().strftime("%Y%m%d%H%M%S")
    return f"rcpt_{stamp}_{secrets.token_hex(4)}"


def _resolve_student(session: Session, viewer: User, student_id: int | None) -> int:
    if viewer.role is UserRole.STUDENT:
        return viewer.id
    if student_id is None:
        raise DomainError("Student is required")
    ensure_student(session, student_id)
    return student_id


def publish_payment_update(
    publisher: RealtimePublisher | None, result: TransitionResult
) -> None:
    if publisher is None or not result.applied:
        return
    payment = result.payment
    publisher.to_user(
        payment.student_id,
        "payment-updated",
        {
            "paymentId": payment.id,
            "status": PaymentStatus(payment.status).value,
            "previousStatus": result.previous.value,
            "amount": payment.amount,
        },
    )


def create_order(
    session: Session,
    gateway: RazorpayGateway,
    *,
    viewer: User,
    amount: float,
    payment_type: str,
    reference_id: str,
    currency: str = "INR",
    description: str | None = None,
    student_id: int | None = None,
) -> CheckoutOrder:
    """Create a gateway order, then the local ``pending`` payment that tracks it."""

    owner_id = _resolve_student(session, viewer, student_id)
    if amount <= 0:
        raise DomainError("Amount must be greater than zero")
    validate_reference(
        session, student_id=owner_id, payment_type=payment_type, reference_id=reference_id
    )
    description = description or f"{payment_type} payment"

    order = gateway.create_order(
        amount=amount,
        currency=currency.upper(),
        receipt=_receipt(),
        notes={
            "studentId": str(owner_id),
            "type": payment_type,
            "referenceId": str(reference_id),
            "description": description,
        },
    )
    payment = PaymentRepository(session).create(
        Payment(
            id=None,
            student_id=owner_id,
            payment_type=payment_type,
            amount=amount,
            currency=currency.upper(),
            reference_id=str(reference_id),
            method="online",
            gateway=GATEWAY_NAME,
            gateway_order_id=order["id"],
            description=description,
        )
    )
    return CheckoutOrder(payment=payment, order=order, key_id=gateway.key_id)


def verify_payment(
    session: Session,
    gateway: RazorpayGateway,
    *,
    viewer: User,
    order_id: str,
    payment_id: str,
    signature: str,
    publisher: RealtimePublisher | None = None,
) -> TransitionResult:
    """Check the checkout signature and complete the matching payment."""

    if not gateway.verify_payment_signature(order_id, payment_id, signature):
        raise DomainError("Payment verification failed")

    repository = PaymentRepository(session)
    payment = repository.get_by_gateway_order_id(order_id)
    if payment is None or (
        viewer.role is UserRole.STUDENT and payment.student_id != viewer.id
    ):
        raise NotFoundError("Payment record not found")

    repository.record_gateway_details(
        payment.id,
        gateway_payment_id=payment_id,
        gateway_signature=signature,
        transaction_id=payment_id,
    )
    result = transition_payment(session, payment.id, PaymentStatus.COMPLETED)
    publish_payment_update(publisher, result)
    return result


def refresh_payment_status(
    session: Session,
    gateway: RazorpayGateway,
    payment_id: int,
    *,
    viewer: User,
    publisher: RealtimePublisher | None = None,
) -> Payment:
    """Reconcile a non-terminal gateway payment with the gateway's view of it.

    Gateway failures are logged and the stored state is returned unchanged.
    """

    payment = get_payment(session, payment_id, viewer=viewer)
    if payment.is_terminal or payment.gateway != GATEWAY_NAME or not payment.gateway_order_id:
        return payment

    try:
        if payment.gateway_payment_id:
            remote = gateway.fetch_payment(payment.gateway_payment_id)
            target = PAYMENT_STATUS_MAP.get(remote.get("status"))
        else:
            remote = gateway.fetch_order(payment.gateway_order_id)
            target = ORDER_STATUS_MAP.get(remote.get("status"))
    except PaymentGatewayError as exc:
        logger.warning("Could not refresh payment %s: %s", payment.id, exc)
        return payment

    if target is None:
        return payment
    result = transition_payment(session, payment.id, target)
    publish_payment_update(publisher, result)
    return result.payment


def refund_payment(
    session: Session,
    gateway: RazorpayGateway,
    *,
    payment_id: int,
    processed_by: int,
    amount: float | None = None,
    reason: str | None = None,
) -> tuple[Refund, TransitionResult, dict]:
    reason = reason or "Refund requested"

    def request_refund(payment: Payment, refund_amount: float) -> dict:
        return gateway.refund_payment(
            payment.gateway_payment_id,
            amount=refund_amount,
            notes={"reason": reason, "paymentId": str(payment.id)},
        )

    return issue_gateway_refund(
        session,
        payment_id=payment_id,
        processed_by=processed_by,
        reason=reason,
        amount=amount,
        request_refund=request_refund,
    )


def get_refund_status(
    session: Session, gateway: RazorpayGateway, gateway_refund_id: str
) -> tuple[dict[str, Any], Refund | None]:
    """Fetch a refund from the gateway and mirror its state locally."""

    remote = gateway.fetch_refund(gateway_refund_id)
    repository = RefundRepository(session)
    refund = repository.get_by_gateway_refund_id(gateway_refund_id)
    if refund is not None and remote.get("status") == "processed" and refund.status != "completed":
        refund.status = "completed"
        refund.processed_at = refund.processed_at or now_in_app_naive_datetime()
        refund = repository.update(refund)
    return remote, refund


def create_payment_link(
    session: Session,
    gateway: RazorpayGateway,
    *,
    viewer: User,
    amount: float,
    payment_type: str,
    reference_id: str,
    currency: str = "INR",
    description: str | None = None,
    student_id: int | None = None,
) -> CheckoutLink:
    """Create a hosted payment link and a ``pending`` payment keyed by the link id."""

    owner_id = _resolve_student(session, viewer, student_id)
    if amount <= 0:
        raise DomainError("Amount must be greater than zero")
    validate_reference(
        session, student_id=owner_id, payment_type=payment_type, reference_id=reference_id
    )
    student = ensure_student(session, owner_id)
    description = description or f"{payment_type} payment"

    link = gateway.create_payment_link(
        amount=amount,
        currency=currency.upper(),
        description=description,
        customer={
            "name": student.profile.full_name,
            "email": student.email,
            "contact": student.profile.phone or "",
        },
        reference_id=_receipt(),
        notes={"studentId": str(owner_id), "type": payment_type, "referenceId": str(reference_id)},
    )
    payment = PaymentRepository(session).create(
        Payment(
            id=None,
            student_id=owner_id,
            payment_type=payment_type,
            amount=amount,
            currency=currency.upper(),
            reference_id=str(reference_id),
            method="online",
            gateway=GATEWAY_NAME,
            gateway_order_id=link["id"],
            description=description,
            payload={"shortUrl": link.get("short_url")},
        )
    )
    return CheckoutLink(payment=payment, link=link)


__all__ = [
    "CheckoutLink",
    "CheckoutOrder",
    "ORDER_STATUS_MAP",
    "PAYMENT_STATUS_MAP",
    "create_order",
    "create_payment_link",
    "get_refund_status",
    "publish_payment_update",
    "refresh_payment_status",
    "refund_payment",
    "verify_payment",
]
