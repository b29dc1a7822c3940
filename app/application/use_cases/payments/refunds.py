"""Use cases for refunds and the guard against issuing one twice."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import (
    REFUND_STATUSES,
    Payment,
    PaymentStatus,
    Refund,
    TransitionResult,
)
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.repositories import PaymentRepository, RefundRepository
from app.utils import PageRequest, PageResult, now_in_app_naive_datetime

from .records import get_payment
from .transitions import transition_payment

logger = logging.getLogger(__name__)


def validate_refund_request(payment: Payment, amount: float | None) -> float:
    """Return the refund amount, defaulting to the full payment amount."""

    if PaymentStatus(payment.status) is not PaymentStatus.COMPLETED:
        raise DomainError("Payment must be completed to create refund")
    refund_amount = payment.amount if amount is None else amount
    if refund_amount <= 0 or refund_amount > payment.amount:
        raise DomainError("Refund amount must be greater than zero and not exceed the payment")
    return round(refund_amount, 2)


@contextmanager
def refund_claim(session: Session, payment_id: int) -> Iterator[None]:
    """Hold the in-flight refund marker for ``payment_id``.

    The marker is released when the body raises. Once the body returns the
    marker stays, so wrap only work that can still be undone.
    """

    repository = PaymentRepository(session)
    if not repository.claim_refund(payment_id):
        raise DomainError("Refund already in progress")
    try:
        yield
    except Exception:
        session.rollback()
        repository.release_refund_claim(payment_id)
        raise


def _complete_offline_refund(
    session: Session, *, payment: Payment, refund: Refund, reason: str
) -> tuple[Refund, TransitionResult]:
    saved = RefundRepository(session).add(refund, commit=False)
    result = transition_payment(
        session,
        payment.id,
        PaymentStatus.REFUNDED,
        expected=PaymentStatus.COMPLETED,
        refund_amount=refund.amount,
        refund_reason=reason,
    )
    if not result.applied:
        raise DomainError("Payment already refunded")
    return saved, result


def _save_gateway_refund(session: Session, refund: Refund) -> Refund:
    """Store the gateway refund, merging with a row a webhook may have written."""

    repository = RefundRepository(session)
    existing = (
        repository.get_by_gateway_refund_id(refund.gateway_refund_id)
        if refund.gateway_refund_id
        else None
    )
    if existing is None:
        return repository.add(refund)
    if existing.status == "completed":
        return existing
    return repository.update(replace(existing, status=refund.status))


def create_refund(
    session: Session,
    *,
    payment_id: int,
    processed_by: int,
    reason: str,
    amount: float | None = None,
    remarks: str | None = None,
) -> tuple[Refund, TransitionResult]:
    """Issue an offline refund for a completed payment."""

    payment = get_payment(session, payment_id)
    refund_amount = validate_refund_request(payment, amount)

    with refund_claim(session, payment.id):
        refund = Refund(
            id=None,
            payment_id=payment.id,
            student_id=payment.student_id,
            amount=refund_amount,
            reason=reason,
            status="completed",
            processed_by=processed_by,
            processed_at=now_in_app_naive_datetime(),
            remarks=remarks,
        )
        return _complete_offline_refund(session, payment=payment, refund=refund, reason=reason)


def issue_gateway_refund(
    session: Session,
    *,
    payment_id: int,
    processed_by: int,
    reason: str,
    amount: float | None,
    request_refund: Callable[[Payment, float], dict],
) -> tuple[Refund, TransitionResult, dict]:
    """Refund through the gateway while holding the in-flight marker.

    ``request_refund`` performs the gateway call and returns its refund
    document. Only a failed gateway call releases the marker; after the
    gateway has accepted the refund the row is committed before the payment
    status moves, and the marker is kept.
    """

    payment = get_payment(session, payment_id)
    refund_amount = validate_refund_request(payment, amount)
    if not payment.gateway_payment_id:
        raise DomainError("Payment has no gateway payment id")

    with refund_claim(session, payment.id):
        gateway_refund = request_refund(payment, refund_amount)

    saved = _save_gateway_refund(
        session,
        Refund(
            id=None,
            payment_id=payment.id,
            student_id=payment.student_id,
            amount=refund_amount,
            reason=reason,
            status="completed" if gateway_refund.get("status") == "processed" else "processing",
            gateway_refund_id=gateway_refund.get("id"),
            processed_by=processed_by,
            processed_at=now_in_app_naive_datetime(),
        ),
    )
    result = transition_payment(
        session,
        payment.id,
        PaymentStatus.REFUNDED,
        expected=PaymentStatus.COMPLETED,
        refund_amount=refund_amount,
        refund_reason=reason,
    )
    if not result.applied:
        logger.info("Payment %s was already refunded by the gateway webhook", payment.id)
    return saved, result, gateway_refund


def list_refunds(
    session: Session,
    *,
    page: PageRequest,
    status: str | None = None,
    student_id: int | None = None,
) -> PageResult[Refund]:
    return RefundRepository(session).search(page, status=status, student_id=student_id)


def update_refund_status(
    session: Session, refund_id: int, *, status: str, remarks: str | None = None
) -> Refund:
    if status not in REFUND_STATUSES:
        raise DomainError(f"Invalid refund status: {status}")
    repository = RefundRepository(session)
    refund = repository.get(refund_id)
    if refund is None:
        raise NotFoundError("Refund not found")
    processed_at = refund.processed_at
    if status in ("completed", "failed"):
        processed_at = processed_at or now_in_app_naive_datetime()
    updated = replace(
        refund,
        status=status,
        remarks=remarks if remarks is not None else refund.remarks,
        processed_at=processed_at,
    )
    return repository.update(updated)


__all__ = [
    "create_refund",
    "issue_gateway_refund",
    "list_refunds",
    "refund_claim",
    "update_refund_status",
    "validate_refund_request",
]
