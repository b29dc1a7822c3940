"""The single entry point for payment status changes.

Every status write is a compare-and-swap on the persisted status, so two
concurrent reconcilers (checkout verification and the gateway webhook, for
instance) cannot both apply the same transition. Side effects attached to a
transition run only for the caller whose swap succeeded.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Payment, PaymentStatus, TransitionResult, can_transition
from app.domain.errors import NotFoundError, PaymentTransitionError
from app.infrastructure.repositories import FeeRepository, PaymentRepository
from app.utils import now_in_app_naive_datetime

logger = logging.getLogger(__name__)

# Re-reads allowed when another writer moves the status between read and swap.
MAX_ATTEMPTS = 3


def _apply_completion_effects(session: Session, payment: Payment) -> None:
    """Credit the referenced fee once the payment is completed."""

    if payment.payment_type != "fee" or not payment.reference_id:
        return
    try:
        fee_id = int(payment.reference_id)
    except ValueError:
        logger.warning(
            "Payment %s references non numeric fee %r; ledger not updated",
            payment.id,
            payment.reference_id,
        )
        return
    if FeeRepository(session).credit(fee_id, payment.amount) is None:
        logger.warning("Payment %s references missing fee %s", payment.id, fee_id)


def _default_fields(target: PaymentStatus, payment: Payment, fields: dict[str, Any]) -> dict[str, Any]:
    values = dict(fields)
    now = now_in_app_naive_datetime()
    if target is PaymentStatus.COMPLETED:
        values.setdefault("paid_at", now)
    elif target is PaymentStatus.REFUNDED:
        values.setdefault("refunded_at", now)
        values.setdefault("refund_amount", payment.amount)
    return values


def transition_payment(
    session: Session,
    payment_id: int,
    target: PaymentStatus | str,
    *,
    expected: PaymentStatus | str | None = None,
    **fields: Any,
) -> TransitionResult:
    """Move ``payment_id`` to ``target`` if the state machine allows it.

    ``expected`` pins the status the caller believes is current; a mismatch is
    rejected unless the payment already sits in ``target``. Re-asserting the
    current status returns ``applied=False`` without writing anything.
    """

    repository = PaymentRepository(session)
    target = PaymentStatus(target)
    expected = PaymentStatus(expected) if expected is not None else None

    payment = repository.get(payment_id)
    for _ in range(MAX_ATTEMPTS):
        if payment is None:
            raise NotFoundError("Payment not found")
        current = PaymentStatus(payment.status)

        if current is target:
            return TransitionResult(payment=payment, previous=current, applied=False)
        if expected is not None and current is not expected:
            raise PaymentTransitionError(current.value, target.value)
        if not can_transition(current, target):
            raise PaymentTransitionError(current.value, target.value)

        swapped = repository.compare_and_set_status(
            payment_id,
            expected=current,
            target=target,
            fields=_default_fields(target, payment, fields),
        )
        if swapped:
            if target is PaymentStatus.COMPLETED:
                _apply_completion_effects(session, payment)
            session.commit()
            logger.info(
                "Payment %s moved from %s to %s", payment_id, current.value, target.value
            )
            return TransitionResult(
                payment=repository.get(payment_id), previous=current, applied=True
            )

        session.rollback()
        payment = repository.get(payment_id)

    current = PaymentStatus(payment.status) if payment else target
    raise PaymentTransitionError(current.value, target.value)


__all__ = ["transition_payment"]
