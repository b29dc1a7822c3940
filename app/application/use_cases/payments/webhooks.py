"""Reconcile payments from signed Razorpay webhook deliveries."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Payment, PaymentStatus, Refund
from app.domain.errors import DomainError, PaymentTransitionError
from app.infrastructure.payment_gateway import RazorpayGateway, from_subunits
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import PaymentRepository, RefundRepository
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime

from .checkout import publish_payment_update
from .transitions import transition_payment

logger = logging.getLogger(__name__)


@dataclass
class WebhookOutcome:
    event: str
    handled: bool
    payment_id: int | None = None
    applied: bool = False


def _entity(payload: dict[str, Any], name: str) -> dict[str, Any]:
    return ((payload.get(name) or {}).get("entity")) or {}


def _timestamp(value: Any) -> datetime:
    if isinstance(value, (int, float)):
        return ensure_app_naive_datetime(datetime.fromtimestamp(value, tz=timezone.utc))
    return now_in_app_naive_datetime()


class _WebhookProcessor:
    def __init__(self, session: Session, publisher: RealtimePublisher | None) -> None:
        self.session = session
        self.publisher = publisher
        self.payments = PaymentRepository(session)

    def find_payment(self, *, order_id: str | None = None, payment_id: str | None = None) -> Payment | None:
        if order_id:
            payment = self.payments.get_by_gateway_order_id(order_id)
            if payment is not None:
                return payment
        if payment_id:
            return self.payments.get_by_gateway_payment_id(payment_id)
        return None

    def transition(self, event: str, payment: Payment | None, target: PaymentStatus, **fields) -> WebhookOutcome:
        if payment is None:
            logger.warning("Razorpay webhook %s does not match any payment", event)
            return WebhookOutcome(event=event, handled=True)
        try:
            result = transition_payment(self.session, payment.id, target, **fields)
        except PaymentTransitionError as exc:
            logger.warning("Razorpay webhook %s ignored for payment %s: %s", event, payment.id, exc)
            return WebhookOutcome(event=event, handled=True, payment_id=payment.id)
        publish_payment_update(self.publisher, result)
        return WebhookOutcome(
            event=event, handled=True, payment_id=payment.id, applied=result.applied
        )

    def payment_captured(self, event: str, payload: dict[str, Any]) -> WebhookOutcome:
        entity = _entity(payload, "payment")
        payment = self.find_payment(order_id=entity.get("order_id"), payment_id=entity.get("id"))
        if payment is not None and entity.get("id") and not payment.gateway_payment_id:
            self.payments.record_gateway_details(
                payment.id, gateway_payment_id=entity["id"], transaction_id=entity["id"]
            )
        return self.transition(event, payment, PaymentStatus.COMPLETED)

    def order_paid(self, event: str, payload: dict[str, Any]) -> WebhookOutcome:
        order = _entity(payload, "order")
        entity = _entity(payload, "payment")
        payment = self.find_payment(
            order_id=order.get("id") or entity.get("order_id"), payment_id=entity.get("id")
        )
        if payment is not None and entity.get("id") and not payment.gateway_payment_id:
            self.payments.record_gateway_details(
                payment.id, gateway_payment_id=entity["id"], transaction_id=entity["id"]
            )
        return self.transition(event, payment, PaymentStatus.COMPLETED)

    def payment_link_paid(self, event: str, payload: dict[str, Any]) -> WebhookOutcome:
        link = _entity(payload, "payment_link")
        entity = _entity(payload, "payment")
        payment = self.find_payment(order_id=link.get("id"), payment_id=entity.get("id"))
        if payment is not None and entity.get("id") and not payment.gateway_payment_id:
            self.payments.record_gateway_details(
                payment.id, gateway_payment_id=entity["id"], transaction_id=entity["id"]
            )
        return self.transition(event, payment, PaymentStatus.COMPLETED)

    def payment_failed(self, event: str, payload: dict[str, Any]) -> WebhookOutcome:
        entity = _entity(payload, "payment")
        payment = self.find_payment(order_id=entity.get("order_id"), payment_id=entity.get("id"))
        return self.transition(event, payment, PaymentStatus.FAILED)

    def refund(self, event: str, payload: dict[str, Any]) -> WebhookOutcome:
        entity = _entity(payload, "refund")
        payment = self.find_payment(payment_id=entity.get("payment_id"))
        amount = from_subunits(entity.get("amount"))
        outcome = self.transition(
            event,
            payment,
            PaymentStatus.REFUNDED,
            refund_amount=amount,
            refund_reason=(entity.get("notes") or {}).get("reason") or "Refund requested",
            refunded_at=_timestamp(entity.get("created_at")),
        )
        if payment is None:
            return outcome
        current = self.payments.get(payment.id)
        if current is not None and PaymentStatus(current.status) is PaymentStatus.REFUNDED:
            # Gateway amounts are cumulative; store them as given.
            self.payments.record_gateway_details(payment.id, refund_amount=amount)
            self._record_refund(current, entity, amount)
        return outcome

    def _record_refund(self, payment: Payment, entity: dict[str, Any], amount: float) -> None:
        refund_id = entity.get("id")
        if not refund_id:
            return
        refunds = RefundRepository(self.session)
        status = "completed" if entity.get("status") == "processed" else "processing"
        existing = refunds.get_by_gateway_refund_id(refund_id)
        if existing is None:
            refunds.add(
                Refund(
                    id=None,
                    payment_id=payment.id,
                    student_id=payment.student_id,
                    amount=amount,
                    reason=payment.refund_reason or "Refund requested",
                    status=status,
                    gateway_refund_id=refund_id,
                    processed_at=now_in_app_naive_datetime(),
                )
            )
        elif existing.status != status and existing.status != "completed":
            existing.status = status
            refunds.update(existing)


_HANDLERS = {
    "payment.captured": _WebhookProcessor.payment_captured,
    "order.paid": _WebhookProcessor.order_paid,
    "payment_link.paid": _WebhookProcessor.payment_link_paid,
    "payment.failed": _WebhookProcessor.payment_failed,
    "refund.created": _WebhookProcessor.refund,
    "refund.processed": _WebhookProcessor.refund,
}


def handle_webhook(
    session: Session,
    gateway: RazorpayGateway,
    *,
    body: bytes,
    signature: str | None,
    publisher: RealtimePublisher | None = None,
) -> WebhookOutcome:
    """Verify ``body`` against ``signature`` and apply the event it carries.

    Unknown events are acknowledged without changes so the gateway stops
    retrying them.
    """

    if not gateway.verify_webhook_signature(body, signature):
        raise DomainError("Invalid webhook signature")
    try:
        document = json.loads(body)
    except ValueError as exc:
        raise DomainError("Invalid webhook payload") from exc
    if not isinstance(document, dict):
        raise DomainError("Invalid webhook payload")

    event = str(document.get("event") or "")
    handler = _HANDLERS.get(event)
    if handler is None:
        logger.info("Ignoring Razorpay webhook event %s", event or "<missing>")
        return WebhookOutcome(event=event, handled=False)
    return handler(_WebhookProcessor(session, publisher), event, document.get("payload") or {})


__all__ = ["WebhookOutcome", "handle_webhook"]
