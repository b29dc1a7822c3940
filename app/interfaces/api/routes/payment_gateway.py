"""Razorpay checkout, refund and webhook endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases import payments
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.infrastructure.payment_gateway import RazorpayGateway, from_subunits
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import (
    get_current_user,
    get_payment_gateway,
    get_realtime,
    require_admin,
)
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    CheckoutRequest,
    GatewayRefundRead,
    GatewayRefundRequest,
    GatewayRefundStatusRead,
    OrderRead,
    PaymentLinkRead,
    PaymentRead,
    RefundRead,
    VerifyPaymentRead,
    VerifyPaymentRequest,
    WebhookAck,
)

router = APIRouter(prefix="/payment-gateway/razorpay", tags=["payment-gateway"])
logger = logging.getLogger(__name__)


@router.post("/order", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
) -> OrderRead:
    try:
        checkout = payments.create_order(db, gateway, viewer=current_user, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return OrderRead(
        order_id=checkout.order["id"],
        amount=checkout.payment.amount,
        currency=checkout.payment.currency,
        key=checkout.key_id,
        payment=PaymentRead.model_validate(checkout.payment),
    )


@router.post("/verify", response_model=VerifyPaymentRead)
def verify_payment(
    payload: VerifyPaymentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> VerifyPaymentRead:
    try:
        result = payments.verify_payment(
            db,
            gateway,
            viewer=current_user,
            order_id=payload.razorpay_order_id,
            payment_id=payload.razorpay_payment_id,
            signature=payload.razorpay_signature,
            publisher=realtime,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return VerifyPaymentRead(
        message="Payment verified successfully",
        payment=PaymentRead.model_validate(result.payment),
    )


@router.get("/payment/{payment_id}/status", response_model=PaymentRead)
def payment_status(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> PaymentRead:
    try:
        payment = payments.refresh_payment_status(
            db, gateway, payment_id, viewer=current_user, publisher=realtime
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentRead.model_validate(payment)


@router.post("/refund", response_model=GatewayRefundRead, status_code=status.HTTP_201_CREATED)
def refund_payment(
    payload: GatewayRefundRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
) -> GatewayRefundRead:
    try:
        refund, result, remote = payments.refund_payment(
            db,
            gateway,
            payment_id=payload.payment_id,
            processed_by=current_user.id,
            amount=payload.amount,
            reason=payload.reason,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return GatewayRefundRead(
        refund=RefundRead.model_validate(refund),
        payment=PaymentRead.model_validate(result.payment),
        gateway_refund_id=remote.get("id"),
    )


@router.get("/refund/{refund_id}/status", response_model=GatewayRefundStatusRead)
def refund_status(
    refund_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
) -> GatewayRefundStatusRead:
    remote, refund = payments.get_refund_status(db, gateway, refund_id)
    return GatewayRefundStatusRead(
        id=remote.get("id", refund_id),
        status=remote.get("status"),
        amount=from_subunits(remote.get("amount")),
        payment_id=remote.get("payment_id"),
        refund=RefundRead.model_validate(refund) if refund is not None else None,
    )


@router.post("/link", response_model=PaymentLinkRead, status_code=status.HTTP_201_CREATED)
def create_payment_link(
    payload: CheckoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
) -> PaymentLinkRead:
    try:
        checkout = payments.create_payment_link(
            db, gateway, viewer=current_user, **payload.model_dump()
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentLinkRead(
        id=checkout.link["id"],
        short_url=checkout.link.get("short_url"),
        payment=PaymentRead.model_validate(checkout.payment),
    )


@router.post("/webhook", response_model=WebhookAck)
async def webhook(
    request: Request,
    x_razorpay_signature: str | None = Header(default=None),
    db: Session = Depends(get_db),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
    realtime: RealtimePublisher = Depends(get_realtime),
) -> WebhookAck:
    """Signed gateway callback; authenticated by HMAC over the raw body."""

    body = await request.body()
    try:
        outcome = await run_in_threadpool(
            payments.handle_webhook,
            db,
            gateway,
            body=body,
            signature=x_razorpay_signature,
            publisher=realtime,
        )
    except DomainError as exc:
        logger.warning("Rejected Razorpay webhook: %s", exc)
        raise to_http_exception(exc) from exc
    return WebhookAck(event=outcome.event, handled=outcome.handled, payment_id=outcome.payment_id)
