"""Endpoints for payment records, saved methods, refunds and gateway settings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases import payments
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user, get_page_request, require_admin
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    GatewayConfigCreate,
    GatewayConfigRead,
    GatewayConfigUpdate,
    Page,
    PaymentCreate,
    PaymentMethodCreate,
    PaymentMethodRead,
    PaymentMethodUpdate,
    PaymentRead,
    PaymentStatsRead,
    PaymentStatusChangeRead,
    PaymentStatusUpdate,
    RefundCreate,
    RefundRead,
    RefundResultRead,
    RefundStatusUpdate,
    page_of,
)
from app.utils import PageRequest

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/payments", response_model=Page[PaymentRead])
def list_payments(
    status_filter: str | None = Query(default=None, alias="status"),
    payment_type: str | None = Query(default=None, alias="type"),
    student_id: int | None = Query(default=None, alias="studentId"),
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Page[PaymentRead]:
    """Students only ever see their own payments."""

    result = payments.list_payments(
        db,
        viewer=current_user,
        page=page,
        status=status_filter,
        payment_type=payment_type,
        student_id=student_id,
    )
    return page_of(PaymentRead, result)


@router.get("/payments/{payment_id}", response_model=PaymentRead)
def read_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaymentRead:
    try:
        payment = payments.get_payment(db, payment_id, viewer=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentRead.model_validate(payment)


@router.post("/payments", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaymentRead:
    try:
        payment = payments.create_payment(db, viewer=current_user, **payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentRead.model_validate(payment)


@router.put("/payments/{payment_id}/status", response_model=PaymentStatusChangeRead)
def update_payment_status(
    payment_id: int,
    payload: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> PaymentStatusChangeRead:
    try:
        result = payments.update_payment_status(
            db, payment_id, status=payload.status, transaction_id=payload.transaction_id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentStatusChangeRead.model_validate(result)


@router.get("/student/{student_id}/methods", response_model=list[PaymentMethodRead])
def list_methods(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[PaymentMethodRead]:
    try:
        methods = payments.list_student_methods(db, student_id, viewer=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [PaymentMethodRead.model_validate(method) for method in methods]


@router.post("/methods", response_model=PaymentMethodRead, status_code=status.HTTP_201_CREATED)
def add_method(
    payload: PaymentMethodCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaymentMethodRead:
    values = payload.model_dump()
    student_id = values.pop("student_id")
    try:
        method = payments.add_payment_method(
            db, viewer=current_user, student_id=student_id, values=values
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentMethodRead.model_validate(method)


@router.put("/methods/{method_id}", response_model=PaymentMethodRead)
def update_method(
    method_id: int,
    payload: PaymentMethodUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PaymentMethodRead:
    try:
        method = payments.update_payment_method(
            db, method_id, viewer=current_user, changes=payload.model_dump(exclude_unset=True)
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return PaymentMethodRead.model_validate(method)


@router.delete("/methods/{method_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_method(
    method_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        payments.remove_payment_method(db, method_id, viewer=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refunds", response_model=RefundResultRead, status_code=status.HTTP_201_CREATED)
def create_refund(
    payload: RefundCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> RefundResultRead:
    try:
        refund, result = payments.create_refund(
            db,
            payment_id=payload.payment_id,
            processed_by=current_user.id,
            reason=payload.reason,
            amount=payload.amount,
            remarks=payload.remarks,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RefundResultRead(
        refund=RefundRead.model_validate(refund), payment=PaymentRead.model_validate(result.payment)
    )


@router.get("/refunds", response_model=Page[RefundRead])
def list_refunds(
    status_filter: str | None = Query(default=None, alias="status"),
    student_id: int | None = Query(default=None, alias="studentId"),
    page: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> Page[RefundRead]:
    result = payments.list_refunds(db, page=page, status=status_filter, student_id=student_id)
    return page_of(RefundRead, result)


@router.put("/refunds/{refund_id}/status", response_model=RefundRead)
def update_refund_status(
    refund_id: int,
    payload: RefundStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> RefundRead:
    try:
        refund = payments.update_refund_status(
            db, refund_id, status=payload.status, remarks=payload.remarks
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return RefundRead.model_validate(refund)


@router.get("/gateways", response_model=list[GatewayConfigRead])
def list_gateways(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[GatewayConfigRead]:
    return [GatewayConfigRead.model_validate(item) for item in payments.list_gateway_configs(db)]


@router.post("/gateways", response_model=GatewayConfigRead, status_code=status.HTTP_201_CREATED)
def create_gateway(
    payload: GatewayConfigCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GatewayConfigRead:
    try:
        config = payments.create_gateway_config(db, payload.model_dump())
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return GatewayConfigRead.model_validate(config)


@router.put("/gateways/{config_id}", response_model=GatewayConfigRead)
def update_gateway(
    config_id: int,
    payload: GatewayConfigUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> GatewayConfigRead:
    try:
        config = payments.update_gateway_config(
            db, config_id, payload.model_dump(exclude_unset=True)
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return GatewayConfigRead.model_validate(config)


@router.get("/stats", response_model=PaymentStatsRead)
def payment_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> PaymentStatsRead:
    return PaymentStatsRead.model_validate(payments.get_payment_stats(db))
