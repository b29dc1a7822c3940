"""Persistence helpers for payments, including compare-and-swap status writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Payment, PaymentStatus
from app.infrastructure.models import PaymentModel
from app.utils import PageRequest, PageResult, now_in_app_naive_datetime, paginate

# Columns a status transition may write together with ``status``.
TRANSITION_FIELDS = frozenset(
    {
        "transaction_id",
        "gateway_payment_id",
        "gateway_signature",
        "paid_at",
        "refund_amount",
        "refund_reason",
        "refunded_at",
        "refund_requested_at",
    }
)


class PaymentRepository:
    """Provide CRUD operations for :class:`Payment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, payment_id: int) -> Payment | None:
        model = self.session.get(PaymentModel, payment_id, populate_existing=True)
        return self._to_entity(model) if model else None

    def get_by_gateway_order_id(self, order_id: str) -> Payment | None:
        model = (
            self.session.query(PaymentModel)
            .filter(PaymentModel.gateway_order_id == order_id)
            .populate_existing()
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_gateway_payment_id(self, gateway_payment_id: str) -> Payment | None:
        model = (
            self.session.query(PaymentModel)
            .filter(PaymentModel.gateway_payment_id == gateway_payment_id)
            .populate_existing()
            .first()
        )
        return self._to_entity(model) if model else None

    def search(
        self,
        page: PageRequest,
        *,
        status: str | None = None,
        payment_type: str | None = None,
        student_id: int | None = None,
    ) -> PageResult[Payment]:
        query = self.session.query(PaymentModel)
        if status:
            query = query.filter(PaymentModel.status == status)
        if payment_type:
            query = query.filter(PaymentModel.payment_type == payment_type)
        if student_id is not None:
            query = query.filter(PaymentModel.student_id == student_id)
        query = query.order_by(PaymentModel.created_at.desc(), PaymentModel.id.desc())
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def create(self, payment: Payment) -> Payment:
        model = PaymentModel(
            student_id=payment.student_id,
            payment_type=payment.payment_type,
            reference_id=payment.reference_id,
            amount=payment.amount,
            currency=payment.currency,
            status=PaymentStatus(payment.status).value,
            method=payment.method,
            gateway=payment.gateway,
            transaction_id=payment.transaction_id,
            gateway_order_id=payment.gateway_order_id,
            description=payment.description,
            payload=payment.payload or {},
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def record_gateway_details(self, payment_id: int, **fields: Any) -> None:
        """Write gateway details that leave ``status`` untouched."""

        allowed = {
            "gateway_payment_id",
            "gateway_signature",
            "transaction_id",
            "payload",
            "refund_amount",
        }
        unknown = set(fields) - allowed
        if unknown:
            msg = f"Unsupported payment fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        if not fields:
            return
        self.session.query(PaymentModel).filter(PaymentModel.id == payment_id).update(
            {getattr(PaymentModel, name): value for name, value in fields.items()},
            synchronize_session=False,
        )
        self.session.commit()

    def compare_and_set_status(
        self,
        payment_id: int,
        *,
        expected: PaymentStatus,
        target: PaymentStatus,
        fields: dict[str, Any] | None = None,
    ) -> bool:
        """Set ``status`` to ``target`` only if it still equals ``expected``.

        The caller owns the transaction; nothing is committed here.
        """

        extra = dict(fields or {})
        unknown = set(extra) - TRANSITION_FIELDS
        if unknown:
            msg = f"Unsupported payment fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        values = {
            PaymentModel.status: target.value,
            PaymentModel.updated_at: now_in_app_naive_datetime(),
        }
        values.update({getattr(PaymentModel, name): value for name, value in extra.items()})
        updated = (
            self.session.query(PaymentModel)
            .filter(PaymentModel.id == payment_id)
            .filter(PaymentModel.status == expected.value)
            .update(values, synchronize_session=False)
        )
        return updated == 1

    def claim_refund(self, payment_id: int) -> bool:
        """Mark a completed payment as having a refund in flight."""

        updated = (
            self.session.query(PaymentModel)
            .filter(PaymentModel.id == payment_id)
            .filter(PaymentModel.status == PaymentStatus.COMPLETED.value)
            .filter(PaymentModel.refund_requested_at.is_(None))
            .update(
                {PaymentModel.refund_requested_at: now_in_app_naive_datetime()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    def release_refund_claim(self, payment_id: int) -> None:
        self.session.query(PaymentModel).filter(PaymentModel.id == payment_id).filter(
            PaymentModel.status == PaymentStatus.COMPLETED.value
        ).update({PaymentModel.refund_requested_at: None}, synchronize_session=False)
        self.session.commit()

    def stats(self) -> dict[str, object]:
        total_payments, total_amount = self.session.query(
            func.count(PaymentModel.id), func.coalesce(func.sum(PaymentModel.amount), 0)
        ).one()
        completed_amount = (
            self.session.query(func.coalesce(func.sum(PaymentModel.amount), 0))
            .filter(PaymentModel.status == PaymentStatus.COMPLETED.value)
            .scalar()
        )

        def _grouped(column) -> dict[str, dict[str, float]]:
            rows = (
                self.session.query(
                    column, func.count(PaymentModel.id), func.coalesce(func.sum(PaymentModel.amount), 0)
                )
                .group_by(column)
                .all()
            )
            return {key: {"count": count, "amount": float(amount)} for key, count, amount in rows}

        return {
            "total_payments": total_payments,
            "total_amount": float(total_amount),
            "completed_amount": float(completed_amount or 0),
            "by_status": _grouped(PaymentModel.status),
            "by_type": _grouped(PaymentModel.payment_type),
            "by_method": _grouped(PaymentModel.method),
        }

    @staticmethod
    def _to_entity(model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            student_id=model.student_id,
            payment_type=model.payment_type,
            amount=float(model.amount),
            status=PaymentStatus(model.status),
            currency=model.currency,
            reference_id=model.reference_id,
            method=model.method,
            gateway=model.gateway,
            transaction_id=model.transaction_id,
            gateway_order_id=model.gateway_order_id,
            gateway_payment_id=model.gateway_payment_id,
            gateway_signature=model.gateway_signature,
            description=model.description,
            payload=model.payload or {},
            paid_at=model.paid_at,
            refund_amount=float(model.refund_amount) if model.refund_amount is not None else None,
            refund_reason=model.refund_reason,
            refunded_at=model.refunded_at,
            refund_requested_at=model.refund_requested_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["PaymentRepository", "TRANSITION_FIELDS"]
