"""Persistence helpers for refunds."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Refund
from app.infrastructure.models import RefundModel
from app.utils import PageRequest, PageResult, paginate


class RefundRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, refund_id: int) -> Refund | None:
        model = self.session.get(RefundModel, refund_id)
        return self._to_entity(model) if model else None

    def get_by_gateway_refund_id(self, gateway_refund_id: str) -> Refund | None:
        model = (
            self.session.query(RefundModel)
            .filter(RefundModel.gateway_refund_id == gateway_refund_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def search(
        self,
        page: PageRequest,
        *,
        status: str | None = None,
        student_id: int | None = None,
    ) -> PageResult[Refund]:
        query = self.session.query(RefundModel)
        if status:
            query = query.filter(RefundModel.status == status)
        if student_id is not None:
            query = query.filter(RefundModel.student_id == student_id)
        query = query.order_by(RefundModel.created_at.desc(), RefundModel.id.desc())
        rows, total = paginate(query, page)
        return PageResult(
            items=[self._to_entity(model) for model in rows],
            total=total,
            page=page.page,
            limit=page.limit,
        )

    def add(self, refund: Refund, *, commit: bool = True) -> Refund:
        model = RefundModel(
            payment_id=refund.payment_id,
            student_id=refund.student_id,
            amount=refund.amount,
            reason=refund.reason,
            status=refund.status,
            gateway_refund_id=refund.gateway_refund_id,
            processed_by=refund.processed_by,
            processed_at=refund.processed_at,
            remarks=refund.remarks,
        )
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()
        return self._to_entity(model)

    def update(self, refund: Refund) -> Refund:
        model = self.session.get(RefundModel, refund.id)
        if model is None:
            msg = f"Refund with id {refund.id} not found"
            raise ValueError(msg)
        model.status = refund.status
        model.gateway_refund_id = refund.gateway_refund_id
        model.processed_at = refund.processed_at
        model.remarks = refund.remarks
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RefundModel) -> Refund:
        return Refund(
            id=model.id,
            payment_id=model.payment_id,
            student_id=model.student_id,
            amount=float(model.amount),
            reason=model.reason,
            status=model.status,
            gateway_refund_id=model.gateway_refund_id,
            processed_by=model.processed_by,
            processed_at=model.processed_at,
            remarks=model.remarks,
            created_at=model.created_at,
        )


__all__ = ["RefundRepository"]
