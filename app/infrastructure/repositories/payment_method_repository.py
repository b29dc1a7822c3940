"""Persistence helpers for saved payment methods."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import PaymentMethod
from app.infrastructure.models import PaymentMethodModel

_FIELDS = (
    "method_type",
    "provider",
    "label",
    "last_four",
    "expiry_month",
    "expiry_year",
    "is_default",
    "is_active",
)


class PaymentMethodRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, method_id: int) -> PaymentMethod | None:
        model = self.session.get(PaymentMethodModel, method_id)
        return self._to_entity(model) if model else None

    def list_active_for_student(self, student_id: int) -> list[PaymentMethod]:
        query = (
            self.session.query(PaymentMethodModel)
            .filter(PaymentMethodModel.student_id == student_id)
            .filter(PaymentMethodModel.is_active.is_(True))
            .order_by(PaymentMethodModel.is_default.desc(), PaymentMethodModel.created_at.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def save(self, method: PaymentMethod) -> PaymentMethod:
        """Insert or update ``method``; a default method clears the student's others."""

        if method.id is None:
            model = PaymentMethodModel(student_id=method.student_id)
            self.session.add(model)
        else:
            model = self.session.get(PaymentMethodModel, method.id)
            if model is None:
                msg = f"Payment method with id {method.id} not found"
                raise ValueError(msg)
        for name in _FIELDS:
            setattr(model, name, getattr(method, name))
        if method.is_default:
            query = self.session.query(PaymentMethodModel).filter(
                PaymentMethodModel.student_id == method.student_id
            )
            if method.id is not None:
                query = query.filter(PaymentMethodModel.id != method.id)
            query.update({PaymentMethodModel.is_default: False}, synchronize_session=False)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: PaymentMethodModel) -> PaymentMethod:
        return PaymentMethod(
            id=model.id,
            student_id=model.student_id,
            created_at=model.created_at,
            **{name: getattr(model, name) for name in _FIELDS},
        )


__all__ = ["PaymentMethodRepository"]
