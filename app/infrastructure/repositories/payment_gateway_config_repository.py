"""Persistence helpers for payment gateway configuration records."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import PaymentGatewayConfig
from app.infrastructure.models import PaymentGatewayConfigModel

_FIELDS = (
    "name",
    "provider",
    "environment",
    "is_active",
    "key_id",
    "key_secret",
    "webhook_secret",
    "processing_fee_percent",
    "minimum_amount",
    "maximum_amount",
)


class PaymentGatewayConfigRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, config_id: int) -> PaymentGatewayConfig | None:
        model = self.session.get(PaymentGatewayConfigModel, config_id)
        return self._to_entity(model) if model else None

    def list(self) -> list[PaymentGatewayConfig]:
        query = self.session.query(PaymentGatewayConfigModel).order_by(
            PaymentGatewayConfigModel.name
        )
        return [self._to_entity(model) for model in query.all()]

    def save(self, config: PaymentGatewayConfig) -> PaymentGatewayConfig:
        if config.id is None:
            model = PaymentGatewayConfigModel()
            self.session.add(model)
        else:
            model = self.session.get(PaymentGatewayConfigModel, config.id)
            if model is None:
                msg = f"Payment gateway with id {config.id} not found"
                raise ValueError(msg)
        for name in _FIELDS:
            setattr(model, name, getattr(config, name))
        model.supported_methods = list(config.supported_methods)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: PaymentGatewayConfigModel) -> PaymentGatewayConfig:
        return PaymentGatewayConfig(
            id=model.id,
            supported_methods=list(model.supported_methods or []),
            created_at=model.created_at,
            **{name: getattr(model, name) for name in _FIELDS},
        )


__all__ = ["PaymentGatewayConfigRepository"]
