"""Use cases for payment gateway configuration records."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import PaymentGatewayConfig
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.repositories import PaymentGatewayConfigRepository

ENVIRONMENTS = ("sandbox", "production")


def _validate(config: PaymentGatewayConfig) -> None:
    if config.environment not in ENVIRONMENTS:
        raise DomainError(f"Environment must be one of: {', '.join(ENVIRONMENTS)}")
    if config.processing_fee_percent < 0:
        raise DomainError("Processing fee cannot be negative")
    if (
        config.minimum_amount is not None
        and config.maximum_amount is not None
        and config.minimum_amount > config.maximum_amount
    ):
        raise DomainError("Minimum amount cannot exceed maximum amount")


def list_gateway_configs(session: Session) -> list[PaymentGatewayConfig]:
    return PaymentGatewayConfigRepository(session).list()


def create_gateway_config(session: Session, values: dict[str, Any]) -> PaymentGatewayConfig:
    config = PaymentGatewayConfig(id=None, **values)
    _validate(config)
    return PaymentGatewayConfigRepository(session).save(config)


def update_gateway_config(
    session: Session, config_id: int, changes: dict[str, Any]
) -> PaymentGatewayConfig:
    """Apply ``changes``; secrets omitted from ``changes`` keep their stored value."""

    repository = PaymentGatewayConfigRepository(session)
    current = repository.get(config_id)
    if current is None:
        raise NotFoundError("Payment gateway not found")
    updated = replace(current, **changes)
    _validate(updated)
    return repository.save(updated)


__all__ = ["create_gateway_config", "list_gateway_configs", "update_gateway_config"]
