"""Use cases for saved payment methods."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import PAYMENT_METHODS, PaymentMethod, User, UserRole
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.repositories import PaymentMethodRepository

from .records import ensure_student


def _owner_id(viewer: User, student_id: int | None) -> int:
    if viewer.role is UserRole.STUDENT:
        return viewer.id
    if student_id is None:
        raise DomainError("Student is required")
    return student_id


def _validate(method: PaymentMethod) -> None:
    if method.method_type not in PAYMENT_METHODS:
        raise DomainError(f"Invalid payment method: {method.method_type}")
    if method.last_four is not None and not (
        len(method.last_four) == 4 and method.last_four.isdigit()
    ):
        raise DomainError("Last four digits must be exactly four digits")
    if method.expiry_month is not None and not 1 <= method.expiry_month <= 12:
        raise DomainError("Expiry month must be between 1 and 12")


def list_student_methods(session: Session, student_id: int, *, viewer: User) -> list[PaymentMethod]:
    if viewer.role is UserRole.STUDENT and viewer.id != student_id:
        raise NotFoundError("Student not found")
    return PaymentMethodRepository(session).list_active_for_student(student_id)


def add_payment_method(
    session: Session, *, viewer: User, student_id: int | None, values: dict[str, Any]
) -> PaymentMethod:
    """Save a method; marking it default clears the student's previous default."""

    owner_id = _owner_id(viewer, student_id)
    ensure_student(session, owner_id)
    method = PaymentMethod(id=None, student_id=owner_id, **values)
    _validate(method)
    return PaymentMethodRepository(session).save(method)


def _get_visible_method(session: Session, method_id: int, viewer: User) -> PaymentMethod:
    method = PaymentMethodRepository(session).get(method_id)
    if method is None or not method.is_active:
        raise NotFoundError("Payment method not found")
    if viewer.role is UserRole.STUDENT and method.student_id != viewer.id:
        raise NotFoundError("Payment method not found")
    return method


def update_payment_method(
    session: Session, method_id: int, *, viewer: User, changes: dict[str, Any]
) -> PaymentMethod:
    method = _get_visible_method(session, method_id, viewer)
    changes.pop("student_id", None)
    updated = replace(method, **changes)
    _validate(updated)
    return PaymentMethodRepository(session).save(updated)


def remove_payment_method(session: Session, method_id: int, *, viewer: User) -> None:
    """Deactivate a method; history that references it stays intact."""

    method = _get_visible_method(session, method_id, viewer)
    PaymentMethodRepository(session).save(replace(method, is_active=False, is_default=False))


__all__ = [
    "add_payment_method",
    "list_student_methods",
    "remove_payment_method",
    "update_payment_method",
]
