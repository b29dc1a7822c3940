"""Use cases for the student fee ledger."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import FEE_STATUSES, Fee, UserRole
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.repositories import FeeRepository, UserRepository
from app.utils import PageRequest, PageResult


@dataclass
class FeeSummary:
    fees: list[Fee]
    total: float
    paid: float
    due: float


def _validate_amounts(fee: Fee) -> None:
    if fee.total_amount < 0 or fee.paid_amount < 0:
        raise DomainError("Fee amounts cannot be negative")


def list_fees(
    session: Session,
    *,
    page: PageRequest,
    status: str | None = None,
    academic_year: str | None = None,
    student_id: int | None = None,
) -> PageResult[Fee]:
    return FeeRepository(session).search(
        page, status=status, academic_year=academic_year, student_id=student_id
    )


def get_fee(session: Session, fee_id: int) -> Fee:
    fee = FeeRepository(session).get(fee_id)
    if fee is None:
        raise NotFoundError("Fee not found")
    return fee


def create_fee(
    session: Session,
    *,
    student_id: int,
    academic_year: str,
    semester: int,
    total_amount: float,
    due_date: date,
    paid_amount: float = 0.0,
    status: str | None = None,
) -> Fee:
    """Create a fee record; due amount and status derive from the totals."""

    student = UserRepository(session).get(student_id)
    if student is None or student.role is not UserRole.STUDENT:
        raise DomainError("Student does not exist")

    fee = Fee(
        id=None,
        student_id=student_id,
        academic_year=academic_year,
        semester=semester,
        total_amount=total_amount,
        paid_amount=paid_amount,
        due_amount=total_amount - paid_amount,
        due_date=due_date,
        status="overdue" if status == "overdue" else "pending",
    )
    _validate_amounts(fee)
    fee.recompute()
    return FeeRepository(session).create(fee)


def update_fee(session: Session, fee_id: int, changes: dict[str, Any]) -> Fee:
    """Apply ``changes`` and re-derive the due amount.

    ``status`` may only be forced to ``overdue``; the other states follow the
    amounts.
    """

    current = get_fee(session, fee_id)
    requested_status = changes.pop("status", None)
    if requested_status is not None and requested_status not in FEE_STATUSES:
        raise DomainError(f"Invalid fee status: {requested_status}")

    fee = replace(current, **changes)
    if requested_status == "overdue":
        fee.status = "overdue"
    elif requested_status is not None:
        fee.status = "pending"
    _validate_amounts(fee)
    fee.recompute()
    return FeeRepository(session).update(fee)


def delete_fee(session: Session, fee_id: int) -> None:
    get_fee(session, fee_id)
    FeeRepository(session).delete(fee_id)


def get_student_fees(session: Session, *, student_id: int) -> FeeSummary:
    fees = FeeRepository(session).list_for_student(student_id)
    return FeeSummary(
        fees=fees,
        total=round(sum(fee.total_amount for fee in fees), 2),
        paid=round(sum(fee.paid_amount for fee in fees), 2),
        due=round(sum(max(fee.due_amount, 0) for fee in fees), 2),
    )


__all__ = [
    "FeeSummary",
    "create_fee",
    "delete_fee",
    "get_fee",
    "get_student_fees",
    "list_fees",
    "update_fee",
]
