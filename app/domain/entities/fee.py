"""Domain entity for a student's fee ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

FEE_STATUSES = ("pending", "partial", "paid", "overdue")


@dataclass
class Fee:
    id: int | None
    student_id: int
    academic_year: str
    semester: int
    total_amount: float
    paid_amount: float
    due_amount: float
    due_date: date
    status: str = "pending"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def recompute(self) -> None:
        """Derive ``due_amount`` and ``status`` from the totals."""

        self.due_amount = round(self.total_amount - self.paid_amount, 2)
        if self.due_amount <= 0:
            self.status = "paid"
        elif self.status == "overdue":
            return
        elif self.paid_amount > 0:
            self.status = "partial"
        else:
            self.status = "pending"


__all__ = ["FEE_STATUSES", "Fee"]
