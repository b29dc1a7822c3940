"""Fee schemas."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from .base import APIModel


class FeeRead(APIModel):
    id: int
    student_id: int
    academic_year: str
    semester: int
    total_amount: float
    paid_amount: float
    due_amount: float
    due_date: dt.date
    status: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class FeeCreate(APIModel):
    student_id: int
    academic_year: str = Field(..., min_length=4, max_length=20)
    semester: int = Field(..., ge=1, le=12)
    total_amount: float = Field(..., gt=0)
    paid_amount: float = Field(default=0, ge=0)
    due_date: dt.date
    status: str | None = Field(default=None, pattern="^overdue$")


class FeeUpdate(APIModel):
    academic_year: str | None = Field(default=None, min_length=4, max_length=20)
    semester: int | None = Field(default=None, ge=1, le=12)
    total_amount: float | None = Field(default=None, gt=0)
    paid_amount: float | None = Field(default=None, ge=0)
    due_date: dt.date | None = None
    status: str | None = Field(default=None, pattern="^overdue$")


class FeeSummaryRead(APIModel):
    fees: list[FeeRead]
    total: float
    paid: float
    due: float


__all__ = ["FeeCreate", "FeeRead", "FeeSummaryRead", "FeeUpdate"]
