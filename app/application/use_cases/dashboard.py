"""Use case for computing the administrative dashboard figures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.infrastructure.repositories import SubjectRepository, UserRepository
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime

RECENT_ADMISSIONS_LIMIT = 5
ADMISSION_WINDOW_DAYS = 30


@dataclass
class DashboardStats:
    """Aggregate counters shown on the admin dashboard."""

    total_students: int
    total_teachers: int
    total_subjects: int
    admissions_last_30_days: int
    recent_admissions: list[User]


def get_dashboard_stats(
    session: Session,
    *,
    reference: datetime | None = None,
) -> DashboardStats:
    """Count students, teachers and subjects and list the latest admissions."""

    now = ensure_app_naive_datetime(reference) or now_in_app_naive_datetime()
    window_start = (now - timedelta(days=ADMISSION_WINDOW_DAYS)).date()

    users = UserRepository(session)

    return DashboardStats(
        total_students=users.count_by_role(UserRole.STUDENT),
        total_teachers=users.count_by_role(UserRole.TEACHER),
        total_subjects=SubjectRepository(session).count(),
        admissions_last_30_days=users.count_admissions_since(window_start),
        recent_admissions=list(
            users.list_recent(UserRole.STUDENT, limit=RECENT_ADMISSIONS_LIMIT)
        ),
    )


__all__ = ["DashboardStats", "get_dashboard_stats"]
