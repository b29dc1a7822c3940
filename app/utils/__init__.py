"""Shared helpers for dates and pagination."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    month_bounds,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    today_in_app_timezone,
)
from .pagination import PageRequest, PageResult, paginate

__all__ = [
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "month_bounds",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "today_in_app_timezone",
    "PageRequest",
    "PageResult",
    "paginate",
]
