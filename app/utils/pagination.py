"""Offset pagination shared by the list endpoints."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Requested page window; ``page`` starts at 1."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageResult(Generic[T]):
    """A slice of results together with the size of the full result set."""

    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def paginate(query, request: PageRequest) -> tuple[list, int]:
    """Return ``(rows, total)`` for ``query`` restricted to ``request``."""

    total = query.order_by(None).count()
    rows = query.offset(request.offset).limit(request.limit).all()
    return rows, total


__all__ = ["PageRequest", "PageResult", "paginate"]
