"""Resolve a notification audience into concrete user ids."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import RecipientMode, UserRole
from app.domain.errors import DomainError
from app.infrastructure.repositories import UserRepository


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def resolve_recipients(
    session: Session, mode: RecipientMode | str, value: Any = None
) -> list[int]:
    """Return the sorted ids of active users addressed by ``mode``/``value``."""

    mode = RecipientMode(mode)
    users = UserRepository(session)

    if mode is RecipientMode.ALL:
        ids = users.list_active_ids()
    elif mode is RecipientMode.ROLE:
        try:
            roles = [UserRole(role) for role in _as_list(value)]
        except ValueError as exc:
            raise DomainError(f"Unknown role in recipients: {value}") from exc
        ids = users.list_ids_by_roles(roles)
    elif mode is RecipientMode.SPECIFIC:
        try:
            requested = [int(user_id) for user_id in _as_list(value)]
        except (TypeError, ValueError) as exc:
            raise DomainError("Specific recipients must be user ids") from exc
        ids = users.filter_existing_ids(requested)
    elif mode is RecipientMode.DEPARTMENT:
        if not value or not isinstance(value, str):
            raise DomainError("A department name is required")
        ids = users.list_ids_by_department(value)
    else:
        if not value or not isinstance(value, str):
            raise DomainError("A batch is required")
        ids = users.list_ids_by_batch(value)

    return sorted(set(ids))


__all__ = ["resolve_recipients"]
