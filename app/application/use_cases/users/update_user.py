"""Use cases for updating user information."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Profile, User, UserRole
from app.domain.errors import ConflictError, DomainError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

from .get_user import get_user

PROFILE_FIELDS = frozenset(item.name for item in fields(Profile))

# Codes are assigned at creation and never edited.
_IMMUTABLE_DETAIL_FIELDS = frozenset({"student_code", "employee_code", "admin_code"})


def _apply_profile(profile: Profile, changes: Mapping[str, Any]) -> Profile:
    unknown = set(changes) - PROFILE_FIELDS
    if unknown:
        raise DomainError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    return replace(profile, **changes)


def update_user(
    session: Session,
    *,
    user_id: int,
    role: UserRole,
    email: str | None = None,
    password: str | None = None,
    is_active: bool | None = None,
    profile: Mapping[str, Any] | None = None,
    details: Mapping[str, Any] | None = None,
) -> User:
    """Update the account, profile and role details of a ``role`` user."""

    repository = UserRepository(session)
    current_user = get_user(session, user_id, role=role)

    new_email = current_user.email
    if email is not None and email.strip().lower() != current_user.email:
        existing_with_email = repository.get_by_email(email)
        if existing_with_email and existing_with_email.id != user_id:
            raise ConflictError("User already exists")
        new_email = email.strip().lower()

    new_details = current_user.details
    if details:
        editable = {
            key: value
            for key, value in details.items()
            if key not in _IMMUTABLE_DETAIL_FIELDS
        }
        new_details = replace(current_user.details, **editable)

    updated_user = replace(
        current_user,
        email=new_email,
        is_active=is_active if is_active is not None else current_user.is_active,
        profile=_apply_profile(current_user.profile, profile or {}),
        details=new_details,
    )

    if password:
        updated_user = replace(updated_user, password=get_password_hash(password))

    return repository.update(updated_user)


def update_profile(session: Session, *, user_id: int, changes: Mapping[str, Any]) -> User:
    """Update the personal profile of the authenticated user."""

    repository = UserRepository(session)
    current_user = get_user(session, user_id)
    updated_user = replace(
        current_user, profile=_apply_profile(current_user.profile, changes)
    )
    return repository.update(updated_user)


def set_avatar(session: Session, *, user_id: int, avatar_url: str) -> User:
    return update_profile(session, user_id=user_id, changes={"avatar": avatar_url})


__all__ = ["set_avatar", "update_profile", "update_user"]
