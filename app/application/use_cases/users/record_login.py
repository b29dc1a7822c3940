"""Use case for stamping a successful login."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.utils import now_in_app_naive_datetime


def record_login(session: Session, user: User) -> User:
    """Store the login time on ``user`` and return the refreshed account."""

    stamped = replace(user, last_login=now_in_app_naive_datetime())
    return UserRepository(session).update(stamped)


__all__ = ["record_login"]
