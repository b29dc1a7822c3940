"""Use case for removing a student or teacher account."""

from sqlalchemy.orm import Session

from app.domain.entities import UserRole
from app.infrastructure.repositories import UserRepository

from .get_user import get_user


def delete_user(session: Session, user_id: int, *, role: UserRole | None = None) -> None:
    """Delete the account with its role profile; ``role`` scopes the lookup."""

    get_user(session, user_id, role=role)
    UserRepository(session).delete(user_id)


__all__ = ["delete_user"]
