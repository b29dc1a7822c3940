"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import UserRepository


def get_user(
    session: Session,
    user_id: int,
    *,
    role: UserRole | None = None,
    include_inactive: bool = True,
) -> User:
    """Return the requested user or raise an error if it does not exist.

    When ``role`` is given, a user holding another role is reported as missing.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None or (role is not None and user.role is not role):
        label = role.value.capitalize() if role is not None else "User"
        raise NotFoundError(f"{label} not found")
    if not include_inactive and not user.is_active:
        raise NotFoundError("User not found")
    return user
