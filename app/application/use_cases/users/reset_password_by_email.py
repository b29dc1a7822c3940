"""Use case for the forgot-password flow."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import generate_secure_password, get_password_hash


def reset_password_by_email(session: Session, *, email: str) -> tuple[User, str]:
    """Replace the password of the active account registered under ``email``.

    Returns the account and the generated temporary password. Tokens issued
    before the reset stop validating because their password fingerprint no
    longer matches. Unknown and deactivated accounts raise ``NotFoundError``
    so the caller can answer both the same way.
    """

    repository = UserRepository(session)
    user = repository.get_by_email(email.strip().lower())
    if user is None or not user.is_active:
        raise NotFoundError("User not found")

    temporary_password = generate_secure_password()
    persisted = repository.update(replace(user, password=get_password_hash(temporary_password)))
    return persisted, temporary_password


__all__ = ["reset_password_by_email"]
