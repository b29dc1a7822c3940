"""Use case for checking login credentials."""

from dataclasses import dataclass
from enum import Enum, auto

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password


class AuthenticationStatus(Enum):
    """Possible outcomes of a login attempt."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


@dataclass(frozen=True)
class AuthenticationResult:
    status: AuthenticationStatus
    user: User | None = None


def authenticate_user(session: Session, email: str, password: str) -> AuthenticationResult:
    """Match ``email`` and ``password`` against a stored account.

    Unknown emails and wrong passwords share one outcome. A deactivated
    account is only reported once the password has been verified.
    """

    user = UserRepository(session).get_by_email(email.strip().lower())
    if user is None or not verify_password(password, user.password):
        return AuthenticationResult(AuthenticationStatus.INVALID_CREDENTIALS)
    if not user.is_active:
        return AuthenticationResult(AuthenticationStatus.INACTIVE, user)
    return AuthenticationResult(AuthenticationStatus.SUCCESS, user)


__all__ = ["AuthenticationResult", "AuthenticationStatus", "authenticate_user"]
