"""Use case for issuing bearer tokens."""

from app.domain.entities import User
from app.infrastructure.security import create_access_token, password_signature


def issue_access_token(user: User) -> str:
    """Return a signed token carrying the user's id, role and password fingerprint."""

    return create_access_token(
        {
            "sub": str(user.id),
            "role": user.role.value,
            "pwd_sig": password_signature(user.password),
        }
    )


__all__ = ["issue_access_token"]
