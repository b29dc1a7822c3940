"""FastAPI dependency utilities."""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.infrastructure.database import get_db
from app.infrastructure.payment_gateway import RazorpayGateway
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token, password_signature
from app.utils import PageRequest

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def _unauthorized(detail: str = "Invalid token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the user for ``token``; inactive accounts are rejected with 403."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if subject is None or not isinstance(signature_claim, str):
        raise _unauthorized()
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _unauthorized() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    if signature_claim != password_signature(user.password):
        raise _unauthorized()
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account deactivated",
        )
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Build a dependency that admits only users holding one of ``roles``."""

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied",
            )
        return current_user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_teacher = require_roles(UserRole.TEACHER)
require_student = require_roles(UserRole.STUDENT)
require_staff = require_roles(UserRole.ADMIN, UserRole.TEACHER)


def get_page_request(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> PageRequest:
    return PageRequest(page=page, limit=limit)


def get_realtime(request: Request) -> RealtimePublisher:
    """Return the publisher bound to the hub created at start-up."""

    return request.app.state.realtime


def get_payment_gateway(request: Request) -> RazorpayGateway:
    """Return the gateway client created at start-up."""

    return request.app.state.payment_gateway


__all__ = [
    "get_current_user",
    "get_db",
    "get_page_request",
    "get_payment_gateway",
    "get_realtime",
    "oauth2_scheme",
    "require_admin",
    "require_roles",
    "require_staff",
    "require_student",
    "require_teacher",
    "resolve_current_user",
]
