"""Endpoints for login, self registration and password recovery."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    issue_access_token,
    record_login,
    register_student as register_student_uc,
    reset_password_by_email,
)
from app.domain.entities import Profile, User
from app.domain.errors import DomainError, NotFoundError
from app.infrastructure.database import get_db
from app.infrastructure.email import send_user_password_reset_email
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    LoginResponse,
    RegisterStudentRequest,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_PASSWORD_RESET_MESSAGE = (
    "If the email is registered, a temporary password has been sent to it."
)


def _login(db: Session, email: str, password: str) -> User:
    result = authenticate_user(db, email, password)

    if result.status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if result.status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account deactivated",
        )

    return record_login(db, result.user)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate by email and password and return a bearer token."""

    user = _login(db, payload.email, payload.password)
    return LoginResponse(token=issue_access_token(user), user=UserRead.from_entity(user))


# Keeps the signature expected by OAuth2PasswordRequestForm for the docs UI.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    user = _login(db, form_data.username, form_data.password)
    return Token(access_token=issue_access_token(user))


@router.post("/register/student", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register_student(
    payload: RegisterStudentRequest,
    db: Session = Depends(get_db),
) -> LoginResponse:
    try:
        user = register_student_uc(
            db,
            email=payload.email,
            password=payload.password,
            profile=Profile(**payload.profile.model_dump()),
            details=payload.student_details.model_dump(exclude_none=True),
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return LoginResponse(token=issue_access_token(user), user=UserRead.from_entity(user))


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.from_entity(current_user)


@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def forgot_password(
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db),
) -> ForgotPasswordResponse:
    """Send a temporary password; the answer is the same for unknown accounts."""

    try:
        user, temporary_password = reset_password_by_email(db, email=payload.email)
    except NotFoundError as exc:
        logger.info("Password reset ignored for %s: %s", payload.email, exc)
        return ForgotPasswordResponse(message=_PASSWORD_RESET_MESSAGE)

    if not send_user_password_reset_email(
        user.email, user.profile.full_name, temporary_password
    ):
        logger.warning("Password reset email could not be delivered to %s", user.email)

    return ForgotPasswordResponse(message=_PASSWORD_RESET_MESSAGE)
