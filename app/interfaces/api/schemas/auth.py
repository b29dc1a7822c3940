"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field

from .base import APIModel
from .user import ProfileInput, StudentDetailsInput, UserRead


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(APIModel):
    token: str
    user: UserRead


class Token(BaseModel):
    """OAuth2 token response used by the interactive docs."""

    access_token: str
    token_type: str = "bearer"


class RegisterStudentRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    profile: ProfileInput
    student_details: StudentDetailsInput


class ForgotPasswordRequest(APIModel):
    email: EmailStr = Field(..., description="Registered email address")


class ForgotPasswordResponse(APIModel):
    message: str


__all__ = [
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterStudentRequest",
    "Token",
]
