"""Use cases for managing users."""

from .authenticate_user import AuthenticationResult, AuthenticationStatus, authenticate_user
from .create_user import create_admin, create_student, create_teacher, register_student
from .delete_user import delete_user
from .get_user import get_user
from .list_users import list_users
from .record_login import record_login
from .reset_password_by_email import reset_password_by_email
from .tokens import issue_access_token
from .update_user import set_avatar, update_profile, update_user

__all__ = [
    "AuthenticationResult",
    "AuthenticationStatus",
    "authenticate_user",
    "create_admin",
    "create_student",
    "create_teacher",
    "delete_user",
    "get_user",
    "issue_access_token",
    "list_users",
    "record_login",
    "register_student",
    "reset_password_by_email",
    "set_avatar",
    "update_profile",
    "update_user",
]
