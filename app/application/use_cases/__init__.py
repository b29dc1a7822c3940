"""Application use cases grouped by area: users, academics, payments and messaging."""

from .users import authenticate_user, create_admin, create_student, create_teacher

__all__ = [
    "authenticate_user",
    "create_admin",
    "create_student",
    "create_teacher",
]
