"""Use case for listing users of a given role."""

from sqlalchemy.orm import Session

from app.domain.entities import User, UserRole
from app.infrastructure.repositories import UserRepository
from app.utils import PageRequest, PageResult


def list_users(
    session: Session,
    *,
    role: UserRole,
    page: PageRequest,
    search: str | None = None,
    department: str | None = None,
    semester: int | None = None,
    batch: str | None = None,
) -> PageResult[User]:
    """Return one page of users holding ``role`` that match the filters."""

    repository = UserRepository(session)
    return repository.search(
        role,
        page,
        search=search.strip() if search else None,
        department=department,
        semester=semester,
        batch=batch,
    )
