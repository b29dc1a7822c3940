"""Endpoints available to every authenticated user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.application.use_cases import academics, uploads
from app.application.use_cases.users import set_avatar, update_profile as update_profile_uc
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import AvatarRead, ProfileUpdate, UserRead

router = APIRouter(prefix="/common", tags=["common"])


@router.put("/profile", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    try:
        user = update_profile_uc(
            db, user_id=current_user.id, changes=payload.model_dump(exclude_unset=True)
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UserRead.from_entity(user)


@router.post("/upload-avatar", response_model=AvatarRead)
def upload_avatar(
    avatar: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AvatarRead:
    try:
        stored = uploads.store_upload(
            db,
            filename=avatar.filename,
            data=avatar.file.read(),
            content_type=avatar.content_type,
            uploaded_by=current_user.id,
            kind=uploads.AVATAR,
        )
        user = set_avatar(db, user_id=current_user.id, avatar_url=stored.url)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AvatarRead(message="Avatar uploaded successfully", avatar=user.profile.avatar)


@router.get("/departments", response_model=list[str])
def list_departments(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[str]:
    return academics.list_departments(db)
