"""Endpoints for storing and removing uploaded files."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.application.use_cases import uploads
from app.domain.entities import User
from app.domain.errors import DomainError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.schemas import UploadRead

router = APIRouter(prefix="/upload", tags=["upload"])


def _store(db: Session, upload: UploadFile, user: User, kind: uploads.UploadKind) -> UploadRead:
    try:
        stored = uploads.store_upload(
            db,
            filename=upload.filename,
            data=upload.file.read(),
            content_type=upload.content_type,
            uploaded_by=user.id,
            kind=kind,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UploadRead.model_validate(stored)


@router.post("/single", response_model=UploadRead, status_code=status.HTTP_201_CREATED)
def upload_single(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UploadRead:
    return _store(db, file, current_user, uploads.GENERAL)


@router.post("/multiple", response_model=list[UploadRead], status_code=status.HTTP_201_CREATED)
def upload_multiple(
    files: list[UploadFile] = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UploadRead]:
    if len(files) > uploads.MAX_FILES_PER_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files. Maximum is {uploads.MAX_FILES_PER_REQUEST}",
        )
    return [_store(db, upload, current_user, uploads.GENERAL) for upload in files]


@router.post("/image", response_model=UploadRead, status_code=status.HTTP_201_CREATED)
def upload_image(
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UploadRead:
    return _store(db, image, current_user, uploads.IMAGE)


@router.post("/document", response_model=UploadRead, status_code=status.HTTP_201_CREATED)
def upload_document(
    document: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UploadRead:
    return _store(db, document, current_user, uploads.DOCUMENT)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_upload(
    file_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        uploads.delete_upload(db, file_id, user=current_user)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{file_id}/info", response_model=UploadRead)
def read_upload(
    file_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> UploadRead:
    try:
        stored = uploads.get_upload(db, file_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return UploadRead.model_validate(stored)
