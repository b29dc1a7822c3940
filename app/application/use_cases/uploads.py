"""Use cases for storing and removing uploaded files."""

from __future__ import annotations

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import PurePath

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import UploadedFile, User
from app.domain.errors import DomainError, FileTooLargeError, NotFoundError
from app.infrastructure.repositories import UploadedFileRepository
from app.infrastructure.storage import remove_file, store_file

logger = logging.getLogger(__name__)

IMAGE_MAX_SIZE = 5 * 1024 * 1024
DOCUMENT_MAX_SIZE = 10 * 1024 * 1024
MAX_FILES_PER_REQUEST = 10

DOCUMENT_EXTENSIONS = frozenset(
    {".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt"}
)


@dataclass(frozen=True)
class UploadKind:
    folder: str
    max_size: int | None = None
    images_only: bool = False
    documents_only: bool = False


GENERAL = UploadKind(folder="files")
IMAGE = UploadKind(folder="images", max_size=IMAGE_MAX_SIZE, images_only=True)
DOCUMENT = UploadKind(folder="documents", max_size=DOCUMENT_MAX_SIZE, documents_only=True)
AVATAR = UploadKind(folder="avatars", max_size=IMAGE_MAX_SIZE, images_only=True)


def _content_type(filename: str, content_type: str | None) -> str:
    if content_type and content_type != "application/octet-stream":
        return content_type
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


def _check(kind: UploadKind, filename: str, content_type: str, size: int) -> None:
    limit = kind.max_size or get_settings().max_upload_size
    if size > limit:
        raise FileTooLargeError(limit)
    if size == 0:
        raise DomainError("No file uploaded")
    if kind.images_only and not content_type.startswith("image/"):
        raise DomainError("Only image files are allowed")
    if kind.documents_only and PurePath(filename).suffix.lower() not in DOCUMENT_EXTENSIONS:
        raise DomainError("Only document files are allowed")


def store_upload(
    session: Session,
    *,
    filename: str | None,
    data: bytes,
    content_type: str | None,
    uploaded_by: int | None,
    kind: UploadKind = GENERAL,
) -> UploadedFile:
    """Validate ``data`` for ``kind``, store it and record its metadata."""

    original_name = PurePath(filename or "upload").name
    resolved_type = _content_type(original_name, content_type)
    _check(kind, original_name, resolved_type, len(data))

    file_id = uuid.uuid4().hex
    suffix = PurePath(original_name).suffix.lower()
    stored = store_file(f"{kind.folder}/{file_id}{suffix}", data, content_type=resolved_type)
    logger.info("Stored upload %s (%d bytes) in %s", file_id, len(data), stored.storage)

    return UploadedFileRepository(session).create(
        UploadedFile(
            id=None,
            file_id=file_id,
            original_name=original_name,
            content_type=resolved_type,
            size=len(data),
            storage=stored.storage,
            path=stored.path,
            url=stored.url,
            uploaded_by=uploaded_by,
        )
    )


def get_upload(session: Session, file_id: str) -> UploadedFile:
    uploaded = UploadedFileRepository(session).get_by_file_id(file_id)
    if uploaded is None:
        raise NotFoundError("File not found")
    return uploaded


def delete_upload(session: Session, file_id: str, *, user: User) -> None:
    """Remove an upload; only its uploader or an admin may do so."""

    uploaded = get_upload(session, file_id)
    if uploaded.uploaded_by != user.id and user.role != "admin":
        raise NotFoundError("File not found")
    remove_file(uploaded.storage, uploaded.path)
    UploadedFileRepository(session).delete(file_id)


__all__ = [
    "AVATAR",
    "DOCUMENT",
    "GENERAL",
    "IMAGE",
    "MAX_FILES_PER_REQUEST",
    "UploadKind",
    "delete_upload",
    "get_upload",
    "store_upload",
]
