"""Persistence helpers for uploaded file metadata."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import UploadedFile
from app.infrastructure.models import UploadedFileModel


class UploadedFileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_file_id(self, file_id: str) -> UploadedFile | None:
        model = self.session.query(UploadedFileModel).filter_by(file_id=file_id).first()
        return self._to_entity(model) if model else None

    def create(self, uploaded: UploadedFile) -> UploadedFile:
        model = UploadedFileModel(
            file_id=uploaded.file_id,
            original_name=uploaded.original_name,
            content_type=uploaded.content_type,
            size=uploaded.size,
            storage=uploaded.storage,
            path=uploaded.path,
            url=uploaded.url,
            uploaded_by=uploaded.uploaded_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, file_id: str) -> None:
        self.session.query(UploadedFileModel).filter_by(file_id=file_id).delete(
            synchronize_session=False
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: UploadedFileModel) -> UploadedFile:
        return UploadedFile(
            id=model.id,
            file_id=model.file_id,
            original_name=model.original_name,
            content_type=model.content_type,
            size=model.size,
            storage=model.storage,
            path=model.path,
            url=model.url,
            uploaded_by=model.uploaded_by,
            created_at=model.created_at,
        )


__all__ = ["UploadedFileRepository"]
