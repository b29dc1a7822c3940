"""Upload schemas."""

from datetime import datetime

from .base import APIModel


class UploadRead(APIModel):
    file_id: str
    original_name: str
    content_type: str | None = None
    size: int
    url: str
    uploaded_by: int | None = None
    created_at: datetime | None = None


class AvatarRead(APIModel):
    message: str
    avatar: str


__all__ = ["AvatarRead", "UploadRead"]
