"""Domain entity describing a stored upload."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class UploadedFile:
    id: int | None
    file_id: str
    original_name: str
    content_type: str | None
    size: int
    storage: str
    path: str
    url: str
    uploaded_by: int | None
    created_at: datetime | None = None
