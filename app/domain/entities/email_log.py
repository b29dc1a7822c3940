"""Domain entity for an outbound email attempt."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EmailLog:
    id: int | None
    recipient: str
    subject: str
    status: str
    template: str | None = None
    error_message: str | None = None
    sent_by: int | None = None
    sent_at: datetime | None = None
    created_at: datetime | None = None
