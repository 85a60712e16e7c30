"""DTOs for task comments and attachment metadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CommentResult:
    id: str
    task_id: str
    content: str
    created_by: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AttachmentCreate:
    """Attachment metadata supplied by the caller after uploading the file elsewhere."""

    file_name: str
    file_url: str
    file_size: int | None = None
    file_type: str | None = None


@dataclass(frozen=True)
class AttachmentResult:
    id: str
    task_id: str
    file_name: str
    file_url: str
    file_size: int | None
    file_type: str | None
    uploaded_by: str
    uploaded_at: datetime
