"""Comment and attachment repositories."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.application.dtos.collaboration import (
    AttachmentCreate,
    AttachmentResult,
    CommentResult,
)
from worktrack.infrastructure.persistence.models.task_collaboration import (
    TaskAttachment,
    TaskComment,
)
from worktrack.infrastructure.persistence.repositories.base import BaseRepository
from worktrack.shared.utils.datetime import ensure_utc


def _comment_to_result(c: TaskComment) -> CommentResult:
    return CommentResult(
        id=c.id,
        task_id=c.task_id,
        content=c.content,
        created_by=c.created_by,
        created_at=ensure_utc(c.created_at),
        updated_at=ensure_utc(c.updated_at),
    )


def _attachment_to_result(a: TaskAttachment) -> AttachmentResult:
    return AttachmentResult(
        id=a.id,
        task_id=a.task_id,
        file_name=a.file_name,
        file_url=a.file_url,
        file_size=a.file_size,
        file_type=a.file_type,
        uploaded_by=a.uploaded_by,
        uploaded_at=ensure_utc(a.uploaded_at),
    )


class TaskCommentRepository(BaseRepository[TaskComment]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskComment)

    async def add(
        self, task_id: str, content: str, created_by: str, created_at: datetime
    ) -> CommentResult:
        comment = await self.create(
            TaskComment(
                task_id=task_id,
                content=content,
                created_by=created_by,
                created_at=created_at,
                updated_at=created_at,
            )
        )
        return _comment_to_result(comment)

    async def list_for_task(self, task_id: str) -> list[CommentResult]:
        """Comments oldest first."""
        result = await self.db.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.created_at, TaskComment.id)
        )
        return [_comment_to_result(c) for c in result.scalars().all()]


class TaskAttachmentRepository(BaseRepository[TaskAttachment]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskAttachment)

    async def add(
        self,
        task_id: str,
        data: AttachmentCreate,
        uploaded_by: str,
        uploaded_at: datetime,
    ) -> AttachmentResult:
        attachment = await self.create(
            TaskAttachment(
                task_id=task_id,
                file_name=data.file_name,
                file_url=data.file_url,
                file_size=data.file_size,
                file_type=data.file_type,
                uploaded_by=uploaded_by,
                uploaded_at=uploaded_at,
            )
        )
        return _attachment_to_result(attachment)

    async def list_for_task(self, task_id: str) -> list[AttachmentResult]:
        """Attachments newest first."""
        result = await self.db.execute(
            select(TaskAttachment)
            .where(TaskAttachment.task_id == task_id)
            .order_by(TaskAttachment.uploaded_at.desc(), TaskAttachment.id)
        )
        return [_attachment_to_result(a) for a in result.scalars().all()]
