"""Comments and attachment metadata on tasks."""

from __future__ import annotations

from worktrack.application.dtos.collaboration import (
    AttachmentCreate,
    AttachmentResult,
    CommentResult,
)
from worktrack.application.interfaces.repositories import (
    ITaskAttachmentRepository,
    ITaskCommentRepository,
    ITaskRepository,
)
from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.core.constants import COMMENT_PREVIEW_LENGTH
from worktrack.domain.enums import HistoryAction, Permission
from worktrack.domain.exceptions import ResourceNotFoundException, ValidationException
from worktrack.shared.utils.datetime import Clock, utc_now


def comment_preview(content: str) -> str:
    """Content as quoted in history: first characters, with an ellipsis if cut."""
    if len(content) <= COMMENT_PREVIEW_LENGTH:
        return content
    return content[:COMMENT_PREVIEW_LENGTH] + "..."


class CollaborationService:
    """Add and list comments and attachments; each addition is recorded in history."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        comment_repo: ITaskCommentRepository,
        attachment_repo: ITaskAttachmentRepository,
        history: HistoryRecorder,
        permission_gate: PermissionGate,
        clock: Clock = utc_now,
    ) -> None:
        self.task_repo = task_repo
        self.comment_repo = comment_repo
        self.attachment_repo = attachment_repo
        self.history = history
        self.permission_gate = permission_gate
        self.clock = clock

    async def _ensure_task(self, company_id: str, task_id: str) -> None:
        if await self.task_repo.get_task(company_id, task_id) is None:
            raise ResourceNotFoundException("task", task_id)

    async def add_comment(
        self, company_id: str, task_id: str, content: str, user_id: str
    ) -> CommentResult:
        await self.permission_gate.require_permission(
            user_id, company_id, Permission.EDIT_TASKS
        )
        await self._ensure_task(company_id, task_id)
        text = (content or "").strip()
        if not text:
            raise ValidationException("Comment must not be empty", field="content")
        now = self.clock()
        comment = await self.comment_repo.add(task_id, text, user_id, now)
        await self.history.append(
            task_id,
            HistoryAction.COMMENT_ADDED,
            user_id,
            now,
            new_value=comment_preview(text),
        )
        return comment

    async def list_comments(self, company_id: str, task_id: str) -> list[CommentResult]:
        await self._ensure_task(company_id, task_id)
        return await self.comment_repo.list_for_task(task_id)

    async def add_attachment(
        self,
        company_id: str,
        task_id: str,
        data: AttachmentCreate,
        user_id: str,
    ) -> AttachmentResult:
        await self.permission_gate.require_permission(
            user_id, company_id, Permission.EDIT_TASKS
        )
        await self._ensure_task(company_id, task_id)
        if not data.file_name.strip():
            raise ValidationException("file_name must not be empty", field="file_name")
        if not data.file_url.strip():
            raise ValidationException("file_url must not be empty", field="file_url")
        if data.file_size is not None and data.file_size < 0:
            raise ValidationException("file_size must be non-negative", field="file_size")
        now = self.clock()
        attachment = await self.attachment_repo.add(task_id, data, user_id, now)
        await self.history.append(
            task_id,
            HistoryAction.ATTACHMENT_ADDED,
            user_id,
            now,
            new_value=attachment.file_name,
        )
        return attachment

    async def list_attachments(
        self, company_id: str, task_id: str
    ) -> list[AttachmentResult]:
        await self._ensure_task(company_id, task_id)
        return await self.attachment_repo.list_for_task(task_id)
