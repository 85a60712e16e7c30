"""Task history repository (append and read only)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.application.dtos.history import TaskHistoryResult
from worktrack.infrastructure.persistence.models.task_history import TaskHistory
from worktrack.shared.utils.datetime import ensure_utc


def _to_result(h: TaskHistory) -> TaskHistoryResult:
    return TaskHistoryResult(
        id=h.id,
        task_id=h.task_id,
        action=h.action,
        field_changed=h.field_changed,
        old_value=h.old_value,
        new_value=h.new_value,
        changed_by=h.changed_by,
        changed_at=ensure_utc(h.changed_at),
    )


class TaskHistoryRepository:
    """Task history repository. Implements ITaskHistoryRepository.

    There is no update or delete; rows go away only with their task.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def append(
        self,
        task_id: str,
        action: str,
        changed_by: str,
        changed_at: datetime,
        *,
        field_changed: str | None = None,
        old_value: str | None = None,
        new_value: str | None = None,
    ) -> TaskHistoryResult:
        entry = TaskHistory(
            task_id=task_id,
            action=action,
            field_changed=field_changed,
            old_value=old_value,
            new_value=new_value,
            changed_by=changed_by,
            changed_at=changed_at,
        )
        self.db.add(entry)
        await self.db.flush()
        return _to_result(entry)

    async def list_for_task(self, task_id: str) -> list[TaskHistoryResult]:
        """Entries for the task, oldest first (changed_at, then id)."""
        result = await self.db.execute(
            select(TaskHistory)
            .where(TaskHistory.task_id == task_id)
            .order_by(TaskHistory.changed_at, TaskHistory.id)
        )
        return [_to_result(h) for h in result.scalars().all()]

    async def count_for_task(self, task_id: str) -> int:
        result = await self.db.execute(
            select(func.count(TaskHistory.id)).where(TaskHistory.task_id == task_id)
        )
        return int(result.scalar_one())
