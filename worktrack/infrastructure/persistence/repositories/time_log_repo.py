"""Time log repository: open/close timer runs and aggregate closed minutes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.application.dtos.time_log import TimeLogResult
from worktrack.infrastructure.persistence.models.task_time_log import TaskTimeLog
from worktrack.infrastructure.persistence.repositories.base import BaseRepository
from worktrack.shared.utils.datetime import ensure_utc


def _to_result(log: TaskTimeLog) -> TimeLogResult:
    return TimeLogResult(
        id=log.id,
        task_id=log.task_id,
        user_id=log.user_id,
        started_at=ensure_utc(log.started_at),
        ended_at=ensure_utc(log.ended_at),
        duration_minutes=log.duration_minutes,
        description=log.description,
    )


class TaskTimeLogRepository(BaseRepository[TaskTimeLog]):
    """Time log repository. Implements ITaskTimeLogRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskTimeLog)

    async def create_open(
        self, task_id: str, user_id: str, started_at: datetime
    ) -> TimeLogResult:
        log = await self.create(
            TaskTimeLog(task_id=task_id, user_id=user_id, started_at=started_at)
        )
        return _to_result(log)

    async def get_latest_open(self, task_id: str, user_id: str) -> TimeLogResult | None:
        """Most recent open run for (task, user), or None."""
        result = await self.db.execute(
            select(TaskTimeLog)
            .where(
                TaskTimeLog.task_id == task_id,
                TaskTimeLog.user_id == user_id,
                TaskTimeLog.ended_at.is_(None),
            )
            .order_by(TaskTimeLog.started_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        log = result.scalar_one_or_none()
        return _to_result(log) if log else None

    async def close(
        self,
        log_id: str,
        ended_at: datetime,
        duration_minutes: int,
        description: str | None,
    ) -> TimeLogResult | None:
        """Close the run only if it is still open.

        Returns the closed run, or None if another request closed it first.
        """
        result = await self.db.execute(
            update(TaskTimeLog)
            .where(TaskTimeLog.id == log_id, TaskTimeLog.ended_at.is_(None))
            .values(
                ended_at=ended_at,
                duration_minutes=duration_minutes,
                description=description,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        log = await self.get_by_id(log_id)
        return _to_result(log) if log else None

    async def sum_closed_minutes(self, task_id: str) -> int:
        """Sum of duration_minutes over closed runs of the task."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(TaskTimeLog.duration_minutes), 0)).where(
                TaskTimeLog.task_id == task_id,
                TaskTimeLog.ended_at.is_not(None),
            )
        )
        return int(result.scalar_one())

    async def list_for_task(self, task_id: str) -> list[TimeLogResult]:
        """Runs for the task, newest first."""
        result = await self.db.execute(
            select(TaskTimeLog)
            .where(TaskTimeLog.task_id == task_id)
            .order_by(TaskTimeLog.started_at.desc(), TaskTimeLog.id)
            .execution_options(populate_existing=True)
        )
        return [_to_result(log) for log in result.scalars().all()]
