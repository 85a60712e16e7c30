"""Task repository: task rows, list queries, and the conditional writes.

Tenant scoping is explicit: every query filters on company_id.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import and_, delete, exists, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select, Update

from worktrack.application.dtos.task import TaskCreate, TaskResult
from worktrack.domain.enums import TaskStatus, TaskType
from worktrack.infrastructure.persistence.models.company import (
    CompanyMember,
    DepartmentMember,
)
from worktrack.infrastructure.persistence.models.task import Task
from worktrack.infrastructure.persistence.models.task_collaboration import (
    TaskAttachment,
    TaskComment,
)
from worktrack.infrastructure.persistence.models.task_history import TaskHistory
from worktrack.infrastructure.persistence.models.task_time_log import TaskTimeLog
from worktrack.infrastructure.persistence.models.task_transfer import TaskTransfer
from worktrack.infrastructure.persistence.repositories.base import BaseRepository
from worktrack.shared.utils.datetime import ensure_utc


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        company_id=t.company_id,
        title=t.title,
        description=t.description,
        status=t.status,
        priority=t.priority,
        task_type=t.task_type,
        department_id=t.department_id,
        created_by=t.created_by,
        assignee_id=t.assignee_id,
        due_date=t.due_date,
        estimated_hours=t.estimated_hours,
        actual_hours=t.actual_hours,
        is_public=t.is_public,
        accepted_by=t.accepted_by,
        accepted_at=ensure_utc(t.accepted_at),
        is_timer_running=t.is_timer_running,
        current_timer_start=ensure_utc(t.current_timer_start),
        total_time_minutes=t.total_time_minutes,
        delegated_by=t.delegated_by,
        delegate_id=t.delegate_id,
        delegated_at=ensure_utc(t.delegated_at),
        previous_assignee_id=t.previous_assignee_id,
        transfer_reason=t.transfer_reason,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


def build_claim_statement(
    company_id: str,
    task_id: str,
    claimant_id: str,
    accepted_at: datetime,
) -> Update:
    """Single UPDATE that claims a public task for claimant_id.

    The WHERE clause carries both the claim precondition (public, unassigned,
    unclaimed, claimable scope) and the
    eligibility check (active department or company membership, as EXISTS
    subqueries correlated to the task row). The row either matches and is
    written, or is left untouched; there is no separate read to race against.
    """
    department_member = exists().where(
        DepartmentMember.department_id == Task.department_id,
        DepartmentMember.user_id == claimant_id,
        DepartmentMember.is_active.is_(True),
    )
    company_member = exists().where(
        CompanyMember.company_id == Task.company_id,
        CompanyMember.user_id == claimant_id,
        CompanyMember.is_active.is_(True),
    )
    return (
        update(Task)
        .where(
            Task.id == task_id,
            Task.company_id == company_id,
            Task.is_public.is_(True),
            Task.assignee_id.is_(None),
            Task.accepted_by.is_(None),
            or_(
                and_(Task.task_type == TaskType.DEPARTMENT.value, department_member),
                and_(Task.task_type == TaskType.COMPANY.value, company_member),
            ),
        )
        .values(
            assignee_id=claimant_id,
            accepted_by=claimant_id,
            accepted_at=accepted_at,
            status=TaskStatus.IN_PROGRESS.value,
            updated_at=accepted_at,
        )
        .execution_options(synchronize_session=False)
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def _get_orm(self, company_id: str, task_id: str) -> Task | None:
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id, Task.company_id == company_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _list(self, query: Select[tuple[Task]]) -> list[TaskResult]:
        result = await self.db.execute(
            query.order_by(Task.created_at.desc(), Task.id).execution_options(
                populate_existing=True
            )
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def create_task(
        self,
        company_id: str,
        created_by: str,
        data: TaskCreate,
        *,
        assignee_id: str | None,
        created_at: datetime,
    ) -> TaskResult:
        """Insert a task in status todo and return the result DTO."""
        task = Task(
            company_id=company_id,
            title=data.title,
            description=data.description,
            status=TaskStatus.TODO.value,
            priority=data.priority.value,
            task_type=data.task_type.value,
            department_id=data.department_id,
            created_by=created_by,
            assignee_id=assignee_id,
            due_date=data.due_date,
            estimated_hours=data.estimated_hours,
            actual_hours=data.actual_hours,
            is_public=data.is_public,
            is_timer_running=False,
            total_time_minutes=0,
            created_at=created_at,
            updated_at=created_at,
        )
        created = await self.create(task)
        return _to_result(created)

    async def get_task(self, company_id: str, task_id: str) -> TaskResult | None:
        """Return the task if it exists in the company."""
        task = await self._get_orm(company_id, task_id)
        return _to_result(task) if task else None

    async def update_fields(
        self, company_id: str, task_id: str, values: Mapping[str, Any]
    ) -> TaskResult | None:
        """Apply column values to the task; None if the task is missing.

        Callers pass user-editable fields or provenance columns set by the
        transfer workflow, plus updated_at.
        """
        task = await self._get_orm(company_id, task_id)
        if task is None:
            return None
        for key, value in values.items():
            setattr(task, key, value)
        updated = await self.update(task)
        return _to_result(updated)

    async def delete_task(self, company_id: str, task_id: str) -> bool:
        """Delete the task and its dependent rows; False if it did not exist."""
        task = await self._get_orm(company_id, task_id)
        if task is None:
            return False
        for model in (TaskHistory, TaskTimeLog, TaskTransfer, TaskComment, TaskAttachment):
            await self.db.execute(
                delete(model)
                .where(model.task_id == task_id)
                .execution_options(synchronize_session=False)
            )
        await self.delete(task)
        return True

    async def list_personal(self, company_id: str, user_id: str) -> list[TaskResult]:
        """Tasks the user is assignee or accepted delegate of."""
        return await self._list(
            select(Task).where(
                Task.company_id == company_id,
                or_(Task.assignee_id == user_id, Task.delegate_id == user_id),
            )
        )

    async def list_by_department(
        self,
        company_id: str,
        department_id: str,
        *,
        public_only: bool = False,
        unclaimed_only: bool = False,
    ) -> list[TaskResult]:
        query = select(Task).where(
            Task.company_id == company_id,
            Task.task_type == TaskType.DEPARTMENT.value,
            Task.department_id == department_id,
        )
        return await self._list(self._public_filter(query, public_only, unclaimed_only))

    async def list_company(
        self,
        company_id: str,
        *,
        public_only: bool = False,
        unclaimed_only: bool = False,
    ) -> list[TaskResult]:
        query = select(Task).where(
            Task.company_id == company_id,
            Task.task_type == TaskType.COMPANY.value,
        )
        return await self._list(self._public_filter(query, public_only, unclaimed_only))

    @staticmethod
    def _public_filter(
        query: Select[tuple[Task]], public_only: bool, unclaimed_only: bool
    ) -> Select[tuple[Task]]:
        if public_only:
            query = query.where(Task.is_public.is_(True))
        if unclaimed_only:
            query = query.where(Task.assignee_id.is_(None), Task.accepted_by.is_(None))
        return query

    async def try_start_timer(
        self, company_id: str, task_id: str, started_at: datetime
    ) -> bool:
        """Set the running flag only if it is currently off.

        Returns True if exactly one row was updated; False if the timer was
        already running (or the task is gone).
        """
        stmt = (
            update(Task)
            .where(
                Task.id == task_id,
                Task.company_id == company_id,
                Task.is_timer_running.is_(False),
            )
            .values(
                is_timer_running=True,
                current_timer_start=started_at,
                updated_at=started_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def finish_timer(
        self,
        company_id: str,
        task_id: str,
        total_time_minutes: int,
        stopped_at: datetime,
    ) -> None:
        """Clear the running fields and store the recomputed total."""
        await self.db.execute(
            update(Task)
            .where(Task.id == task_id, Task.company_id == company_id)
            .values(
                is_timer_running=False,
                current_timer_start=None,
                total_time_minutes=total_time_minutes,
                updated_at=stopped_at,
            )
            .execution_options(synchronize_session=False)
        )

    async def claim_public_task(
        self,
        company_id: str,
        task_id: str,
        claimant_id: str,
        accepted_at: datetime,
    ) -> str | None:
        """Claim the task atomically (see build_claim_statement).

        Returns the status the task had when this caller won the claim, or
        None if the claim was lost (or the task is gone). The status is read
        under a row lock held until the transaction ends, so it is the value
        the UPDATE replaced. The lock only serializes claimants; the
        conditional UPDATE still decides who wins.
        """
        locked = await self.db.execute(
            select(Task.status)
            .where(Task.id == task_id, Task.company_id == company_id)
            .with_for_update()
        )
        previous_status = locked.scalar_one_or_none()
        if previous_status is None:
            return None
        result = await self.db.execute(
            build_claim_statement(company_id, task_id, claimant_id, accepted_at)
        )
        return previous_status if result.rowcount == 1 else None
