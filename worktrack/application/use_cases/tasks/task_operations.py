"""Task operations: create, update, change status, delete, and list queries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from worktrack.application.dtos.history import TaskHistoryResult
from worktrack.application.dtos.task import TaskCreate, TaskResult
from worktrack.application.interfaces.repositories import ITaskRepository
from worktrack.application.interfaces.services import IMembershipOracle
from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.domain.enums import (
    HistoryAction,
    MembershipScope,
    Permission,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from worktrack.domain.exceptions import ResourceNotFoundException, ValidationException
from worktrack.shared.telemetry.logging import get_logger
from worktrack.shared.utils.datetime import Clock, utc_now

logger = get_logger(__name__)

TITLE_MAX_LENGTH = 500

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "priority",
        "status",
        "assignee_id",
        "due_date",
        "estimated_hours",
        "actual_hours",
        "is_public",
    }
)

# Fields whose change is written to history, and the action recorded.
_HISTORY_FIELDS: tuple[tuple[str, HistoryAction], ...] = (
    ("status", HistoryAction.STATUS_CHANGED),
    ("priority", HistoryAction.PRIORITY_CHANGED),
    ("title", HistoryAction.TITLE_CHANGED),
)


def _validate_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationException("Title must not be empty", field="title")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise ValidationException(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return cleaned


def _validate_hours(value: float | None, field: str) -> float | None:
    if value is not None and value < 0:
        raise ValidationException(f"{field} must be non-negative", field=field)
    return value


def _parse_enum(enum_cls: type[TaskStatus] | type[TaskPriority], value: Any, field: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError as e:
        raise ValidationException(
            f"Invalid {field}: {value!r}. Expected one of {enum_cls.values()}",
            field=field,
        ) from e


class TaskService:
    """Task store operations (company-scoped).

    Every mutation consults the permission gate first and records history
    through the HistoryRecorder in the same transaction.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        history: HistoryRecorder,
        permission_gate: PermissionGate,
        membership: IMembershipOracle,
        clock: Clock = utc_now,
    ) -> None:
        self.task_repo = task_repo
        self.history = history
        self.permission_gate = permission_gate
        self.membership = membership
        self.clock = clock

    async def _require_company_member(self, company_id: str, user_id: str, field: str) -> None:
        if not await self.membership.is_active_member(
            MembershipScope.COMPANY, company_id, user_id
        ):
            raise ValidationException(
                f"User {user_id} is not an active member of this company", field=field
            )

    async def create_task(
        self, company_id: str, created_by: str, data: TaskCreate
    ) -> TaskResult:
        """Create a task in status todo and record the `created` history entry.

        Validation:
        - title non-empty after trimming
        - department tasks need a department of this company; other types must not carry one
        - hours non-negative
        - only department and company tasks may be public

        Personal tasks without an explicit assignee are assigned to their creator.
        Assigning anyone other than the creator requires assign_tasks.
        """
        task_type = TaskType(data.task_type)
        await self.permission_gate.require_permission(
            created_by, company_id, Permission.for_task_creation(task_type)
        )
        title = _validate_title(data.title)
        if task_type == TaskType.DEPARTMENT:
            if not data.department_id:
                raise ValidationException(
                    "Department tasks require department_id", field="department_id"
                )
            if not await self.membership.department_in_company(
                company_id, data.department_id
            ):
                raise ResourceNotFoundException("department", data.department_id)
        elif data.department_id:
            raise ValidationException(
                "department_id is only allowed for department tasks",
                field="department_id",
            )
        _validate_hours(data.estimated_hours, "estimated_hours")
        _validate_hours(data.actual_hours, "actual_hours")
        if data.is_public and not task_type.is_claimable_scope:
            raise ValidationException(
                "Only department or company tasks can be public", field="is_public"
            )

        assignee_id = data.assignee_id
        if assignee_id is None and task_type == TaskType.PERSONAL:
            assignee_id = created_by
        if assignee_id is not None and assignee_id != created_by:
            await self.permission_gate.require_permission(
                created_by, company_id, Permission.ASSIGN_TASKS
            )
            await self._require_company_member(company_id, assignee_id, "assignee_id")

        now = self.clock()
        task = await self.task_repo.create_task(
            company_id,
            created_by,
            replace(
                data,
                title=title,
                task_type=task_type,
                priority=TaskPriority(data.priority),
                assignee_id=assignee_id,
            ),
            assignee_id=assignee_id,
            created_at=now,
        )
        await self.history.append(
            task.id, HistoryAction.CREATED, created_by, now, new_value=task.title
        )
        logger.info(
            "Task created: id=%s company=%s type=%s", task.id, company_id, task.task_type
        )
        return task

    async def get_task(self, company_id: str, task_id: str) -> TaskResult:
        """Return task if it belongs to the company; else raise ResourceNotFoundException."""
        task = await self.task_repo.get_task(company_id, task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def update_task(
        self,
        company_id: str,
        task_id: str,
        changes: Mapping[str, Any],
        acting_user_id: str,
    ) -> TaskResult:
        """Partial update. Only changed values are written; no effective change is a no-op.

        Status, priority and title changes each append one history entry.
        Changing the assignee additionally requires assign_tasks.
        """
        unknown = sorted(set(changes) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationException(
                f"Fields cannot be updated: {', '.join(unknown)}", field=unknown[0]
            )
        await self.permission_gate.require_permission(
            acting_user_id, company_id, Permission.EDIT_TASKS
        )
        task = await self.get_task(company_id, task_id)

        values: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "title":
                value = _validate_title(value)
            elif key == "status":
                value = _parse_enum(TaskStatus, value, "status")
            elif key == "priority":
                value = _parse_enum(TaskPriority, value, "priority")
            elif key in ("estimated_hours", "actual_hours"):
                value = _validate_hours(value, key)
            elif key == "is_public":
                if value is None:
                    raise ValidationException("is_public must be a boolean", field=key)
                if value and not TaskType(task.task_type).is_claimable_scope:
                    raise ValidationException(
                        "Only department or company tasks can be public", field=key
                    )
            if getattr(task, key) != value:
                values[key] = value

        if "assignee_id" in values:
            await self.permission_gate.require_permission(
                acting_user_id, company_id, Permission.ASSIGN_TASKS
            )
            new_assignee = values["assignee_id"]
            if new_assignee is None and task.is_claimed:
                raise ValidationException(
                    "A claimed task must keep an assignee", field="assignee_id"
                )
            if new_assignee is not None:
                await self._require_company_member(company_id, new_assignee, "assignee_id")

        if not values:
            return task

        now = self.clock()
        values["updated_at"] = now
        updated = await self.task_repo.update_fields(company_id, task_id, values)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        for field, action in _HISTORY_FIELDS:
            if field in values:
                await self.history.append(
                    task_id,
                    action,
                    acting_user_id,
                    now,
                    old_value=getattr(task, field),
                    new_value=values[field],
                    field_changed=field,
                )
        return updated

    async def change_status(
        self,
        company_id: str,
        task_id: str,
        new_status: TaskStatus | str,
        acting_user_id: str,
    ) -> TaskResult:
        """Move the task to new_status. Any status may follow any other.

        Same status is a no-op: nothing is written and no history is recorded.
        """
        status = _parse_enum(TaskStatus, new_status, "status")
        await self.permission_gate.require_permission(
            acting_user_id, company_id, Permission.EDIT_TASKS
        )
        task = await self.get_task(company_id, task_id)
        if task.status == status:
            return task

        now = self.clock()
        updated = await self.task_repo.update_fields(
            company_id, task_id, {"status": status, "updated_at": now}
        )
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        await self.history.append(
            task_id,
            HistoryAction.STATUS_CHANGED,
            acting_user_id,
            now,
            old_value=task.status,
            new_value=status,
            field_changed="status",
        )
        return updated

    async def delete_task(
        self, company_id: str, task_id: str, acting_user_id: str
    ) -> None:
        """Delete the task with its history, time logs, transfers, comments and attachments."""
        await self.permission_gate.require_permission(
            acting_user_id, company_id, Permission.DELETE_TASKS
        )
        if not await self.task_repo.delete_task(company_id, task_id):
            raise ResourceNotFoundException("task", task_id)
        logger.info("Task deleted: id=%s company=%s by=%s", task_id, company_id, acting_user_id)

    async def list_personal_tasks(self, company_id: str, user_id: str) -> list[TaskResult]:
        """Tasks assigned to the user or delegated to them."""
        return await self.task_repo.list_personal(company_id, user_id)

    async def list_department_tasks(
        self, company_id: str, department_id: str
    ) -> list[TaskResult]:
        return await self.task_repo.list_by_department(company_id, department_id)

    async def list_company_tasks(self, company_id: str) -> list[TaskResult]:
        return await self.task_repo.list_company(company_id)

    async def list_public_department_tasks(
        self, company_id: str, department_id: str, unclaimed_only: bool = False
    ) -> list[TaskResult]:
        return await self.task_repo.list_by_department(
            company_id, department_id, public_only=True, unclaimed_only=unclaimed_only
        )

    async def list_public_company_tasks(
        self, company_id: str, unclaimed_only: bool = False
    ) -> list[TaskResult]:
        return await self.task_repo.list_company(
            company_id, public_only=True, unclaimed_only=unclaimed_only
        )

    async def list_history(
        self, company_id: str, task_id: str
    ) -> list[TaskHistoryResult]:
        """History of a task in chronological order."""
        await self.get_task(company_id, task_id)
        return await self.history.list_history(task_id)
