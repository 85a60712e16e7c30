"""DTOs for task use cases (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass
from datetime import date, datetime

from worktrack.domain.enums import TaskPriority, TaskType


@dataclass(frozen=True)
class TaskCreate:
    """Input for creating a task. Service validates; repo persists and returns TaskResult."""

    title: str
    task_type: TaskType
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    department_id: str | None = None
    assignee_id: str | None = None
    due_date: date | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None
    is_public: bool = False


@dataclass(frozen=True)
class TaskResult:
    """Task read-model."""

    id: str
    company_id: str
    title: str
    description: str | None
    status: str
    priority: str
    task_type: str
    department_id: str | None
    created_by: str
    assignee_id: str | None
    due_date: date | None
    estimated_hours: float | None
    actual_hours: float | None
    is_public: bool
    accepted_by: str | None
    accepted_at: datetime | None
    is_timer_running: bool
    current_timer_start: datetime | None
    total_time_minutes: int
    delegated_by: str | None
    delegate_id: str | None
    delegated_at: datetime | None
    previous_assignee_id: str | None
    transfer_reason: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def is_claimed(self) -> bool:
        return self.accepted_by is not None
