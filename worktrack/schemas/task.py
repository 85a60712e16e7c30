"""Task API schemas: tasks, status, timer, comments and attachments."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from worktrack.domain.enums import TaskPriority, TaskStatus, TaskType


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=1, max_length=500)
    task_type: TaskType
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    department_id: str | None = None
    assignee_id: str | None = None
    due_date: date | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None
    is_public: bool = False


class TaskUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are applied.

    task_type, department_id, company_id and created_by are immutable and
    rejected as unknown fields.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assignee_id: str | None = None
    due_date: date | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None
    is_public: bool | None = None


class StatusChangeRequest(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    """Task with claim, timer and transfer provenance fields."""

    model_config = ConfigDict(from_attributes=True)

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


class TimerStopRequest(BaseModel):
    description: str | None = Field(default=None, max_length=2000)


class TimeLogResponse(BaseModel):
    """One timer run. ended_at and duration_minutes are null while it runs."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    user_id: str
    started_at: datetime
    ended_at: datetime | None
    duration_minutes: int | None
    description: str | None


class TimerStopResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time_log: TimeLogResponse
    total_time_minutes: int


class CommentCreateRequest(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    content: str
    created_by: str
    created_at: datetime
    updated_at: datetime


class AttachmentCreateRequest(BaseModel):
    """Metadata for a file already stored elsewhere (no binary upload here)."""

    file_name: str = Field(..., min_length=1, max_length=255)
    file_url: str = Field(..., min_length=1)
    file_size: int | None = Field(default=None, ge=0)
    file_type: str | None = Field(default=None, max_length=255)


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    file_name: str
    file_url: str
    file_size: int | None
    file_type: str | None
    uploaded_by: str
    uploaded_at: datetime
