"""Task ORM model. Personal, department or company work item."""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from worktrack.domain.enums import TaskPriority, TaskStatus, TaskType
from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import (
    MultiCompanyModel,
    values_check,
)


class Task(MultiCompanyModel, Base):
    """Work item. Table: task.

    User id columns are plain strings; identity lives outside this service.
    accepted_by/accepted_at are written only by the public claim UPDATE.
    """

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaskStatus.TODO.value
    )
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=TaskPriority.MEDIUM.value
    )
    task_type: Mapped[str] = mapped_column(String(16), nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="CASCADE"), nullable=True
    )
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    assignee_id: Mapped[str | None] = mapped_column(String, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    estimated_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Public claim
    accepted_by: Mapped[str | None] = mapped_column(String, nullable=True)
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Timer
    is_timer_running: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    current_timer_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    total_time_minutes: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    # Transfer / delegation provenance
    delegated_by: Mapped[str | None] = mapped_column(String, nullable=True)
    delegate_id: Mapped[str | None] = mapped_column(String, nullable=True)
    delegated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    previous_assignee_id: Mapped[str | None] = mapped_column(String, nullable=True)
    transfer_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_task_company_type", "company_id", "task_type"),
        Index("ix_task_company_assignee", "company_id", "assignee_id"),
        Index("ix_task_company_department", "company_id", "department_id"),
        values_check("status", TaskStatus.values(), "task_status_check"),
        values_check("priority", TaskPriority.values(), "task_priority_check"),
        values_check("task_type", TaskType.values(), "task_type_check"),
    )
