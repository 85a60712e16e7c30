"""TaskTimeLog ORM model. One row per timer run; ended_at NULL means open."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import CuidMixin


class TaskTimeLog(CuidMixin, Base):
    """Timer run. Table: task_time_log. At most one open row per (task, user)."""

    __tablename__ = "task_time_log"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    ended_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_task_time_log_task", "task_id", "started_at"),
        Index(
            "uq_task_time_log_open",
            "task_id",
            "user_id",
            unique=True,
            postgresql_where=text("ended_at IS NULL"),
            sqlite_where=text("ended_at IS NULL"),
        ),
    )
