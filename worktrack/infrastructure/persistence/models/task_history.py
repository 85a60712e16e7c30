"""TaskHistory ORM model. Append-only audit of task changes."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from worktrack.domain.enums import HistoryAction
from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import values_check


class TaskHistory(Base):
    """History entry. Table: task_history. Integer id breaks changed_at ties."""

    __tablename__ = "task_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    field_changed: Mapped[str | None] = mapped_column(String(64), nullable=True)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    changed_by: Mapped[str] = mapped_column(String, nullable=False)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_task_history_task_changed", "task_id", "changed_at", "id"),
        values_check("action", HistoryAction.values(), "task_history_action_check"),
    )
