"""TaskComment and TaskAttachment ORM models."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)


class TaskComment(CuidMixin, TimestampMixin, Base):
    """Comment on a task. Table: task_comment."""

    __tablename__ = "task_comment"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (Index("ix_task_comment_task", "task_id", "created_at"),)


class TaskAttachment(CuidMixin, Base):
    """Attachment metadata. Table: task_attachment. File bytes live in external storage."""

    __tablename__ = "task_attachment"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    file_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    uploaded_by: Mapped[str] = mapped_column(String, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (Index("ix_task_attachment_task", "task_id", "uploaded_at"),)
