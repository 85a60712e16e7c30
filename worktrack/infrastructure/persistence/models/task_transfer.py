"""TaskTransfer ORM model. Ownership transfer or delegation request."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from worktrack.domain.enums import TransferStatus, TransferType
from worktrack.infrastructure.persistence.database import Base
from worktrack.infrastructure.persistence.models.mixins import (
    CompanyMixin,
    CuidMixin,
    values_check,
)


class TaskTransfer(CuidMixin, CompanyMixin, Base):
    """Transfer request. Table: task_transfer. Terminal once status is not pending."""

    __tablename__ = "task_transfer"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    from_user_id: Mapped[str] = mapped_column(String, nullable=False)
    to_user_id: Mapped[str] = mapped_column(String, nullable=False)
    transfer_type: Mapped[str] = mapped_column(String(16), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=TransferStatus.PENDING.value
    )
    requested_by: Mapped[str] = mapped_column(String, nullable=False)
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    responded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    response_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_task_transfer_recipient", "company_id", "to_user_id", "status"),
        Index("ix_task_transfer_task", "task_id"),
        values_check("transfer_type", TransferType.values(), "task_transfer_type_check"),
        values_check("status", TransferStatus.values(), "task_transfer_status_check"),
    )
