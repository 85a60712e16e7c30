"""Task transfer repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.application.dtos.transfer import TransferCreate, TransferResult
from worktrack.domain.enums import TransferStatus
from worktrack.infrastructure.persistence.models.task_transfer import TaskTransfer
from worktrack.infrastructure.persistence.repositories.base import BaseRepository
from worktrack.shared.utils.datetime import ensure_utc


def _to_result(t: TaskTransfer) -> TransferResult:
    return TransferResult(
        id=t.id,
        company_id=t.company_id,
        task_id=t.task_id,
        from_user_id=t.from_user_id,
        to_user_id=t.to_user_id,
        transfer_type=t.transfer_type,
        reason=t.reason,
        status=t.status,
        requested_by=t.requested_by,
        requested_at=ensure_utc(t.requested_at),
        responded_at=ensure_utc(t.responded_at),
        response_reason=t.response_reason,
    )


class TaskTransferRepository(BaseRepository[TaskTransfer]):
    """Transfer repository. Implements ITaskTransferRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskTransfer)

    async def create_pending(
        self, company_id: str, data: TransferCreate
    ) -> TransferResult:
        transfer = await self.create(
            TaskTransfer(
                company_id=company_id,
                task_id=data.task_id,
                from_user_id=data.from_user_id,
                to_user_id=data.to_user_id,
                transfer_type=data.transfer_type,
                reason=data.reason,
                status=TransferStatus.PENDING.value,
                requested_by=data.requested_by,
                requested_at=data.requested_at,
            )
        )
        return _to_result(transfer)

    async def get_transfer(
        self, company_id: str, transfer_id: str
    ) -> TransferResult | None:
        result = await self.db.execute(
            select(TaskTransfer)
            .where(
                TaskTransfer.id == transfer_id,
                TaskTransfer.company_id == company_id,
            )
            .execution_options(populate_existing=True)
        )
        transfer = result.scalar_one_or_none()
        return _to_result(transfer) if transfer else None

    async def respond_if_pending(
        self,
        company_id: str,
        transfer_id: str,
        status: str,
        responded_at: datetime,
        response_reason: str | None,
    ) -> bool:
        """Move a pending transfer to a terminal status (optimistic lock).

        Returns True if exactly one row was updated; False if the transfer was
        no longer pending (another response won).
        """
        result = await self.db.execute(
            update(TaskTransfer)
            .where(
                TaskTransfer.id == transfer_id,
                TaskTransfer.company_id == company_id,
                TaskTransfer.status == TransferStatus.PENDING.value,
            )
            .values(
                status=status,
                responded_at=responded_at,
                response_reason=response_reason,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_pending_for(
        self, company_id: str, user_id: str
    ) -> list[TransferResult]:
        """Pending transfers addressed to the user, newest first."""
        result = await self.db.execute(
            select(TaskTransfer)
            .where(
                TaskTransfer.company_id == company_id,
                TaskTransfer.to_user_id == user_id,
                TaskTransfer.status == TransferStatus.PENDING.value,
            )
            .order_by(TaskTransfer.requested_at.desc(), TaskTransfer.id)
            .execution_options(populate_existing=True)
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def list_history_for(
        self, company_id: str, user_id: str
    ) -> list[TransferResult]:
        """Transfers the user sent, received or requested, newest first."""
        result = await self.db.execute(
            select(TaskTransfer)
            .where(
                TaskTransfer.company_id == company_id,
                or_(
                    TaskTransfer.from_user_id == user_id,
                    TaskTransfer.to_user_id == user_id,
                    TaskTransfer.requested_by == user_id,
                ),
            )
            .order_by(TaskTransfer.requested_at.desc(), TaskTransfer.id)
            .execution_options(populate_existing=True)
        )
        return [_to_result(t) for t in result.scalars().all()]
