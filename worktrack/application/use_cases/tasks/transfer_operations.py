"""Transfer / delegation workflow: request, respond, and list transfers."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from worktrack.application.dtos.transfer import TransferCreate, TransferResult
from worktrack.application.interfaces.repositories import (
    ITaskRepository,
    ITaskTransferRepository,
)
from worktrack.application.interfaces.services import IMembershipOracle
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.domain.enums import (
    MembershipScope,
    Permission,
    TransferAction,
    TransferStatus,
    TransferType,
)
from worktrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from worktrack.shared.telemetry.logging import get_logger
from worktrack.shared.utils.datetime import Clock, utc_now

logger = get_logger(__name__)


def _clean(text: str | None) -> str | None:
    return text.strip() if text and text.strip() else None


class TransferService:
    """Pending -> accepted | rejected. Responses are terminal.

    Accepting a transfer reassigns the task. Accepting a delegation keeps the
    assignee of record and adds the recipient as delegate (delegate_id), so
    the task shows up in the delegate's personal list too.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        transfer_repo: ITaskTransferRepository,
        membership: IMembershipOracle,
        permission_gate: PermissionGate,
        clock: Clock = utc_now,
    ) -> None:
        self.task_repo = task_repo
        self.transfer_repo = transfer_repo
        self.membership = membership
        self.permission_gate = permission_gate
        self.clock = clock

    async def create_transfer(
        self,
        company_id: str,
        task_id: str,
        to_user_id: str,
        transfer_type: TransferType,
        reason: str | None,
        requested_by: str,
    ) -> TransferResult:
        """Open a pending transfer from the current owner to to_user_id.

        The sender is the task's assignee, or its creator when unassigned.
        """
        await self.permission_gate.require_permission(
            requested_by, company_id, Permission.ASSIGN_TASKS
        )
        task = await self.task_repo.get_task(company_id, task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)

        from_user_id = task.assignee_id or task.created_by
        if to_user_id == from_user_id:
            raise ValidationException(
                "Cannot transfer a task to its current owner", field="to_user_id"
            )
        if not await self.membership.is_active_member(
            MembershipScope.COMPANY, company_id, to_user_id
        ):
            raise ValidationException(
                "Recipient is not an active member of this company", field="to_user_id"
            )

        transfer = await self.transfer_repo.create_pending(
            company_id,
            TransferCreate(
                task_id=task_id,
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                transfer_type=TransferType(transfer_type).value,
                reason=_clean(reason),
                requested_by=requested_by,
                requested_at=self.clock(),
            ),
        )
        logger.info(
            "Transfer requested: id=%s task=%s type=%s from=%s to=%s",
            transfer.id,
            task_id,
            transfer.transfer_type,
            from_user_id,
            to_user_id,
        )
        return transfer

    async def respond_to_transfer(
        self,
        company_id: str,
        transfer_id: str,
        action: TransferAction,
        response_reason: str | None,
        acting_user_id: str,
    ) -> TransferResult:
        """Accept or reject a pending transfer addressed to acting_user_id.

        Raises:
            ResourceNotFoundException: unknown transfer.
            AuthorizationException: not the recipient, or lacks edit_tasks.
            ConflictException: already answered (including by a concurrent response).
            ValidationException: reject without a reason.
        """
        action = TransferAction(action)
        transfer = await self.transfer_repo.get_transfer(company_id, transfer_id)
        if transfer is None:
            raise ResourceNotFoundException("transfer", transfer_id)
        if transfer.to_user_id != acting_user_id:
            raise AuthorizationException(
                resource="transfer",
                action="respond",
            )
        await self.permission_gate.require_permission(
            acting_user_id, company_id, Permission.EDIT_TASKS
        )
        if transfer.status != TransferStatus.PENDING.value:
            raise ConflictException(
                f"Transfer already {transfer.status}", "transfer", transfer_id
            )
        reason = _clean(response_reason)
        if action == TransferAction.REJECT and reason is None:
            raise ValidationException(
                "A reason is required to reject a transfer", field="response_reason"
            )

        now = self.clock()
        new_status = (
            TransferStatus.ACCEPTED
            if action == TransferAction.ACCEPT
            else TransferStatus.REJECTED
        )
        if not await self.transfer_repo.respond_if_pending(
            company_id, transfer_id, new_status.value, now, reason
        ):
            logger.info("Transfer response lost race: id=%s", transfer_id)
            raise ConflictException("Transfer already answered", "transfer", transfer_id)

        if new_status == TransferStatus.ACCEPTED:
            await self._apply_to_task(company_id, transfer, now)
        logger.info(
            "Transfer %s: id=%s task=%s by=%s",
            new_status.value,
            transfer_id,
            transfer.task_id,
            acting_user_id,
        )
        updated = await self.transfer_repo.get_transfer(company_id, transfer_id)
        if updated is None:
            raise ResourceNotFoundException("transfer", transfer_id)
        return updated

    async def _apply_to_task(
        self, company_id: str, transfer: TransferResult, now: datetime
    ) -> None:
        task = await self.task_repo.get_task(company_id, transfer.task_id)
        if task is None:
            raise ResourceNotFoundException("task", transfer.task_id)
        if transfer.transfer_type == TransferType.TRANSFER.value:
            values: dict[str, Any] = {
                "previous_assignee_id": task.assignee_id,
                "assignee_id": transfer.to_user_id,
                "transfer_reason": transfer.reason,
            }
        else:
            values = {
                "delegated_by": transfer.from_user_id,
                "delegate_id": transfer.to_user_id,
                "delegated_at": now,
            }
        values["updated_at"] = now
        await self.task_repo.update_fields(company_id, transfer.task_id, values)

    async def list_pending_transfers_for(
        self, company_id: str, user_id: str
    ) -> list[TransferResult]:
        return await self.transfer_repo.list_pending_for(company_id, user_id)

    async def list_transfer_history(
        self, company_id: str, user_id: str
    ) -> list[TransferResult]:
        return await self.transfer_repo.list_history_for(company_id, user_id)
