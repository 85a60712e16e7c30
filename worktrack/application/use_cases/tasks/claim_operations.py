"""Public claim: let one eligible member take an unassigned public task."""

from __future__ import annotations

from worktrack.application.dtos.task import TaskResult
from worktrack.application.interfaces.repositories import ITaskRepository
from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.domain.enums import HistoryAction, Permission, TaskStatus, TaskType
from worktrack.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
)
from worktrack.shared.telemetry.logging import get_logger
from worktrack.shared.utils.datetime import Clock, utc_now

logger = get_logger(__name__)


def _is_open_for_claim(task: TaskResult) -> bool:
    return (
        task.is_public
        and task.assignee_id is None
        and task.accepted_by is None
        and TaskType(task.task_type).is_claimable_scope
    )


class PublicClaimService:
    """Resolves concurrent claims on public tasks with at most one winner.

    The decision is made by a single conditional UPDATE in the repository
    (precondition and eligibility in one WHERE clause). The repository also
    returns the status the claim replaced, read under the row lock, which is
    what history records. Status changes by others before the claim do not
    make it fail; only a task that is no longer public and unclaimed does.
    Losing is a normal outcome and writes nothing.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        history: HistoryRecorder,
        permission_gate: PermissionGate,
        clock: Clock = utc_now,
    ) -> None:
        self.task_repo = task_repo
        self.history = history
        self.permission_gate = permission_gate
        self.clock = clock

    async def accept_public_task(
        self, company_id: str, task_id: str, claimant_id: str
    ) -> TaskResult:
        """Claim the task for claimant_id and move it to in_progress.

        Raises:
            ResourceNotFoundException: task does not exist in the company.
            ConflictException: task is not (or no longer) open for claiming.
            AuthorizationException: claimant lacks accept_public_tasks or is
                not an active member of the task's department/company.
        """
        await self.permission_gate.require_permission(
            claimant_id, company_id, Permission.ACCEPT_PUBLIC_TASKS
        )
        if await self.task_repo.get_task(company_id, task_id) is None:
            raise ResourceNotFoundException("task", task_id)

        now = self.clock()
        previous_status = await self.task_repo.claim_public_task(
            company_id, task_id, claimant_id, now
        )
        if previous_status is None:
            await self._raise_claim_failure(company_id, task_id, claimant_id)

        await self.history.append(
            task_id,
            HistoryAction.STATUS_CHANGED,
            claimant_id,
            now,
            old_value=previous_status,
            new_value=TaskStatus.IN_PROGRESS.value,
            field_changed="status",
        )
        logger.info("Public task claimed: task=%s by=%s", task_id, claimant_id)
        claimed = await self.task_repo.get_task(company_id, task_id)
        if claimed is None:
            raise ResourceNotFoundException("task", task_id)
        return claimed

    async def _raise_claim_failure(
        self, company_id: str, task_id: str, claimant_id: str
    ) -> None:
        """Explain a lost claim from a fresh read. Read-only."""
        current = await self.task_repo.get_task(company_id, task_id)
        if current is None:
            raise ResourceNotFoundException("task", task_id)
        if not _is_open_for_claim(current):
            logger.debug(
                "Public claim conflict: task=%s claimant=%s accepted_by=%s",
                task_id,
                claimant_id,
                current.accepted_by,
            )
            raise ConflictException(
                "Task is not available to claim", "task", task_id
            )
        logger.info(
            "Public claim rejected, claimant not eligible: task=%s claimant=%s",
            task_id,
            claimant_id,
        )
        raise AuthorizationException(
            resource="task",
            action="claim",
        )
