"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from worktrack.application.dtos.collaboration import (
        AttachmentCreate,
        AttachmentResult,
        CommentResult,
    )
    from worktrack.application.dtos.history import TaskHistoryResult
    from worktrack.application.dtos.task import TaskCreate, TaskResult
    from worktrack.application.dtos.time_log import TimeLogResult
    from worktrack.application.dtos.transfer import TransferCreate, TransferResult


class ITaskRepository(Protocol):
    """Protocol for task repository."""

    async def create_task(
        self,
        company_id: str,
        created_by: str,
        data: TaskCreate,
        *,
        assignee_id: str | None,
        created_at: datetime,
    ) -> TaskResult:
        """Insert a task in status todo."""

    async def get_task(self, company_id: str, task_id: str) -> TaskResult | None:
        """Return the task if it exists in the company."""

    async def update_fields(
        self, company_id: str, task_id: str, values: Mapping[str, Any]
    ) -> TaskResult | None:
        """Apply column values; None if the task is missing."""

    async def delete_task(self, company_id: str, task_id: str) -> bool:
        """Delete the task and its dependent rows; False if missing."""

    async def list_personal(self, company_id: str, user_id: str) -> list[TaskResult]:
        """Tasks assigned or delegated to the user."""

    async def list_by_department(
        self,
        company_id: str,
        department_id: str,
        *,
        public_only: bool = False,
        unclaimed_only: bool = False,
    ) -> list[TaskResult]:
        """Department tasks of one department."""

    async def list_company(
        self,
        company_id: str,
        *,
        public_only: bool = False,
        unclaimed_only: bool = False,
    ) -> list[TaskResult]:
        """Company-scoped tasks."""

    async def try_start_timer(
        self, company_id: str, task_id: str, started_at: datetime
    ) -> bool:
        """Set the running flag if off. True if this caller set it."""

    async def finish_timer(
        self,
        company_id: str,
        task_id: str,
        total_time_minutes: int,
        stopped_at: datetime,
    ) -> None:
        """Clear the running fields and store the total."""

    async def claim_public_task(
        self,
        company_id: str,
        task_id: str,
        claimant_id: str,
        accepted_at: datetime,
    ) -> str | None:
        """Atomically claim the task. The replaced status if this caller won, else None."""


class ITaskHistoryRepository(Protocol):
    """Protocol for the append-only history store."""

    async def append(
        self,
        task_id: str,
        action: str,
        changed_by: str,
        changed_at: datetime,
        *,
        field_changed: str | None = None,
        old_value: str | None = None,
        new_value: str | None = None,
    ) -> TaskHistoryResult:
        """Append one entry."""

    async def list_for_task(self, task_id: str) -> list[TaskHistoryResult]:
        """Entries oldest first."""


class ITaskTimeLogRepository(Protocol):
    """Protocol for timer runs."""

    async def create_open(
        self, task_id: str, user_id: str, started_at: datetime
    ) -> TimeLogResult:
        """Insert an open run."""

    async def get_latest_open(self, task_id: str, user_id: str) -> TimeLogResult | None:
        """Most recent open run for (task, user)."""

    async def close(
        self,
        log_id: str,
        ended_at: datetime,
        duration_minutes: int,
        description: str | None,
    ) -> TimeLogResult | None:
        """Close the run if still open; None if another request closed it."""

    async def sum_closed_minutes(self, task_id: str) -> int:
        """Sum of duration_minutes over closed runs."""

    async def list_for_task(self, task_id: str) -> list[TimeLogResult]:
        """Runs newest first."""


class ITaskTransferRepository(Protocol):
    """Protocol for transfer requests."""

    async def create_pending(
        self, company_id: str, data: TransferCreate
    ) -> TransferResult:
        """Insert a pending transfer."""

    async def get_transfer(
        self, company_id: str, transfer_id: str
    ) -> TransferResult | None:
        """Return the transfer if it exists in the company."""

    async def respond_if_pending(
        self,
        company_id: str,
        transfer_id: str,
        status: str,
        responded_at: datetime,
        response_reason: str | None,
    ) -> bool:
        """Move to a terminal status if still pending. True if this caller did."""

    async def list_pending_for(
        self, company_id: str, user_id: str
    ) -> list[TransferResult]:
        """Pending transfers addressed to the user."""

    async def list_history_for(
        self, company_id: str, user_id: str
    ) -> list[TransferResult]:
        """Transfers involving the user."""


class ITaskCommentRepository(Protocol):
    async def add(
        self, task_id: str, content: str, created_by: str, created_at: datetime
    ) -> CommentResult:
        """Insert a comment."""

    async def list_for_task(self, task_id: str) -> list[CommentResult]:
        """Comments oldest first."""


class ITaskAttachmentRepository(Protocol):
    async def add(
        self,
        task_id: str,
        data: AttachmentCreate,
        uploaded_by: str,
        uploaded_at: datetime,
    ) -> AttachmentResult:
        """Insert attachment metadata."""

    async def list_for_task(self, task_id: str) -> list[AttachmentResult]:
        """Attachments newest first."""
