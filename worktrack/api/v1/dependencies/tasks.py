"""Task service dependencies (composition root).

Write services share the request's transactional session so the mutation
and its history entries commit or roll back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.application.services.history_recorder import HistoryRecorder
from worktrack.application.services.permission_gate import PermissionGate
from worktrack.application.use_cases.tasks import (
    CollaborationService,
    PublicClaimService,
    TaskService,
    TimerService,
    TransferService,
)
from worktrack.core.config import get_settings
from worktrack.infrastructure.persistence.database import get_db, get_db_transactional
from worktrack.infrastructure.persistence.repositories import (
    MembershipRepository,
    TaskAttachmentRepository,
    TaskCommentRepository,
    TaskHistoryRepository,
    TaskRepository,
    TaskTimeLogRepository,
    TaskTransferRepository,
)
from worktrack.infrastructure.services import PermissionResolver


def _permission_gate(request: Request, db: AsyncSession) -> PermissionGate:
    """Gate backed by the DB resolver and app.state.cache (None when Redis is off)."""
    return PermissionGate(
        PermissionResolver(db),
        cache=getattr(request.app.state, "cache", None),
        cache_ttl=get_settings().cache_ttl_permissions,
    )


def _task_service(request: Request, db: AsyncSession) -> TaskService:
    return TaskService(
        task_repo=TaskRepository(db),
        history=HistoryRecorder(TaskHistoryRepository(db)),
        permission_gate=_permission_gate(request, db),
        membership=MembershipRepository(db),
    )


async def get_task_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskService:
    """TaskService for mutations (transactional)."""
    return _task_service(request, db)


async def get_task_query_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskService:
    """TaskService for read-only routes."""
    return _task_service(request, db)


async def get_timer_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TimerService:
    return TimerService(
        task_repo=TaskRepository(db),
        time_log_repo=TaskTimeLogRepository(db),
        history=HistoryRecorder(TaskHistoryRepository(db)),
        permission_gate=_permission_gate(request, db),
    )


async def get_claim_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PublicClaimService:
    return PublicClaimService(
        task_repo=TaskRepository(db),
        history=HistoryRecorder(TaskHistoryRepository(db)),
        permission_gate=_permission_gate(request, db),
    )


async def get_transfer_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TransferService:
    return TransferService(
        task_repo=TaskRepository(db),
        transfer_repo=TaskTransferRepository(db),
        membership=MembershipRepository(db),
        permission_gate=_permission_gate(request, db),
    )


async def get_collaboration_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> CollaborationService:
    return CollaborationService(
        task_repo=TaskRepository(db),
        comment_repo=TaskCommentRepository(db),
        attachment_repo=TaskAttachmentRepository(db),
        history=HistoryRecorder(TaskHistoryRepository(db)),
        permission_gate=_permission_gate(request, db),
    )
